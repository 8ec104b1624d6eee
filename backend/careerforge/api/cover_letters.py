from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from careerforge.auth import AuthenticatedUser, get_current_user
from careerforge.contracts import get_contract
from careerforge.database import get_db
from careerforge.models.cover_letter import CoverLetter
from careerforge.providers import get_generator
from careerforge.schemas.cover_letter import CoverLetterGenerateRequest, CoverLetterUpdate, InsertCoverLetter
from careerforge.schemas.resume import GeneratedContent
from careerforge.services.generation import CareerGenerator
from careerforge.services.storage import cover_letter_store


router = APIRouter()

LIST = get_contract("coverLetters.list")
GET = get_contract("coverLetters.get")
CREATE = get_contract("coverLetters.create")
UPDATE = get_contract("coverLetters.update")
DELETE = get_contract("coverLetters.delete")
GENERATE = get_contract("coverLetters.generate")


@router.get(LIST.route_path, response_model=LIST.responses[200])
def list_cover_letters(
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> list[CoverLetter]:
    return cover_letter_store.list_for_user(db, current_user.id)


@router.post(GENERATE.route_path, response_model=GENERATE.responses[200])
def generate_cover_letter(
    payload: CoverLetterGenerateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    generator: CareerGenerator = Depends(get_generator),
) -> GeneratedContent:
    return GeneratedContent(content=generator.generate_cover_letter(payload))


@router.get(GET.route_path, response_model=GET.responses[200])
def get_cover_letter(
    id: int,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> CoverLetter:
    cover_letter = cover_letter_store.get(db, id, current_user.id)
    if not cover_letter:
        raise HTTPException(status_code=404, detail="Cover letter not found")
    return cover_letter


@router.post(CREATE.route_path, response_model=CREATE.responses[201], status_code=status.HTTP_201_CREATED)
def create_cover_letter(
    payload: InsertCoverLetter,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> CoverLetter:
    return cover_letter_store.create(db, current_user.id, payload.model_dump())


@router.put(UPDATE.route_path, response_model=UPDATE.responses[200])
def update_cover_letter(
    id: int,
    payload: CoverLetterUpdate,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> CoverLetter:
    cover_letter = cover_letter_store.update(db, id, current_user.id, payload.model_dump(exclude_unset=True))
    if not cover_letter:
        raise HTTPException(status_code=404, detail="Cover letter not found")
    return cover_letter


@router.delete(DELETE.route_path, status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_cover_letter(
    id: int,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> Response:
    cover_letter_store.delete(db, id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
