from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from careerforge.auth import AuthenticatedUser, get_current_user
from careerforge.contracts import get_contract
from careerforge.database import get_db
from careerforge.models.resume import Resume
from careerforge.providers import get_generator
from careerforge.schemas.resume import (
    GeneratedContent,
    InsertResume,
    ResumeGenerateRequest,
    ResumeOptimizeRequest,
    ResumeOptimizeResponse,
    ResumeUpdate,
)
from careerforge.services.generation import CareerGenerator, fallback_optimization
from careerforge.services.storage import resume_store


router = APIRouter()

LIST = get_contract("resumes.list")
GET = get_contract("resumes.get")
CREATE = get_contract("resumes.create")
UPDATE = get_contract("resumes.update")
DELETE = get_contract("resumes.delete")
GENERATE = get_contract("resumes.generate")
OPTIMIZE = get_contract("resumes.optimize")


@router.get(LIST.route_path, response_model=LIST.responses[200])
def list_resumes(
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> list[Resume]:
    return resume_store.list_for_user(db, current_user.id)


@router.post(GENERATE.route_path, response_model=GENERATE.responses[200])
def generate_resume(
    payload: ResumeGenerateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    generator: CareerGenerator = Depends(get_generator),
) -> GeneratedContent:
    return GeneratedContent(content=generator.generate_resume(payload))


@router.post(OPTIMIZE.route_path, response_model=OPTIMIZE.responses[200])
def optimize_resume(
    payload: ResumeOptimizeRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    generator: CareerGenerator = Depends(get_generator),
) -> ResumeOptimizeResponse:
    return generator.optimize_resume(payload).unwrap_or(fallback_optimization())


@router.get(GET.route_path, response_model=GET.responses[200])
def get_resume(
    id: int,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> Resume:
    resume = resume_store.get(db, id, current_user.id)
    if not resume:
        raise HTTPException(status_code=404, detail="Resume not found")
    return resume


@router.post(CREATE.route_path, response_model=CREATE.responses[201], status_code=status.HTTP_201_CREATED)
def create_resume(
    payload: InsertResume,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> Resume:
    return resume_store.create(db, current_user.id, payload.model_dump())


@router.put(UPDATE.route_path, response_model=UPDATE.responses[200])
def update_resume(
    id: int,
    payload: ResumeUpdate,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> Resume:
    resume = resume_store.update(db, id, current_user.id, payload.model_dump(exclude_unset=True))
    if not resume:
        raise HTTPException(status_code=404, detail="Resume not found")
    return resume


@router.delete(DELETE.route_path, status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_resume(
    id: int,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> Response:
    resume_store.delete(db, id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
