from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from careerforge.auth import AuthenticatedUser, get_current_user
from careerforge.contracts import get_contract
from careerforge.database import get_db
from careerforge.schemas.auth import AuthUserOut
from careerforge.services.storage import premium_store


router = APIRouter()

USER = get_contract("auth.user")


@router.get(USER.route_path, response_model=USER.responses[200])
def current_user_profile(
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> AuthUserOut:
    return AuthUserOut(
        id=current_user.id,
        email=current_user.email,
        has_premium_export=premium_store.is_premium(db, current_user.id),
    )
