from __future__ import annotations

from fastapi import APIRouter, Depends

from careerforge.auth import AuthenticatedUser, get_current_user
from careerforge.contracts import get_contract
from careerforge.providers import get_generator
from careerforge.schemas.linkedin import LinkedInOptimizeRequest, LinkedInProfileOut
from careerforge.services.generation import CareerGenerator, fallback_linkedin


router = APIRouter()

OPTIMIZE_PROFILE = get_contract("linkedin.optimizeProfile")


@router.post(OPTIMIZE_PROFILE.route_path, response_model=OPTIMIZE_PROFILE.responses[200])
def optimize_profile(
    payload: LinkedInOptimizeRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    generator: CareerGenerator = Depends(get_generator),
) -> LinkedInProfileOut:
    return generator.optimize_linkedin(payload).unwrap_or(fallback_linkedin())
