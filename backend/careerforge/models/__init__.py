from careerforge.models.cover_letter import CoverLetter
from careerforge.models.resume import Resume
from careerforge.models.user_profile import UserProfile

__all__ = ["Resume", "CoverLetter", "UserProfile"]
