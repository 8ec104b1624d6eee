from __future__ import annotations

from pydantic import model_validator

from careerforge.schemas.base import CamelModel


class LinkedInOptimizeRequest(CamelModel):
    profile_or_resume_content: str | None = None
    linkedin_url: str | None = None

    @model_validator(mode="after")
    def _require_some_source(self) -> "LinkedInOptimizeRequest":
        if not (self.profile_or_resume_content or "").strip() and not (self.linkedin_url or "").strip():
            raise ValueError("Provide profile or resume content, or a LinkedIn URL")
        return self


class LinkedInProfileOut(CamelModel):
    headline: str
    summary: str
    experience_suggestions: list[str]
