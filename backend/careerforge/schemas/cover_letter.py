from __future__ import annotations

from datetime import datetime

from careerforge.schemas.base import CamelModel, PartialUpdate


class InsertCoverLetter(CamelModel):
    title: str
    content: str


class CoverLetterUpdate(PartialUpdate):
    title: str | None = None
    content: str | None = None


class CoverLetterOut(CamelModel):
    id: int
    user_id: str
    title: str
    content: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CoverLetterGenerateRequest(CamelModel):
    company_name: str
    job_role: str
    skills: str
    experience_summary: str
