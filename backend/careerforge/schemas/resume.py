from __future__ import annotations

from datetime import datetime

from careerforge.schemas.base import CamelModel, PartialUpdate


class InsertResume(CamelModel):
    title: str
    content: str


class ResumeUpdate(PartialUpdate):
    title: str | None = None
    content: str | None = None


class ResumeOut(CamelModel):
    id: int
    user_id: str
    title: str
    content: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class WorkExperience(CamelModel):
    company: str
    role: str
    start: str
    end: str
    description: str


class Education(CamelModel):
    school: str
    degree: str
    start: str
    end: str


class Certification(CamelModel):
    name: str
    issuer: str
    date: str


class ResumeGenerateRequest(CamelModel):
    full_name: str
    email: str
    phone: str
    address: str
    job_title: str
    skills: str
    hobbies: str | None = None
    work_experience: list[WorkExperience]
    education: list[Education]
    certifications: list[Certification] | None = None
    target_job_description: str | None = None


class GeneratedContent(CamelModel):
    content: str


class ResumeOptimizeRequest(CamelModel):
    existing_resume: str
    target_job_description: str


class ResumeOptimizeResponse(CamelModel):
    analysis: str
    suggestions: str
