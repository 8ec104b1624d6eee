from __future__ import annotations

from pydantic import AnyHttpUrl

from careerforge.schemas.base import CamelModel


class JobFetchRequest(CamelModel):
    url: AnyHttpUrl


class JobPostingOut(CamelModel):
    job_title: str
    company_name: str
    requirements: str
    description: str
