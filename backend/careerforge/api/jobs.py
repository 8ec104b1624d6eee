from __future__ import annotations

from fastapi import APIRouter, Depends

from careerforge.auth import AuthenticatedUser, get_current_user
from careerforge.contracts import get_contract
from careerforge.providers import get_generator, get_job_fetcher
from careerforge.schemas.job import JobFetchRequest, JobPostingOut
from careerforge.services.generation import CareerGenerator, fallback_job_posting
from careerforge.services.job_page import JobPageFetcher


router = APIRouter()

FETCH = get_contract("jobs.fetch")


@router.post(FETCH.route_path, response_model=FETCH.responses[200])
def fetch_job(
    payload: JobFetchRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    generator: CareerGenerator = Depends(get_generator),
    fetcher: JobPageFetcher = Depends(get_job_fetcher),
) -> JobPostingOut:
    url = str(payload.url)
    page_text = fetcher.fetch_text(url)
    return generator.extract_job_posting(url, page_text).unwrap_or(fallback_job_posting(page_text))
