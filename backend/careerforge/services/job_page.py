from __future__ import annotations

import logging
import re

import httpx
from bs4 import BeautifulSoup
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from careerforge.errors import JobFetchError


logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/122.0 Safari/537.36"
)
_NOISE_TAGS = ("script", "style", "noscript", "svg", "iframe", "header", "footer", "nav")


def extract_page_text(html: str, max_chars: int) -> str:
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(_NOISE_TAGS):
        tag.decompose()

    title = soup.title.get_text(" ", strip=True) if soup.title else ""
    body = soup.body or soup
    text = re.sub(r"\s+", " ", body.get_text(" ", strip=True)).strip()
    if title and not text.startswith(title):
        text = f"{title}\n{text}"
    return text[:max_chars]


class JobPageFetcher:
    def __init__(self, timeout: float = 15.0, max_chars: int = 15000, http_client: httpx.Client | None = None) -> None:
        self.max_chars = max_chars
        self.http_client = http_client or httpx.Client(timeout=timeout, follow_redirects=True)

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(min=0.5, max=4),
        reraise=True,
    )
    def _download(self, url: str) -> str:
        response = self.http_client.get(url, headers={"User-Agent": USER_AGENT})
        response.raise_for_status()
        return response.text

    def fetch_text(self, url: str) -> str:
        try:
            html = self._download(url)
        except httpx.HTTPError as exc:
            logger.warning("Job page download failed for %s: %s", url, exc)
            raise JobFetchError("Failed to fetch job details", detail=str(exc)) from exc

        text = extract_page_text(html, self.max_chars)
        if not text:
            raise JobFetchError("Failed to fetch job details", detail="page has no readable text")
        return text
