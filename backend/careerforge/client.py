"""Typed HTTP client bound to the contract registry.

Queries are cached per URL until a mutation on the same collection
invalidates them. Inputs are validated before they leave the process and
responses are validated against the schema the contract declares for the
returned status code.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from careerforge.contracts import ContractEntry, get_contract


logger = logging.getLogger(__name__)

TokenProvider = Callable[[], str | None]


class ApiError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ResponseValidationError(ApiError):
    pass


def _describe(errors: Iterable[Mapping[str, Any]]) -> str:
    parts = []
    for error in errors:
        path = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
        parts.append(f"{path}: {error.get('msg')}")
    return "; ".join(parts)


class QueryCache:
    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}

    def get(self, key: str) -> tuple[bool, Any]:
        if key in self._entries:
            return True, self._entries[key]
        return False, None

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = value

    def invalidate(self, prefix: str) -> None:
        for key in list(self._entries):
            if key == prefix or key.startswith(prefix.rstrip("/") + "/"):
                del self._entries[key]

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._entries


class CareerForgeClient:
    def __init__(
        self,
        base_url: str = "",
        token_provider: TokenProvider | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.token_provider = token_provider or (lambda: None)
        self.http_client = http_client or httpx.Client(base_url=base_url, timeout=120)
        self.cache = QueryCache()

    def _headers(self, with_body: bool) -> dict[str, str]:
        headers: dict[str, str] = {}
        token = self.token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _send(self, entry: ContractEntry, url: str, body: Any = None) -> httpx.Response:
        return self.http_client.request(
            entry.method,
            url,
            json=body,
            headers=self._headers(body is not None),
        )

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        message = response.reason_phrase or "Request failed"
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and payload.get("message"):
            message = str(payload["message"])
        elif response.text:
            message = response.text
        raise ApiError(response.status_code, message)

    def _validated(self, entry: ContractEntry, response: httpx.Response) -> Any:
        if response.status_code not in entry.responses:
            raise ResponseValidationError(
                response.status_code,
                f"{entry.name} returned undeclared status {response.status_code}",
            )
        if entry.responses[response.status_code] is None:
            return None
        try:
            return entry.parse_response(response.status_code, response.json())
        except ValidationError as exc:
            logger.error("%s response failed validation: %s", entry.name, _describe(exc.errors()))
            raise ResponseValidationError(
                response.status_code,
                f"{entry.name} response failed validation: {_describe(exc.errors())}",
            ) from exc

    def query(self, entry: ContractEntry, params: Mapping[str, Any] | None = None, *, refresh: bool = False) -> Any:
        url = entry.url(**(params or {}))
        if not refresh:
            hit, value = self.cache.get(url)
            if hit:
                return value

        response = self._send(entry, url)
        if response.status_code == 404 and entry.path_params:
            return None
        self._raise_for_status(response)
        value = self._validated(entry, response)
        self.cache.set(url, value)
        return value

    def mutate(
        self,
        entry: ContractEntry,
        data: Any = None,
        params: Mapping[str, Any] | None = None,
        *,
        invalidates: Iterable[str] = (),
    ) -> Any:
        body = None
        if entry.input is not None:
            validated = entry.parse_input(data if data is not None else {})
            body = validated.model_dump(mode="json", by_alias=True, exclude_unset=True)

        response = self._send(entry, entry.url(**(params or {})), body)
        self._raise_for_status(response)
        value = self._validated(entry, response)
        for path in invalidates:
            self.cache.invalidate(path)
        return value

    # Resumes

    def list_resumes(self) -> list[Any]:
        return self.query(get_contract("resumes.list"))

    def get_resume(self, resume_id: int) -> Any | None:
        return self.query(get_contract("resumes.get"), {"id": resume_id})

    def create_resume(self, data: Any) -> Any:
        return self.mutate(get_contract("resumes.create"), data, invalidates=[get_contract("resumes.list").path])

    def update_resume(self, resume_id: int, data: Any) -> Any:
        return self.mutate(
            get_contract("resumes.update"),
            data,
            {"id": resume_id},
            invalidates=[get_contract("resumes.list").path],
        )

    def delete_resume(self, resume_id: int) -> None:
        self.mutate(get_contract("resumes.delete"), params={"id": resume_id}, invalidates=[get_contract("resumes.list").path])

    def generate_resume(self, data: Any) -> Any:
        return self.mutate(get_contract("resumes.generate"), data)

    def optimize_resume(self, data: Any) -> Any:
        return self.mutate(get_contract("resumes.optimize"), data)

    # Cover letters

    def list_cover_letters(self) -> list[Any]:
        return self.query(get_contract("coverLetters.list"))

    def get_cover_letter(self, cover_letter_id: int) -> Any | None:
        return self.query(get_contract("coverLetters.get"), {"id": cover_letter_id})

    def create_cover_letter(self, data: Any) -> Any:
        return self.mutate(
            get_contract("coverLetters.create"),
            data,
            invalidates=[get_contract("coverLetters.list").path],
        )

    def update_cover_letter(self, cover_letter_id: int, data: Any) -> Any:
        return self.mutate(
            get_contract("coverLetters.update"),
            data,
            {"id": cover_letter_id},
            invalidates=[get_contract("coverLetters.list").path],
        )

    def delete_cover_letter(self, cover_letter_id: int) -> None:
        self.mutate(
            get_contract("coverLetters.delete"),
            params={"id": cover_letter_id},
            invalidates=[get_contract("coverLetters.list").path],
        )

    def generate_cover_letter(self, data: Any) -> Any:
        return self.mutate(get_contract("coverLetters.generate"), data)

    # Jobs, interview coach, LinkedIn

    def fetch_job(self, url: str) -> Any:
        return self.mutate(get_contract("jobs.fetch"), {"url": url})

    def generate_interview_questions(self, data: Any) -> Any:
        return self.mutate(get_contract("interview.generateQuestions"), data)

    def evaluate_interview_answer(self, data: Any) -> Any:
        return self.mutate(get_contract("interview.evaluateAnswer"), data)

    def optimize_linkedin(self, data: Any) -> Any:
        return self.mutate(get_contract("linkedin.optimizeProfile"), data)

    # Payments and session

    def current_user(self, refresh: bool = False) -> Any:
        return self.query(get_contract("auth.user"), refresh=refresh)

    def _unlock(self, name: str, data: Any = None) -> Any:
        return self.mutate(get_contract(name), data, invalidates=[get_contract("auth.user").path])

    def create_stripe_intent(self) -> Any:
        return self.mutate(get_contract("payments.createStripeIntent"), {})

    def verify_stripe_payment(self, payment_intent_id: str) -> Any:
        return self._unlock("payments.verifyStripePayment", {"paymentIntentId": payment_intent_id})

    def create_paypal_order(self) -> Any:
        return self.mutate(get_contract("payments.createPaypalOrder"), {})

    def capture_paypal_order(self, order_id: str) -> Any:
        return self._unlock("payments.capturePaypalOrder", {"orderID": order_id})
