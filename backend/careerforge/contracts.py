"""Declarative registry of every API operation.

Each ``ContractEntry`` names one operation and carries its HTTP method, URL
template, request model and response schemas by status code. The server
registers its routes from these entries and the client validates traffic
against them, so both sides agree on wire shapes without repeating them.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, TypeAdapter

from careerforge.schemas import (
    AuthUserOut,
    CoverLetterGenerateRequest,
    CoverLetterOut,
    CoverLetterUpdate,
    EmptyRequest,
    GeneratedContent,
    InsertCoverLetter,
    InsertResume,
    InternalErrorOut,
    InterviewEvaluateRequest,
    InterviewEvaluationOut,
    InterviewGenerateRequest,
    InterviewQuestionsOut,
    JobFetchRequest,
    JobPostingOut,
    LinkedInOptimizeRequest,
    LinkedInProfileOut,
    MessageOut,
    PaymentResultOut,
    PayPalCaptureRequest,
    PayPalOrderOut,
    ResumeGenerateRequest,
    ResumeOptimizeRequest,
    ResumeOptimizeResponse,
    ResumeOut,
    ResumeUpdate,
    StripeIntentOut,
    StripeVerifyRequest,
    ValidationErrorOut,
)


CONTRACT_VERSION = "1"

_PLACEHOLDER = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


@dataclass(frozen=True)
class ContractEntry:
    name: str
    method: str
    path: str
    responses: Mapping[int, Any]
    input: type[BaseModel] | None = None

    @property
    def route_path(self) -> str:
        """The URL template in ``{param}`` form, as routers expect it."""
        return _PLACEHOLDER.sub(r"{\1}", self.path)

    @property
    def path_params(self) -> tuple[str, ...]:
        return tuple(_PLACEHOLDER.findall(self.path))

    @property
    def success_status(self) -> int:
        return min(code for code in self.responses if 200 <= code < 300)

    def url(self, **params: Any) -> str:
        return build_url(self.path, params)

    def parse_input(self, data: Any) -> BaseModel:
        if self.input is None:
            raise TypeError(f"{self.name} does not accept a request body")
        if isinstance(data, self.input):
            return data
        return self.input.model_validate(data)

    def parse_response(self, status_code: int, data: Any) -> Any:
        schema = self.responses[status_code]
        if schema is None:
            return None
        return TypeAdapter(schema).validate_python(data)


def build_url(path: str, params: Mapping[str, Any] | None = None) -> str:
    """Fill ``:name`` placeholders in ``path``; missing keys stay as they are."""
    url = path
    for key, value in (params or {}).items():
        placeholder = f":{key}"
        if placeholder in url:
            replacement = str(value)
            url = re.sub(rf":{re.escape(key)}(?![A-Za-z0-9_])", lambda _match: replacement, url)
    return url


def _auth(responses: dict[int, Any]) -> dict[int, Any]:
    return {**responses, 401: MessageOut}


_ENTRIES = (
    ContractEntry(
        name="resumes.list",
        method="GET",
        path="/api/resumes",
        responses=_auth({200: list[ResumeOut]}),
    ),
    ContractEntry(
        name="resumes.get",
        method="GET",
        path="/api/resumes/:id",
        responses=_auth({200: ResumeOut, 404: MessageOut}),
    ),
    ContractEntry(
        name="resumes.create",
        method="POST",
        path="/api/resumes",
        input=InsertResume,
        responses=_auth({201: ResumeOut, 400: ValidationErrorOut}),
    ),
    ContractEntry(
        name="resumes.update",
        method="PUT",
        path="/api/resumes/:id",
        input=ResumeUpdate,
        responses=_auth({200: ResumeOut, 400: ValidationErrorOut, 404: MessageOut}),
    ),
    ContractEntry(
        name="resumes.delete",
        method="DELETE",
        path="/api/resumes/:id",
        responses=_auth({204: None, 404: MessageOut}),
    ),
    ContractEntry(
        name="resumes.generate",
        method="POST",
        path="/api/resumes/generate",
        input=ResumeGenerateRequest,
        responses=_auth({200: GeneratedContent, 400: ValidationErrorOut, 500: InternalErrorOut}),
    ),
    ContractEntry(
        name="resumes.optimize",
        method="POST",
        path="/api/resumes/optimize",
        input=ResumeOptimizeRequest,
        responses=_auth({200: ResumeOptimizeResponse, 400: ValidationErrorOut, 500: InternalErrorOut}),
    ),
    ContractEntry(
        name="coverLetters.list",
        method="GET",
        path="/api/cover-letters",
        responses=_auth({200: list[CoverLetterOut]}),
    ),
    ContractEntry(
        name="coverLetters.get",
        method="GET",
        path="/api/cover-letters/:id",
        responses=_auth({200: CoverLetterOut, 404: MessageOut}),
    ),
    ContractEntry(
        name="coverLetters.create",
        method="POST",
        path="/api/cover-letters",
        input=InsertCoverLetter,
        responses=_auth({201: CoverLetterOut, 400: ValidationErrorOut}),
    ),
    ContractEntry(
        name="coverLetters.update",
        method="PUT",
        path="/api/cover-letters/:id",
        input=CoverLetterUpdate,
        responses=_auth({200: CoverLetterOut, 400: ValidationErrorOut, 404: MessageOut}),
    ),
    ContractEntry(
        name="coverLetters.delete",
        method="DELETE",
        path="/api/cover-letters/:id",
        responses=_auth({204: None, 404: MessageOut}),
    ),
    ContractEntry(
        name="coverLetters.generate",
        method="POST",
        path="/api/cover-letters/generate",
        input=CoverLetterGenerateRequest,
        responses=_auth({200: GeneratedContent, 400: ValidationErrorOut, 500: InternalErrorOut}),
    ),
    ContractEntry(
        name="jobs.fetch",
        method="POST",
        path="/api/jobs/fetch",
        input=JobFetchRequest,
        responses=_auth({200: JobPostingOut, 400: ValidationErrorOut, 500: InternalErrorOut}),
    ),
    ContractEntry(
        name="interview.generateQuestions",
        method="POST",
        path="/api/interview/generate",
        input=InterviewGenerateRequest,
        responses=_auth({200: InterviewQuestionsOut, 400: ValidationErrorOut, 500: InternalErrorOut}),
    ),
    ContractEntry(
        name="interview.evaluateAnswer",
        method="POST",
        path="/api/interview/evaluate",
        input=InterviewEvaluateRequest,
        responses=_auth({200: InterviewEvaluationOut, 400: ValidationErrorOut, 500: InternalErrorOut}),
    ),
    ContractEntry(
        name="linkedin.optimizeProfile",
        method="POST",
        path="/api/linkedin/optimize",
        input=LinkedInOptimizeRequest,
        responses=_auth({200: LinkedInProfileOut, 400: ValidationErrorOut, 500: InternalErrorOut}),
    ),
    ContractEntry(
        name="payments.createStripeIntent",
        method="POST",
        path="/api/payments/stripe/create-intent",
        input=EmptyRequest,
        responses=_auth({200: StripeIntentOut, 500: InternalErrorOut}),
    ),
    ContractEntry(
        name="payments.verifyStripePayment",
        method="POST",
        path="/api/payments/stripe/verify",
        input=StripeVerifyRequest,
        responses=_auth({200: PaymentResultOut, 400: ValidationErrorOut, 500: InternalErrorOut}),
    ),
    ContractEntry(
        name="payments.createPaypalOrder",
        method="POST",
        path="/api/payments/paypal/create-order",
        input=EmptyRequest,
        responses=_auth({200: PayPalOrderOut, 500: InternalErrorOut}),
    ),
    ContractEntry(
        name="payments.capturePaypalOrder",
        method="POST",
        path="/api/payments/paypal/capture-order",
        input=PayPalCaptureRequest,
        responses=_auth({200: PaymentResultOut, 400: ValidationErrorOut, 500: InternalErrorOut}),
    ),
    ContractEntry(
        name="auth.user",
        method="GET",
        path="/api/auth/user",
        responses=_auth({200: AuthUserOut}),
    ),
)

REGISTRY: Mapping[str, ContractEntry] = MappingProxyType({entry.name: entry for entry in _ENTRIES})


def get_contract(name: str) -> ContractEntry:
    return REGISTRY[name]


def _json_schema(schema: Any) -> dict[str, Any] | None:
    if schema is None:
        return None
    return TypeAdapter(schema).json_schema(by_alias=True)


def export_json_schema() -> dict[str, Any]:
    """Describe the registry as plain JSON for clients built outside Python."""
    operations = {}
    for entry in REGISTRY.values():
        operations[entry.name] = {
            "method": entry.method,
            "path": entry.path,
            "input": _json_schema(entry.input),
            "responses": {str(code): _json_schema(schema) for code, schema in sorted(entry.responses.items())},
        }
    return {"version": CONTRACT_VERSION, "operations": operations}


if __name__ == "__main__":
    print(json.dumps(export_json_schema(), indent=2))
