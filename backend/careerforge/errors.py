from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from careerforge.auth import get_current_user, get_identity_provider, security


logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """An upstream provider (AI, payments, job board) failed or is unavailable."""

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class GenerationError(ProviderError):
    pass


class JobFetchError(ProviderError):
    pass


class PaymentError(ProviderError):
    pass


def _field_path(loc: Sequence[Any]) -> str | None:
    parts = [str(part) for part in loc]
    if parts and parts[0] in {"body", "query", "path"}:
        parts = parts[1:]
    return ".".join(parts) or None


def first_validation_error(errors: Sequence[dict[str, Any]]) -> dict[str, Any]:
    if not errors:
        return {"message": "Invalid request"}
    first = errors[0]
    body: dict[str, Any] = {"message": first.get("msg", "Invalid request")}
    field = _field_path(first.get("loc", ()))
    if field:
        body["field"] = field
    return body


async def _malformed_body_response(request: Request) -> JSONResponse:
    # The body is parsed before route dependencies run, so authenticate here.
    credentials = await security(request)
    try:
        await run_in_threadpool(get_current_user, credentials, get_identity_provider(request))
    except StarletteHTTPException as auth_error:
        return await _http_exception_handler(request, auth_error)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": "Request body is not valid JSON"})


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    if any(error.get("type") == "json_invalid" for error in exc.errors()):
        return await _malformed_body_response(request)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=first_validation_error(exc.errors()))


async def _pydantic_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=first_validation_error(exc.errors()))


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = f"Route {request.method} {request.url.path} not found"
    else:
        message = str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"message": message}, headers=getattr(exc, "headers", None))


async def _provider_error_handler(request: Request, exc: ProviderError) -> JSONResponse:
    logger.error("%s %s failed upstream: %s (%s)", request.method, request.url.path, exc.message, exc.detail)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": exc.message, "detail": exc.detail},
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Internal Server Error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal Server Error", "detail": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(ValidationError, _pydantic_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(ProviderError, _provider_error_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
