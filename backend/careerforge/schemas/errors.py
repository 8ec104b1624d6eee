from __future__ import annotations

from pydantic import BaseModel


class MessageOut(BaseModel):
    message: str


class ValidationErrorOut(BaseModel):
    message: str
    field: str | None = None


class InternalErrorOut(BaseModel):
    message: str
    detail: str | None = None
