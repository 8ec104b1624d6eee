"""Helpers for turning model output into validated structures."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError


T = TypeVar("T", bound=BaseModel)

_OPENING_FENCE = re.compile(r"^```[A-Za-z0-9_+-]*[ \t]*\n?")
_CLOSING_FENCE = re.compile(r"\n?[ \t]*```$")


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """Either a parsed ``value`` or the ``error`` explaining why parsing failed."""

    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.value is not None

    def unwrap_or(self, fallback: T) -> T:
        return self.value if self.value is not None else fallback


def strip_code_fences(text: str) -> str:
    """Remove a leading ```lang fence and a trailing ``` fence if present."""
    cleaned = _OPENING_FENCE.sub("", (text or "").strip(), count=1)
    return _CLOSING_FENCE.sub("", cleaned, count=1).strip()


def _load_object(text: str) -> dict:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end <= start:
            raise
        data = json.loads(text[start : end + 1])
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def parse_json_model(text: str, model: type[T]) -> ParseResult[T]:
    cleaned = strip_code_fences(text)
    if not cleaned:
        return ParseResult(error="empty response")
    try:
        data = _load_object(cleaned)
    except ValueError as exc:
        return ParseResult(error=f"invalid JSON: {exc}")
    try:
        return ParseResult(value=model.model_validate(data))
    except ValidationError as exc:
        return ParseResult(error=f"unexpected shape: {exc.errors()[0]['msg']}")
