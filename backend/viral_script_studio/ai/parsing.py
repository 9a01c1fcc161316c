"""Turn raw model reply text into a validated reply model."""

from __future__ import annotations

import re
from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import EmptyResponseError, ParseError

ReplyT = TypeVar("ReplyT", bound=BaseModel)

# Only a fence wrapping the whole reply; fences inside JSON strings stay.
_WRAPPING_FENCE_RE = re.compile(r"^\s*```(?:json)?[ \t]*\n?(.*?)\n?```\s*$", re.DOTALL)


def strip_code_fences(text: str) -> str:
    match = _WRAPPING_FENCE_RE.match(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def parse_reply(text: str | None, model: Type[ReplyT]) -> ReplyT:
    if not text or not text.strip():
        raise EmptyResponseError("model returned no text")
    cleaned = strip_code_fences(text)
    if not cleaned:
        raise EmptyResponseError("model returned only code fences")
    try:
        return model.model_validate_json(cleaned)
    except ValidationError as exc:
        raise ParseError(f"reply does not match {model.__name__}: {exc}") from exc
