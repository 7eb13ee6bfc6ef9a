"""Parsing of JSON-encoded arrays embedded in multipart form fields."""

from __future__ import annotations

from typing import Optional

from pydantic import TypeAdapter, ValidationError

from catalog.core.exceptions import FieldValidationError
from catalog.schemas.product import Instruction, Specification

_SPECIFICATIONS = TypeAdapter(list[Specification])
_INSTRUCTIONS = TypeAdapter(list[Instruction])


def _parse_json_list(field: str, raw: Optional[str], adapter: TypeAdapter) -> Optional[list]:
    if raw is None:
        return None
    if not raw.strip():
        return []
    try:
        return adapter.validate_json(raw)
    except ValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        reason = first.get("msg", "invalid value")
        if location:
            reason = f"{location}: {reason}"
        raise FieldValidationError(field, reason) from exc


def parse_specifications(raw: Optional[str]) -> Optional[list[Specification]]:
    """``None`` when the field was not sent, ``[]`` when sent blank."""
    return _parse_json_list("specifications", raw, _SPECIFICATIONS)


def parse_instructions(raw: Optional[str]) -> Optional[list[Instruction]]:
    return _parse_json_list("instructions", raw, _INSTRUCTIONS)
