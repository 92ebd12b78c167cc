"""Input checks shared by the repositories."""

from __future__ import annotations
from typing import Any

from ..errors import ValidationError


def require_text(value: Any, field: str) -> str:
    """Return ``value`` stripped, or raise ValidationError if it is blank."""
    if value is None or not isinstance(value, str):
        raise ValidationError(field, "must be a string")
    text = value.strip()
    if not text:
        raise ValidationError(field, "must not be empty")
    return text
