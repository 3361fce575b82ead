from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError
from .datetime_utils import format_date_key, parse_iso_date


def require_text(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return value


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not require_text(value, field_name).strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_date_key(value: Any, field_name: str = "date") -> str:
    """Accept only a real calendar day written as YYYY-MM-DD."""
    raw = require_text(value if value is not None else "", field_name).strip()
    try:
        parsed = parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date") from None
    # strptime also accepts 2024-1-7; keys must stay zero-padded
    if format_date_key(parsed) != raw:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")
    return raw


def optional_text(value: Any, field_name: str = "value") -> str:
    if value is None:
        return ""
    return require_text(value, field_name).strip()
