from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def blank_to_none(value):
    """Treat empty strings from clients as missing values."""

    if isinstance(value, str) and not value.strip():
        return None
    return value


def require_non_negative_hours(value, field_name: str) -> float:
    try:
        hours = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field_name} must be a number") from exc
    if hours < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return hours
