from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Optional, Union

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def utc_now() -> datetime:
    """Current UTC instant.

    Note: Wrapped so tests can inject a fixed clock instead.
    """
    return datetime.now(timezone.utc)


def parse_instant(value: Union[str, datetime], field_name: str) -> datetime:
    """Parse a clock timestamp into an aware UTC datetime.

    Accepts ISO-8601 with an offset (``2026-02-10T01:00:00Z``,
    ``...+08:00``) and bare local forms (``2026-02-10T01:00:00``). Bare values
    are read as UTC.
    """

    if isinstance(value, datetime):
        parsed = value
    elif not isinstance(value, str):
        raise ValidationError(f"Invalid {field_name} date format")
    else:
        raw = value.strip()
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError as exc:
            raise ValidationError(f"Invalid {field_name} date format") from exc

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_clock_time(value: Union[str, time, None]) -> Optional[time]:
    """Parse 'HH:MM' / 'HH:MM:SS' shift boundaries."""

    if value is None or isinstance(value, time):
        return value

    parts = str(value).strip().split(":")
    if len(parts) < 2:
        raise ValueError(f"Invalid time string: {value!r}")
    seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
    return time(hour=int(parts[0]), minute=int(parts[1]), second=seconds)


def minutes_since_midnight(value: Union[str, time]) -> int:
    parsed = parse_clock_time(value)
    if parsed is None:
        raise ValueError("Time value is required")
    return parsed.hour * 60 + parsed.minute


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600


# Locale-independent, Monday first like date.weekday().
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def weekday_name(value: date) -> str:
    return WEEKDAY_NAMES[value.weekday()]
