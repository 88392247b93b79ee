from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_CLOCK_OUT_GRACE_MINUTES, DEFAULT_TIMEZONE


@dataclass(frozen=True)
class SystemConfig:
    """Runtime settings shared by every time-sensitive component."""

    timezone: str = DEFAULT_TIMEZONE
    clock_out_grace_period_minutes: int = DEFAULT_CLOCK_OUT_GRACE_MINUTES
