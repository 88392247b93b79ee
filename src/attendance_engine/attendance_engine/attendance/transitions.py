from __future__ import annotations

from enum import Enum
from typing import Optional

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class SessionState(str, Enum):
    """Shape of the latest record an employee has for a date."""

    NO_RECORD = "NO_RECORD"
    OPEN_SESSION = "OPEN_SESSION"
    CLOSED_SESSION = "CLOSED_SESSION"
    ABSENT_RECORD = "ABSENT_RECORD"
    UNRECOGNIZED = "UNRECOGNIZED"


class ClockEvent(str, Enum):
    """Incoming request without a clock-out."""

    CLOCK_IN = "CLOCK_IN"
    MARK_ABSENT = "MARK_ABSENT"


def classify(record: Optional[AttendanceRecord]) -> SessionState:
    if record is None:
        return SessionState.NO_RECORD

    if record.is_absent:
        if record.clock_in is None and record.clock_out is None:
            return SessionState.ABSENT_RECORD
        return SessionState.UNRECOGNIZED

    if record.is_closed:
        return SessionState.CLOSED_SESSION
    if record.is_open:
        return SessionState.OPEN_SESSION
    return SessionState.UNRECOGNIZED


def event_for(status: AttendanceStatus) -> ClockEvent:
    return ClockEvent.MARK_ABSENT if status == AttendanceStatus.ABSENT else ClockEvent.CLOCK_IN
