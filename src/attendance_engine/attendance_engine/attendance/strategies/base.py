from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord
from ..repository import AttendanceRepository


@dataclass(frozen=True)
class ClockInRequest:
    employee_id: str
    work_date: date
    clock_in: Optional[datetime]
    status: AttendanceStatus


@dataclass(frozen=True)
class ClockResult:
    record: AttendanceRecord
    created: bool
    message: str


class ClockInStrategy(ABC):
    """Strategy Pattern: one side effect per (state, event) transition."""

    @abstractmethod
    def apply(
        self,
        *,
        request: ClockInRequest,
        existing: Optional[AttendanceRecord],
        attendance: AttendanceRepository,
    ) -> ClockResult:
        raise NotImplementedError
