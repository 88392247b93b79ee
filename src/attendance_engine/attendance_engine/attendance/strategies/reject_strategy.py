from __future__ import annotations

from typing import Optional

from ...core.exceptions import ConflictError
from ..model import AttendanceRecord
from ..repository import AttendanceRepository
from .base import ClockInRequest, ClockInStrategy, ClockResult


class RejectOpenSessionStrategy(ClockInStrategy):
    def apply(
        self,
        *,
        request: ClockInRequest,
        existing: Optional[AttendanceRecord],
        attendance: AttendanceRepository,
    ) -> ClockResult:
        raise ConflictError("Employee already has an open session today")


class RejectAmbiguousStrategy(ClockInStrategy):
    def apply(
        self,
        *,
        request: ClockInRequest,
        existing: Optional[AttendanceRecord],
        attendance: AttendanceRepository,
    ) -> ClockResult:
        raise ConflictError("Ambiguous existing attendance record for this date")
