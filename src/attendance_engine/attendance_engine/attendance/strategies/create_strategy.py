from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord
from ..repository import AttendanceRepository
from .base import ClockInRequest, ClockInStrategy, ClockResult


class CreateRecordStrategy(ClockInStrategy):
    """First record of the day: a clock-in session or an Absent marker."""

    def _message(self, request: ClockInRequest) -> str:
        if request.status == AttendanceStatus.ABSENT:
            return "Absent record created successfully"
        return "Clock-in recorded successfully"

    def apply(
        self,
        *,
        request: ClockInRequest,
        existing: Optional[AttendanceRecord],
        attendance: AttendanceRepository,
    ) -> ClockResult:
        clock_in = None if request.status == AttendanceStatus.ABSENT else request.clock_in
        record = attendance.create_record(
            employee_id=request.employee_id,
            work_date=request.work_date,
            clock_in=clock_in,
            status=request.status,
        )
        return ClockResult(record=record, created=True, message=self._message(request))


class NewSessionStrategy(CreateRecordStrategy):
    """Previous session of the day is closed: start another one."""

    def _message(self, request: ClockInRequest) -> str:
        if request.status == AttendanceStatus.ABSENT:
            return super()._message(request)
        return "New clock-in session created"
