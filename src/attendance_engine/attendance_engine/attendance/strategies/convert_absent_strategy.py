from __future__ import annotations

from typing import Optional

from ...core.exceptions import ConflictError
from ..model import AttendanceRecord
from ..repository import AttendanceRepository
from .base import ClockInRequest, ClockInStrategy, ClockResult


class ConvertAbsentStrategy(ClockInStrategy):
    """Late arrival after the absence marker ran: the Absent row becomes the session."""

    def apply(
        self,
        *,
        request: ClockInRequest,
        existing: Optional[AttendanceRecord],
        attendance: AttendanceRepository,
    ) -> ClockResult:
        if existing is None:
            raise ConflictError("Absent record no longer exists, please retry")

        if not attendance.convert_absent(
            attendance_id=existing.attendance_id,
            clock_in=request.clock_in,
            status=request.status,
        ):
            raise ConflictError("Attendance record was changed by another request, please retry")

        record = attendance.get_by_id(existing.attendance_id)
        return ClockResult(record=record, created=False, message="Absent record updated to clock-in")
