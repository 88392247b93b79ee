from __future__ import annotations

from typing import Optional

from ...core.exceptions import ConflictError
from ..model import AttendanceRecord
from ..repository import AttendanceRepository
from .base import ClockInRequest, ClockInStrategy, ClockResult


class KeepExistingStrategy(ClockInStrategy):
    """Duplicate Absent request: nothing to do."""

    def apply(
        self,
        *,
        request: ClockInRequest,
        existing: Optional[AttendanceRecord],
        attendance: AttendanceRepository,
    ) -> ClockResult:
        if existing is None:
            raise ConflictError("Absent record no longer exists, please retry")
        return ClockResult(record=existing, created=False, message="Absent record already exists")
