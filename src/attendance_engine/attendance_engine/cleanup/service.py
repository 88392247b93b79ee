from __future__ import annotations

import logging

from ..attendance.repository import AttendanceRepository
from ..timezone.resolver import TimezoneResolver

logger = logging.getLogger(__name__)


class CleanupService:
    """Deletes Absent records created by a premature absence run."""

    def __init__(self, attendance: AttendanceRepository, resolver: TimezoneResolver):
        self._attendance = attendance
        self._resolver = resolver

    def remove_today_absences(self) -> int:
        today = self._resolver.current_date()
        removed = self._attendance.delete_absent(work_date=today)
        logger.info("Removed %s absent records for %s", removed, today)
        return removed

    def remove_all_absences(self) -> int:
        removed = self._attendance.delete_absent()
        logger.warning("Removed all %s absent records", removed)
        return removed
