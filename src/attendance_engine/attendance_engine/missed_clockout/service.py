from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..core.enums import CLOCKED_IN
from ..schedules.model import EmployeeSchedule
from ..schedules.repository import ScheduleRepository, find_schedule_for
from ..timezone.resolver import ConfigSource, TimezoneResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MissedClockoutResult:
    checked: int
    marked: int
    skipped: int
    errors: int


class MissedClockoutMarker:
    """Flags open sessions whose shift ended more than the grace period ago.

    Today's sessions are checked against today's shift end. Sessions still open
    from yesterday are checked only when yesterday's shift was overnight, with
    the shift end falling on today.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        schedules: ScheduleRepository,
        resolver: TimezoneResolver,
        config: ConfigSource,
    ):
        self._attendance = attendance
        self._schedules = schedules
        self._resolver = resolver
        self._config = config

    def _deadline(self, schedule: EmployeeSchedule, work_date: date, today: date, grace: int) -> Optional[datetime]:
        # Local wall-clock deadline, or None when the shift does not end today.
        if schedule.is_overnight:
            end_date = work_date + timedelta(days=1)
        else:
            end_date = work_date
        if end_date != today:
            return None
        return datetime.combine(end_date, schedule.shift_end) + timedelta(minutes=grace)

    def run(self) -> MissedClockoutResult:
        today = self._resolver.current_date()
        yesterday = today - timedelta(days=1)
        now = self._resolver.now_local().replace(tzinfo=None, second=0, microsecond=0)
        grace = self._config.get().clock_out_grace_period_minutes

        sessions = list(self._attendance.list_open_sessions(today, CLOCKED_IN))
        sessions += self._attendance.list_open_sessions(yesterday, CLOCKED_IN)
        logger.info("Missed clock-out check date=%s open_sessions=%s grace=%s", today, len(sessions), grace)

        marked = skipped = errors = 0
        for session in sessions:
            try:
                schedule = find_schedule_for(
                    self._schedules, employee_id=session.employee_id, work_date=session.work_date
                )
                if schedule is None or schedule.shift_end is None:
                    logger.info(
                        "Skip missed clock-out employee=%s date=%s: no shift end",
                        session.employee_id,
                        session.work_date,
                    )
                    skipped += 1
                    continue

                deadline = self._deadline(schedule, session.work_date, today, grace)
                if deadline is None:
                    logger.debug(
                        "Skip missed clock-out employee=%s date=%s: shift does not end today",
                        session.employee_id,
                        session.work_date,
                    )
                    skipped += 1
                    continue
                if now < deadline:
                    continue

                if self._attendance.mark_missed_clock_out(attendance_id=session.attendance_id):
                    marked += 1
                    logger.info(
                        "Marked missed clock-out employee=%s date=%s shift_end=%s now=%s",
                        session.employee_id,
                        session.work_date,
                        schedule.shift_end.strftime("%H:%M"),
                        now.strftime("%H:%M"),
                    )
                else:
                    skipped += 1
                    logger.info("Session %s changed before it could be flagged", session.attendance_id)
            except Exception:
                errors += 1
                logger.exception(
                    "Missed clock-out check failed employee=%s date=%s", session.employee_id, session.work_date
                )

        return MissedClockoutResult(checked=len(sessions), marked=marked, skipped=skipped, errors=errors)
