from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import minutes_since_midnight
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError, ValidationError
from ..employees.repository import EmployeeRepository
from ..schedules.model import EmployeeSchedule
from ..schedules.repository import ScheduleRepository
from ..timezone.resolver import TimezoneResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AbsenceRunResult:
    work_date: date
    marked_absent: int
    scheduled: int
    skipped: int
    errors: int


class AbsenceMarker:
    """Creates Absent records for scheduled employees who never showed up.

    Only employees with an active schedule covering the date are considered.
    An existing record of any status is never touched, so the run can be
    repeated for the same date.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        schedules: ScheduleRepository,
        employees: EmployeeRepository,
        resolver: TimezoneResolver,
    ):
        self._attendance = attendance
        self._schedules = schedules
        self._employees = employees
        self._resolver = resolver

    def mark_today(self) -> AbsenceRunResult:
        return self._run(self._resolver.current_date(), check_shift_end=True)

    def mark_date(self, work_date: date) -> AbsenceRunResult:
        today = self._resolver.current_date()
        if work_date > today:
            raise ValidationError("Cannot mark absences for a future date")
        return self._run(work_date, check_shift_end=work_date == today)

    def _run(self, work_date: date, *, check_shift_end: bool) -> AbsenceRunResult:
        now_minutes = minutes_since_midnight(self._resolver.current_time()) if check_shift_end else None

        by_employee: dict[str, list[EmployeeSchedule]] = {}
        for schedule in self._schedules.list_active():
            if schedule.covers(work_date):
                by_employee.setdefault(schedule.employee_id, []).append(schedule)

        logger.info(
            "Absence run date=%s weekday=%s scheduled=%s",
            work_date,
            self._resolver.weekday_name(work_date),
            len(by_employee),
        )

        directory = self._employees.get_many(by_employee.keys())
        marked = skipped = errors = 0

        for employee_id, schedules in by_employee.items():
            try:
                employee = directory.get(employee_id)
                if employee is None or not employee.is_active:
                    logger.info("Skip absence employee=%s date=%s: not an active employee", employee_id, work_date)
                    skipped += 1
                    continue

                if now_minutes is not None and not self._any_shift_over(schedules, now_minutes):
                    logger.info("Skip absence employee=%s date=%s: shift not over yet", employee_id, work_date)
                    skipped += 1
                    continue

                existing = self._attendance.get_latest_for_employee_and_date(employee_id, work_date)
                if existing is not None:
                    logger.debug(
                        "Skip absence employee=%s date=%s: record exists status=%s",
                        employee_id,
                        work_date,
                        existing.status.value,
                    )
                    skipped += 1
                    continue

                try:
                    self._attendance.create_record(
                        employee_id=employee_id,
                        work_date=work_date,
                        clock_in=None,
                        status=AttendanceStatus.ABSENT,
                    )
                except ConflictError:
                    # A clock-in landed between the lookup and the insert.
                    logger.info("Skip absence employee=%s date=%s: record created concurrently", employee_id, work_date)
                    skipped += 1
                    continue

                marked += 1
                logger.info("Marked absent employee=%s date=%s", employee_id, work_date)
            except Exception:
                errors += 1
                logger.exception("Failed to mark absence employee=%s date=%s", employee_id, work_date)

        logger.info(
            "Absence run finished date=%s marked=%s skipped=%s errors=%s",
            work_date,
            marked,
            skipped,
            errors,
        )
        return AbsenceRunResult(
            work_date=work_date,
            marked_absent=marked,
            scheduled=len(by_employee),
            skipped=skipped,
            errors=errors,
        )

    @staticmethod
    def _any_shift_over(schedules: list[EmployeeSchedule], now_minutes: int) -> bool:
        for schedule in schedules:
            end_minutes = _shift_end_minutes(schedule)
            if end_minutes is None or schedule.is_overnight:
                continue
            if now_minutes >= end_minutes:
                return True
        return False


def _shift_end_minutes(schedule: EmployeeSchedule) -> Optional[int]:
    if schedule.shift_end is None:
        return None
    return minutes_since_midnight(schedule.shift_end)
