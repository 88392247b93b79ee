from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord, AttendanceView
from ..attendance.repository import AttendanceRepository
from ..attendance.service import join_employees
from ..common.validators import require_non_empty, require_non_negative_hours
from ..core.enums import CLOCKED_IN, AttendanceStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..schedules.repository import ScheduleRepository, find_schedule_for
from ..timezone.resolver import TimezoneResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OvertimeOutcome:
    employee_id: str
    success: bool
    error: Optional[str] = None
    attendance_id: Optional[int] = None


@dataclass(frozen=True)
class OvertimeAssignmentResult:
    outcomes: list[OvertimeOutcome]

    @property
    def success_count(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def error_count(self) -> int:
        return sum(1 for o in self.outcomes if not o.success)


class OvertimeService:
    """Overtime eligibility and assignment for today's clocked-in employees.

    Eligibility ignores schedules unless ``requires_schedule`` is set, in which
    case the employee must also have an active schedule covering today.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        schedules: ScheduleRepository,
        resolver: TimezoneResolver,
        *,
        requires_schedule: bool = False,
    ):
        self._attendance = attendance
        self._employees = employees
        self._schedules = schedules
        self._resolver = resolver
        self._requires_schedule = bool(requires_schedule)

    def eligible(self) -> Sequence[AttendanceView]:
        today = self._resolver.current_date()
        with_overtime = {r.employee_id for r in self._attendance.list_for_date(today, statuses={AttendanceStatus.OVERTIME})}

        latest: dict[str, AttendanceRecord] = {}
        for r in self._attendance.list_for_date(today, statuses=CLOCKED_IN):
            if r.clock_in is None or r.employee_id in with_overtime:
                continue
            if self._requires_schedule and not self._is_scheduled(r.employee_id, today):
                continue
            current = latest.get(r.employee_id)
            if current is None or r.attendance_id > current.attendance_id:
                latest[r.employee_id] = r

        logger.info(
            "Overtime eligibility date=%s eligible=%s excluded_overtime=%s requires_schedule=%s",
            today,
            len(latest),
            len(with_overtime),
            self._requires_schedule,
        )
        records = sorted(latest.values(), key=lambda r: r.employee_id)
        return join_employees(records, self._employees)

    def assignments(self) -> Sequence[AttendanceView]:
        today = self._resolver.current_date()
        records = self._attendance.list_for_date(today, statuses={AttendanceStatus.OVERTIME})
        return join_employees(records, self._employees)

    def assign(self, employee_ids: Iterable[str], *, estimated_hours, reason: Optional[str]) -> OvertimeAssignmentResult:
        reason = require_non_empty(reason, "reason")
        hours = require_non_negative_hours(estimated_hours, "estimated_hours")
        if hours == 0:
            raise ValidationError("estimated_hours must be greater than zero")

        ids = [str(e).strip() for e in (employee_ids or []) if e is not None and str(e).strip()]
        if not ids:
            raise ValidationError("employee_id or employee_ids is required")

        today = self._resolver.current_date()
        outcomes = [self._assign_one(employee_id, today, hours, reason) for employee_id in dict.fromkeys(ids)]
        result = OvertimeAssignmentResult(outcomes=outcomes)
        logger.info(
            "Overtime assignment date=%s success=%s errors=%s",
            today,
            result.success_count,
            result.error_count,
        )
        return result

    def _assign_one(self, employee_id: str, today, hours: float, reason: str) -> OvertimeOutcome:
        if not self._employees.get_by_id(employee_id):
            return OvertimeOutcome(employee_id, False, "Employee not found")

        if self._requires_schedule and not self._is_scheduled(employee_id, today):
            return OvertimeOutcome(employee_id, False, "Employee is not scheduled to work today")

        if self._attendance.find_by_status(employee_id, today, AttendanceStatus.OVERTIME):
            return OvertimeOutcome(employee_id, False, "Already has overtime assignment for this date")

        session = self._attendance.find_latest_session(employee_id, today, CLOCKED_IN)
        if session is None:
            return OvertimeOutcome(
                employee_id, False, "Employee must clock in for regular shift before overtime assignment"
            )

        if not self._attendance.set_overtime(attendance_id=session.attendance_id, overtime_hours=hours):
            return OvertimeOutcome(employee_id, False, "Attendance record changed, try again")

        logger.info(
            "Overtime assigned employee=%s date=%s estimated_hours=%s reason=%r",
            employee_id,
            today,
            hours,
            reason,
        )
        return OvertimeOutcome(employee_id, True, attendance_id=session.attendance_id)

    def remove(self, employee_id: str) -> AttendanceRecord:
        employee_id = require_non_empty(employee_id, "employee_id")
        today = self._resolver.current_date()

        record = self._attendance.find_by_status(employee_id, today, AttendanceStatus.OVERTIME)
        if record is None:
            raise NotFoundError("No overtime assignment found for this employee")
        if record.clock_out is not None:
            raise ValidationError("Cannot remove overtime - employee has already completed overtime work")

        if not self._attendance.clear_overtime(attendance_id=record.attendance_id):
            raise ConflictError("Overtime record changed, try again")

        logger.info("Overtime removed employee=%s date=%s", employee_id, today)
        return self._attendance.get_by_id(record.attendance_id)

    def update_hours(self, attendance_id, overtime_hours) -> AttendanceRecord:
        if attendance_id is None or str(attendance_id).strip() == "":
            raise ValidationError("attendance_id is required")
        try:
            attendance_id = int(attendance_id)
        except (TypeError, ValueError) as exc:
            raise ValidationError("attendance_id must be an integer") from exc
        hours = require_non_negative_hours(overtime_hours, "overtime_hours")

        record = self._attendance.get_by_id(attendance_id)
        if record is None:
            raise NotFoundError("Attendance record not found")
        if record.status != AttendanceStatus.OVERTIME:
            raise ValidationError("Only overtime records can have overtime hours updated")

        if not self._attendance.update_overtime_hours(attendance_id=attendance_id, overtime_hours=hours):
            raise ConflictError("Overtime record changed, try again")

        logger.info(
            "Overtime hours updated attendance_id=%s employee=%s %s -> %s",
            attendance_id,
            record.employee_id,
            record.overtime_hours,
            hours,
        )
        return self._attendance.get_by_id(attendance_id)

    def _is_scheduled(self, employee_id: str, today) -> bool:
        return find_schedule_for(self._schedules, employee_id=employee_id, work_date=today) is not None
