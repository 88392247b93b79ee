from __future__ import annotations

import logging
import math
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence, Union

from ..common.datetime_utils import hours_between, parse_instant
from ..common.validators import blank_to_none, require_non_empty
from ..core.constants import DEFAULT_REGULAR_SHIFT_HOURS, DEFAULT_REPEAT_REQUEST_WINDOW_SECONDS
from ..core.enums import CLOCK_OUT_ELIGIBLE, AttendanceStatus
from ..core.exceptions import ConflictError, NotFoundError, TooManyRequestsError, ValidationError
from ..employees.repository import EmployeeRepository
from ..schedules.repository import ScheduleRepository, find_schedule_for
from ..timezone.resolver import TimezoneResolver
from .factory import ClockInStrategyFactory
from .model import AttendanceRecord, AttendanceView
from .repository import AttendanceRepository
from .strategies.base import ClockInRequest, ClockResult
from .transitions import classify, event_for

logger = logging.getLogger(__name__)

Timestamp = Union[str, datetime, None]


def parse_status(value: Union[str, AttendanceStatus, None]) -> Optional[AttendanceStatus]:
    value = blank_to_none(value)
    if value is None:
        return None
    try:
        return AttendanceStatus(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown attendance status: {value}") from exc


def join_employees(records: Iterable[AttendanceRecord], employees: EmployeeRepository) -> list[AttendanceView]:
    records = list(records)
    directory = employees.get_many(r.employee_id for r in records)
    views: list[AttendanceView] = []
    for r in records:
        employee = directory.get(r.employee_id)
        views.append(
            AttendanceView(
                record=r,
                employee_name=employee.full_name if employee else "Unknown Employee",
                department=employee.department if employee else None,
                position=employee.position if employee else None,
            )
        )
    return views


class ClockEventService:
    """Turns clock-in / clock-out events into attendance records."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        schedules: ScheduleRepository,
        resolver: TimezoneResolver,
        *,
        strategy_factory: ClockInStrategyFactory | None = None,
        regular_shift_hours: float = DEFAULT_REGULAR_SHIFT_HOURS,
        repeat_window_seconds: float = DEFAULT_REPEAT_REQUEST_WINDOW_SECONDS,
    ):
        self._attendance = attendance
        self._employees = employees
        self._schedules = schedules
        self._resolver = resolver
        self._factory = strategy_factory or ClockInStrategyFactory()
        self._regular_shift_hours = float(regular_shift_hours)
        self._repeat_window_seconds = float(repeat_window_seconds)

    def record(
        self,
        employee_id: Optional[str],
        *,
        clock_in: Timestamp = None,
        clock_out: Timestamp = None,
        status: Union[str, AttendanceStatus, None] = None,
    ) -> ClockResult:
        employee_id = require_non_empty(employee_id, "employee_id")
        requested_status = parse_status(status)
        is_absent = requested_status == AttendanceStatus.ABSENT
        clock_in = blank_to_none(clock_in)
        clock_out = blank_to_none(clock_out)

        if clock_in is None and clock_out is None and not is_absent:
            raise ValidationError("clock_in is required for non-absent records")

        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")

        if is_absent or clock_in is None:
            clock_in_at = None
            work_date = self._resolver.current_date()
        else:
            clock_in_at = parse_instant(clock_in, "clock_in")
            work_date = self._resolver.date_of(clock_in_at)

        clock_out_at = parse_instant(clock_out, "clock_out") if clock_out is not None else None
        self._reject_repeat(employee_id)

        logger.info(
            "Attendance event employee=%s date=%s clock_in=%s clock_out=%s status=%s",
            employee_id,
            work_date,
            clock_in_at,
            clock_out_at,
            requested_status.value if requested_status else None,
        )

        if clock_out_at is not None:
            return self._clock_out(employee_id, clock_in_at=clock_in_at, clock_out_at=clock_out_at)

        request = ClockInRequest(
            employee_id=employee_id,
            work_date=work_date,
            clock_in=clock_in_at,
            status=requested_status or AttendanceStatus.PRESENT,
        )
        return self._clock_in(request)

    def _reject_repeat(self, employee_id: str) -> None:
        if self._repeat_window_seconds <= 0:
            return

        age = self._attendance.seconds_since_last_change(employee_id, self._repeat_window_seconds)
        if age is None:
            return

        wait = max(1, math.ceil(self._repeat_window_seconds - age))
        logger.info("Repeated attendance request employee=%s last_change=%.1fs ago", employee_id, age)
        raise TooManyRequestsError(
            f"Recent attendance activity detected. Please wait {wait} more seconds.", retry_after=wait
        )

    def _clock_in(self, request: ClockInRequest) -> ClockResult:
        existing = self._attendance.get_latest_for_employee_and_date(request.employee_id, request.work_date)
        state = classify(existing)
        event = event_for(request.status)
        strategy = self._factory.for_transition(state, event)

        logger.info(
            "Clock-in decision employee=%s date=%s state=%s event=%s -> %s",
            request.employee_id,
            request.work_date,
            state.value,
            event.value,
            type(strategy).__name__,
        )
        return strategy.apply(request=request, existing=existing, attendance=self._attendance)

    def _clock_out(self, employee_id: str, *, clock_in_at: Optional[datetime], clock_out_at: datetime) -> ClockResult:
        if clock_in_at is not None:
            search_date = self._resolver.date_of(clock_in_at)
        else:
            search_date = self._resolver.current_date()

        session = self._attendance.find_open_session(employee_id, search_date, CLOCK_OUT_ELIGIBLE)

        # Overnight shift: started yesterday in local time, still open.
        if session is None and clock_in_at is None:
            previous_day = search_date - timedelta(days=1)
            session = self._attendance.find_open_session(employee_id, previous_day, CLOCK_OUT_ELIGIBLE)
            if session is not None:
                logger.info("Found overnight session employee=%s date=%s", employee_id, previous_day)

        if session is None:
            logger.info("No open session for clock-out employee=%s date=%s", employee_id, search_date)
            raise NotFoundError("No open session found for clock-out")

        if clock_out_at < session.clock_in:
            raise ValidationError("clock_out cannot be earlier than clock_in")

        total_hours = hours_between(session.clock_in, clock_out_at)
        overtime_hours = None
        if session.status == AttendanceStatus.OVERTIME:
            overtime_hours = max(0.0, total_hours - self._regular_hours(employee_id, session.work_date))

        if not self._attendance.close_session(
            attendance_id=session.attendance_id,
            clock_out=clock_out_at,
            total_hours=total_hours,
            overtime_hours=overtime_hours,
        ):
            raise ConflictError("Session was closed by another request")

        logger.info(
            "Clock-out recorded employee=%s date=%s total_hours=%.2f",
            employee_id,
            session.work_date,
            total_hours,
        )
        record = self._attendance.get_by_id(session.attendance_id)
        return ClockResult(record=record, created=False, message="Clock-out recorded successfully")

    def _regular_hours(self, employee_id: str, work_date: date) -> float:
        schedule = find_schedule_for(self._schedules, employee_id=employee_id, work_date=work_date)
        hours = schedule.scheduled_hours() if schedule else None
        return hours if hours else self._regular_shift_hours

    def list_today(self) -> Sequence[AttendanceView]:
        today = self._resolver.current_date()
        return join_employees(self._attendance.list_for_date(today), self._employees)

    def list_records(
        self,
        *,
        work_date: Optional[date] = None,
        employee_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceView]:
        if (start_date is None) != (end_date is None):
            raise ValidationError("start_date and end_date must be provided together")
        if start_date and end_date and start_date > end_date:
            raise ValidationError("start_date must not be after end_date")

        records = self._attendance.list_records(
            work_date=work_date,
            employee_id=blank_to_none(employee_id),
            start_date=start_date,
            end_date=end_date,
        )
        return join_employees(records, self._employees)
