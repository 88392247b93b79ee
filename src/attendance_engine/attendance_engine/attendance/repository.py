from __future__ import annotations

from datetime import date, datetime
from typing import Collection, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Attendance record store.

    Mutating methods are conditional updates: they return False when the row
    is no longer in the expected state (another request got there first).
    ``create_record`` raises ConflictError when the employee already has an
    open slot (clock_out NULL) for the date.
    """

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_latest_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find_open_session(
        self, employee_id: str, work_date: date, statuses: Collection[AttendanceStatus]
    ) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find_latest_session(
        self, employee_id: str, work_date: date, statuses: Collection[AttendanceStatus]
    ) -> Optional[AttendanceRecord]:
        """Latest clocked-in record with one of ``statuses``, open or closed."""

        raise NotImplementedError

    def find_by_status(self, employee_id: str, work_date: date, status: AttendanceStatus) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def seconds_since_last_change(self, employee_id: str, within_seconds: float) -> Optional[float]:
        """Age of the employee's most recent record change, or None if older than ``within_seconds``."""

        raise NotImplementedError

    def create_record(
        self,
        *,
        employee_id: str,
        work_date: date,
        clock_in: Optional[datetime],
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def convert_absent(self, *, attendance_id: int, clock_in: datetime, status: AttendanceStatus) -> bool:
        raise NotImplementedError

    def close_session(
        self,
        *,
        attendance_id: int,
        clock_out: datetime,
        total_hours: float,
        overtime_hours: Optional[float] = None,
    ) -> bool:
        raise NotImplementedError

    def mark_missed_clock_out(self, *, attendance_id: int) -> bool:
        raise NotImplementedError

    def set_overtime(self, *, attendance_id: int, overtime_hours: float) -> bool:
        raise NotImplementedError

    def clear_overtime(self, *, attendance_id: int) -> bool:
        raise NotImplementedError

    def update_overtime_hours(self, *, attendance_id: int, overtime_hours: float) -> bool:
        raise NotImplementedError

    def list_for_date(
        self, work_date: date, *, statuses: Optional[Collection[AttendanceStatus]] = None
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_open_sessions(self, work_date: date, statuses: Collection[AttendanceStatus]) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_records(
        self,
        *,
        work_date: Optional[date] = None,
        employee_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def delete_absent(self, *, work_date: Optional[date] = None) -> int:
        """Delete Absent rows (of one date, or all when ``work_date`` is None)."""

        raise NotImplementedError
