from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance session (or Absent marker) of an employee on a date.

    ``clock_in`` / ``clock_out`` are aware UTC datetimes.
    """

    attendance_id: int
    employee_id: str
    work_date: date
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]
    status: AttendanceStatus
    total_hours: Optional[float] = None
    overtime_hours: Optional[float] = None

    @property
    def is_absent(self) -> bool:
        return self.status == AttendanceStatus.ABSENT

    @property
    def is_open(self) -> bool:
        return self.clock_in is not None and self.clock_out is None

    @property
    def is_closed(self) -> bool:
        return self.clock_in is not None and self.clock_out is not None


@dataclass(frozen=True)
class AttendanceView:
    """Read-model: a record joined with employee directory details."""

    record: AttendanceRecord
    employee_name: str
    department: Optional[str]
    position: Optional[str]
