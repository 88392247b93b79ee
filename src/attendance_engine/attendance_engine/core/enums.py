from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance status values as stored in the database."""

    PRESENT = "Present"
    LATE = "Late"
    ABSENT = "Absent"
    OVERTIME = "Overtime"
    MISSED_CLOCK_OUT = "Missed Clock-out"

    # Legacy values kept for older rows.
    IN = "IN"
    COMPLETED = "COMPLETED"


# Statuses a session can be closed from by a clock-out request.
CLOCK_OUT_ELIGIBLE = frozenset(
    {AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.IN, AttendanceStatus.OVERTIME}
)

# Statuses that count as "clocked in" for the background markers and overtime.
CLOCKED_IN = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.LATE})


class EmployeeStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class ScheduleStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
