from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import FrozenSet, Optional

from ..common.datetime_utils import weekday_name
from ..core.enums import ScheduleStatus


@dataclass(frozen=True)
class EmployeeSchedule:
    """Domain entity: a shift assigned to one employee.

    The shift applies either on the listed weekdays or, when
    ``schedule_dates`` is non-empty, only on those explicit dates.
    """

    schedule_id: int
    employee_id: str
    shift_name: str
    shift_start: Optional[time]
    shift_end: Optional[time]
    days: FrozenSet[str] = field(default_factory=frozenset)
    schedule_dates: FrozenSet[date] = field(default_factory=frozenset)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: ScheduleStatus = ScheduleStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == ScheduleStatus.ACTIVE

    @property
    def is_overnight(self) -> bool:
        if self.shift_start is None or self.shift_end is None:
            return False
        return self.shift_end <= self.shift_start

    def covers(self, work_date: date) -> bool:
        if not self.is_active:
            return False
        if self.start_date and work_date < self.start_date:
            return False
        if self.end_date and work_date > self.end_date:
            return False
        if self.schedule_dates:
            return work_date in self.schedule_dates
        return weekday_name(work_date) in self.days

    def scheduled_hours(self) -> Optional[float]:
        if self.shift_start is None or self.shift_end is None:
            return None
        start = datetime.combine(date.min, self.shift_start)
        end = datetime.combine(date.min, self.shift_end)
        if end <= start:
            end += timedelta(days=1)
        return (end - start).total_seconds() / 3600
