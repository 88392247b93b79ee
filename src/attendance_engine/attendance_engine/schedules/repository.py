from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import EmployeeSchedule


class ScheduleRepository(Protocol):
    def list_active(self) -> Sequence[EmployeeSchedule]:
        raise NotImplementedError

    def list_active_for_employee(self, employee_id: str) -> Sequence[EmployeeSchedule]:
        raise NotImplementedError


def find_schedule_for(schedules: ScheduleRepository, *, employee_id: str, work_date: date) -> Optional[EmployeeSchedule]:
    """First active schedule of the employee that covers ``work_date``."""

    for schedule in schedules.list_active_for_employee(employee_id):
        if schedule.covers(work_date):
            return schedule
    return None
