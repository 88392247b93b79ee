from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Mapping, Optional, Union

from .absence.service import AbsenceMarker
from .attendance.factory import ClockInStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import ClockEventService
from .cleanup.service import CleanupService
from .common.datetime_utils import utc_now
from .core.constants import (
    DEFAULT_MISSED_CLOCKOUT_INTERVAL_SECONDS,
    DEFAULT_REGULAR_SHIFT_HOURS,
    DEFAULT_REPEAT_REQUEST_WINDOW_SECONDS,
)
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .jobs.scheduler import RepeatingJob
from .missed_clockout.service import MissedClockoutMarker
from .overtime.service import OvertimeService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .system_config.provider import SystemConfigProvider
from .timezone.resolver import ConfigSource, TimezoneResolver


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    config_provider: ConfigSource
    resolver: TimezoneResolver

    attendance_repo: AttendanceRepository
    employees_repo: EmployeeRepository
    schedules_repo: ScheduleRepository

    clock_service: ClockEventService
    absence_marker: AbsenceMarker
    missed_clockout_marker: MissedClockoutMarker
    overtime_service: OvertimeService
    cleanup_service: CleanupService

    missed_clockout_job: RepeatingJob


def assemble(
    *,
    attendance_repo: AttendanceRepository,
    employees_repo: EmployeeRepository,
    schedules_repo: ScheduleRepository,
    config_provider: ConfigSource,
    conn: Optional[DatabaseConnection] = None,
    clock: Callable[[], datetime] = utc_now,
    missed_clockout_interval_seconds: float = DEFAULT_MISSED_CLOCKOUT_INTERVAL_SECONDS,
    overtime_requires_schedule: bool = False,
    regular_shift_hours: float = DEFAULT_REGULAR_SHIFT_HOURS,
    repeat_window_seconds: float = DEFAULT_REPEAT_REQUEST_WINDOW_SECONDS,
) -> Container:
    """Wire services around the given repositories."""

    resolver = TimezoneResolver(config_provider, clock=clock)

    clock_service = ClockEventService(
        attendance_repo,
        employees_repo,
        schedules_repo,
        resolver,
        strategy_factory=ClockInStrategyFactory(),
        regular_shift_hours=regular_shift_hours,
        repeat_window_seconds=repeat_window_seconds,
    )
    absence_marker = AbsenceMarker(attendance_repo, schedules_repo, employees_repo, resolver)
    missed_clockout_marker = MissedClockoutMarker(attendance_repo, schedules_repo, resolver, config_provider)
    overtime_service = OvertimeService(
        attendance_repo,
        employees_repo,
        schedules_repo,
        resolver,
        requires_schedule=overtime_requires_schedule,
    )
    cleanup_service = CleanupService(attendance_repo, resolver)

    missed_clockout_job = RepeatingJob(
        "missed-clockout",
        missed_clockout_interval_seconds,
        missed_clockout_marker.run,
        clock=clock,
    )

    return Container(
        conn=conn,
        config_provider=config_provider,
        resolver=resolver,
        attendance_repo=attendance_repo,
        employees_repo=employees_repo,
        schedules_repo=schedules_repo,
        clock_service=clock_service,
        absence_marker=absence_marker,
        missed_clockout_marker=missed_clockout_marker,
        overtime_service=overtime_service,
        cleanup_service=cleanup_service,
        missed_clockout_job=missed_clockout_job,
    )


def build_container(
    *,
    db_config: Mapping,
    system_config_path: Union[str, Path, None],
    missed_clockout_interval_seconds: float = DEFAULT_MISSED_CLOCKOUT_INTERVAL_SECONDS,
    overtime_requires_schedule: bool = False,
    repeat_window_seconds: float = DEFAULT_REPEAT_REQUEST_WINDOW_SECONDS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return assemble(
        attendance_repo=MySQLAttendanceRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        schedules_repo=MySQLScheduleRepository(conn),
        config_provider=SystemConfigProvider(system_config_path),
        conn=conn,
        missed_clockout_interval_seconds=missed_clockout_interval_seconds,
        overtime_requires_schedule=overtime_requires_schedule,
        repeat_window_seconds=repeat_window_seconds,
    )
