from __future__ import annotations

import pytest

from src.attendance_engine.attendance_engine.container import assemble
from src.attendance_engine.attendance_engine.system_config.model import SystemConfig
from src.attendance_engine.attendance_engine.system_config.provider import StaticConfigProvider
from tests.fakes import FakeAttendanceRepo, FakeEmployeeRepo, FakeScheduleRepo, FixedClock, employee, utc


@pytest.fixture
def clock():
    # 2026-02-10 (Tuesday) 09:00 in Asia/Manila
    return FixedClock(utc(2026, 2, 10, 1, 0))


@pytest.fixture
def system_config():
    return SystemConfig(timezone="Asia/Manila", clock_out_grace_period_minutes=30)


@pytest.fixture
def attendance_repo(clock):
    return FakeAttendanceRepo(clock)


@pytest.fixture
def employees_repo():
    return FakeEmployeeRepo(
        employee("E1", "Ana", "Reyes"),
        employee("E2", "Ben", "Cruz", department="Finance"),
        employee("E3", "Cara", "Lim"),
    )


@pytest.fixture
def schedules_repo():
    return FakeScheduleRepo()


@pytest.fixture
def container(attendance_repo, employees_repo, schedules_repo, system_config, clock):
    return assemble(
        attendance_repo=attendance_repo,
        employees_repo=employees_repo,
        schedules_repo=schedules_repo,
        config_provider=StaticConfigProvider(system_config),
        clock=clock,
        # Scenarios replay events back to back on a frozen clock.
        repeat_window_seconds=0,
    )
