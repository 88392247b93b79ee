from __future__ import annotations

from datetime import date

from src.attendance_engine.attendance_engine.core.enums import AttendanceStatus
from tests.fakes import schedule, utc

FEB_10 = date(2026, 2, 10)


def _open_session(repo, employee_id="E1", status=AttendanceStatus.PRESENT):
    return repo.add(employee_id=employee_id, work_date=FEB_10, clock_in=utc(2026, 2, 10, 1, 0), status=status)


def test_still_within_grace_is_left_alone(container, attendance_repo, schedules_repo, clock):
    schedules_repo.schedules.append(schedule("E1", "09:00", "17:00"))
    rec = _open_session(attendance_repo)
    clock.set(utc(2026, 2, 10, 9, 29))  # 17:29 local

    result = container.missed_clockout_marker.run()

    assert result.checked == 1
    assert result.marked == 0
    assert attendance_repo.get_by_id(rec.attendance_id).status == AttendanceStatus.PRESENT


def test_marked_at_shift_end_plus_grace(container, attendance_repo, schedules_repo, clock):
    schedules_repo.schedules.append(schedule("E1", "09:00", "17:00"))
    rec = _open_session(attendance_repo, status=AttendanceStatus.LATE)
    clock.set(utc(2026, 2, 10, 9, 30))  # 17:30 local

    result = container.missed_clockout_marker.run()

    assert result.marked == 1
    updated = attendance_repo.get_by_id(rec.attendance_id)
    assert updated.status == AttendanceStatus.MISSED_CLOCK_OUT
    assert updated.clock_out is None
    assert updated.total_hours is None


def test_sessions_without_schedule_are_skipped(container, attendance_repo, clock):
    _open_session(attendance_repo)
    clock.set(utc(2026, 2, 10, 14, 0))

    result = container.missed_clockout_marker.run()

    assert result.checked == 1
    assert result.skipped == 1
    assert result.marked == 0


def test_closed_and_overtime_sessions_are_not_checked(container, attendance_repo, schedules_repo, clock):
    schedules_repo.schedules.append(schedule("E1"))
    schedules_repo.schedules.append(schedule("E2"))
    attendance_repo.add(
        employee_id="E1",
        work_date=FEB_10,
        clock_in=utc(2026, 2, 10, 1, 0),
        clock_out=utc(2026, 2, 10, 9, 0),
        status=AttendanceStatus.PRESENT,
    )
    _open_session(attendance_repo, "E2", status=AttendanceStatus.OVERTIME)
    clock.set(utc(2026, 2, 10, 14, 0))

    result = container.missed_clockout_marker.run()

    assert result.checked == 0


def test_error_on_one_record_does_not_abort(container, attendance_repo, schedules_repo, clock, monkeypatch):
    schedules_repo.schedules.append(schedule("E1"))
    schedules_repo.schedules.append(schedule("E2"))
    first = _open_session(attendance_repo, "E1")
    second = _open_session(attendance_repo, "E2")
    clock.set(utc(2026, 2, 10, 14, 0))
    original = attendance_repo.mark_missed_clock_out

    def flaky_mark(*, attendance_id):
        if attendance_id == first.attendance_id:
            raise RuntimeError("lock wait timeout")
        return original(attendance_id=attendance_id)

    monkeypatch.setattr(attendance_repo, "mark_missed_clock_out", flaky_mark)

    result = container.missed_clockout_marker.run()

    assert result.errors == 1
    assert result.marked == 1
    assert attendance_repo.get_by_id(second.attendance_id).status == AttendanceStatus.MISSED_CLOCK_OUT


def test_grace_comes_from_configuration(attendance_repo, employees_repo, schedules_repo, clock):
    from src.attendance_engine.attendance_engine.container import assemble
    from src.attendance_engine.attendance_engine.system_config.model import SystemConfig
    from src.attendance_engine.attendance_engine.system_config.provider import StaticConfigProvider

    c = assemble(
        attendance_repo=attendance_repo,
        employees_repo=employees_repo,
        schedules_repo=schedules_repo,
        config_provider=StaticConfigProvider(SystemConfig(timezone="Asia/Manila", clock_out_grace_period_minutes=0)),
        clock=clock,
    )
    schedules_repo.schedules.append(schedule("E1", "09:00", "17:00"))
    _open_session(attendance_repo)
    clock.set(utc(2026, 2, 10, 9, 0))

    assert c.missed_clockout_marker.run().marked == 1


def _night_session(repo, employee_id="E1"):
    # 22:00 local on Monday the 9th
    return repo.add(
        employee_id=employee_id,
        work_date=date(2026, 2, 9),
        clock_in=utc(2026, 2, 9, 14, 0),
        status=AttendanceStatus.PRESENT,
    )


def test_overnight_session_from_yesterday_is_flagged_after_shift_end(container, attendance_repo, schedules_repo, clock):
    schedules_repo.schedules.append(schedule("E1", "22:00", "06:00"))
    rec = _night_session(attendance_repo)

    clock.set(utc(2026, 2, 9, 22, 29))  # 06:29 local on the 10th
    assert container.missed_clockout_marker.run().marked == 0

    clock.set(utc(2026, 2, 9, 22, 30))
    result = container.missed_clockout_marker.run()

    assert result.checked == 1
    assert result.marked == 1
    assert attendance_repo.get_by_id(rec.attendance_id).status == AttendanceStatus.MISSED_CLOCK_OUT


def test_overnight_session_started_today_is_not_due_yet(container, attendance_repo, schedules_repo, clock):
    schedules_repo.schedules.append(schedule("E1", "22:00", "06:00"))
    rec = attendance_repo.add(
        employee_id="E1", work_date=FEB_10, clock_in=utc(2026, 2, 10, 14, 0), status=AttendanceStatus.PRESENT
    )
    clock.set(utc(2026, 2, 10, 15, 0))  # 23:00 local

    result = container.missed_clockout_marker.run()

    assert result.skipped == 1
    assert attendance_repo.get_by_id(rec.attendance_id).status == AttendanceStatus.PRESENT


def test_day_shift_left_open_yesterday_is_not_rechecked(container, attendance_repo, schedules_repo, clock):
    schedules_repo.schedules.append(schedule("E1", "09:00", "17:00"))
    rec = attendance_repo.add(
        employee_id="E1", work_date=date(2026, 2, 9), clock_in=utc(2026, 2, 9, 1, 0), status=AttendanceStatus.PRESENT
    )
    clock.set(utc(2026, 2, 10, 9, 30))

    result = container.missed_clockout_marker.run()

    assert result.marked == 0
    assert attendance_repo.get_by_id(rec.attendance_id).status == AttendanceStatus.PRESENT
