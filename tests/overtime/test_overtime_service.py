from __future__ import annotations

from datetime import date

import pytest

from src.attendance_engine.attendance_engine.core.enums import AttendanceStatus
from src.attendance_engine.attendance_engine.core.exceptions import NotFoundError, ValidationError
from tests.fakes import schedule, utc

FEB_10 = date(2026, 2, 10)


def _clock_in(repo, employee_id, status=AttendanceStatus.PRESENT, **kwargs):
    return repo.add(employee_id=employee_id, work_date=FEB_10, clock_in=utc(2026, 2, 10, 1, 0), status=status, **kwargs)


def test_clocked_in_employees_are_eligible(container, attendance_repo):
    _clock_in(attendance_repo, "E1")
    _clock_in(attendance_repo, "E2", AttendanceStatus.LATE)
    attendance_repo.add(employee_id="E3", work_date=FEB_10, clock_in=None, status=AttendanceStatus.ABSENT)

    eligible = container.overtime_service.eligible()

    assert [v.record.employee_id for v in eligible] == ["E1", "E2"]
    assert eligible[1].department == "Finance"


def test_employee_with_overtime_record_is_excluded(container, attendance_repo):
    _clock_in(attendance_repo, "E1", clock_out=utc(2026, 2, 10, 9, 0))
    attendance_repo.add(
        employee_id="E1",
        work_date=FEB_10,
        clock_in=utc(2026, 2, 10, 9, 30),
        clock_out=utc(2026, 2, 10, 11, 0),
        status=AttendanceStatus.OVERTIME,
    )
    _clock_in(attendance_repo, "E1")

    assert container.overtime_service.eligible() == []


def test_schedule_required_policy(attendance_repo, employees_repo, schedules_repo, system_config, clock):
    from src.attendance_engine.attendance_engine.container import assemble
    from src.attendance_engine.attendance_engine.system_config.provider import StaticConfigProvider

    c = assemble(
        attendance_repo=attendance_repo,
        employees_repo=employees_repo,
        schedules_repo=schedules_repo,
        config_provider=StaticConfigProvider(system_config),
        clock=clock,
        overtime_requires_schedule=True,
    )
    schedules_repo.schedules.append(schedule("E2"))
    _clock_in(attendance_repo, "E1")
    _clock_in(attendance_repo, "E2")

    assert [v.record.employee_id for v in c.overtime_service.eligible()] == ["E2"]


def test_assign_turns_open_session_into_overtime(container, attendance_repo):
    rec = _clock_in(attendance_repo, "E1")

    result = container.overtime_service.assign(["E1", "E2", "NOPE"], estimated_hours="2.5", reason="Inventory")

    assert result.success_count == 1
    assert result.error_count == 2
    outcomes = {o.employee_id: o for o in result.outcomes}
    assert outcomes["E2"].error == "Employee must clock in for regular shift before overtime assignment"
    assert outcomes["NOPE"].error == "Employee not found"
    updated = attendance_repo.get_by_id(rec.attendance_id)
    assert updated.status == AttendanceStatus.OVERTIME
    assert updated.overtime_hours == 2.5
    assert [v.record.employee_id for v in container.overtime_service.assignments()] == ["E1"]


def test_assign_twice_reports_existing_assignment(container, attendance_repo):
    _clock_in(attendance_repo, "E1")
    container.overtime_service.assign(["E1"], estimated_hours=2, reason="Inventory")

    again = container.overtime_service.assign(["E1"], estimated_hours=2, reason="Inventory")

    assert again.outcomes[0].error == "Already has overtime assignment for this date"


@pytest.mark.parametrize(
    "ids, hours, reason",
    [([], 2, "x"), (["E1"], None, "x"), (["E1"], 0, "x"), (["E1"], -1, "x"), (["E1"], 2, "  ")],
)
def test_assign_validates_input(container, ids, hours, reason):
    with pytest.raises(ValidationError):
        container.overtime_service.assign(ids, estimated_hours=hours, reason=reason)


def test_remove_restores_present(container, attendance_repo):
    rec = _clock_in(attendance_repo, "E1")
    container.overtime_service.assign(["E1"], estimated_hours=2, reason="Inventory")

    restored = container.overtime_service.remove("E1")

    assert restored.attendance_id == rec.attendance_id
    assert restored.status == AttendanceStatus.PRESENT
    assert restored.overtime_hours is None


def test_remove_after_clock_out_is_rejected(container, attendance_repo):
    _clock_in(attendance_repo, "E1", AttendanceStatus.OVERTIME, clock_out=utc(2026, 2, 10, 12, 0))

    with pytest.raises(ValidationError):
        container.overtime_service.remove("E1")


def test_remove_without_assignment_is_not_found(container):
    with pytest.raises(NotFoundError):
        container.overtime_service.remove("E1")


def test_update_hours_only_for_overtime_records(container, attendance_repo):
    ot = _clock_in(attendance_repo, "E1", AttendanceStatus.OVERTIME, overtime_hours=1.0)
    present = _clock_in(attendance_repo, "E2")

    updated = container.overtime_service.update_hours(str(ot.attendance_id), "3.25")
    assert updated.overtime_hours == 3.25

    with pytest.raises(ValidationError):
        container.overtime_service.update_hours(present.attendance_id, 1)
    with pytest.raises(NotFoundError):
        container.overtime_service.update_hours(999, 1)
    with pytest.raises(ValidationError):
        container.overtime_service.update_hours(ot.attendance_id, -1)


def test_eligible_employee_with_closed_session_can_be_assigned(container, attendance_repo):
    rec = _clock_in(attendance_repo, "E1", clock_out=utc(2026, 2, 10, 9, 0), total_hours=8.0)
    assert [v.record.employee_id for v in container.overtime_service.eligible()] == ["E1"]

    result = container.overtime_service.assign(["E1"], estimated_hours=2, reason="Month-end close")

    assert result.success_count == 1
    assert result.outcomes[0].attendance_id == rec.attendance_id
    assert attendance_repo.get_by_id(rec.attendance_id).status == AttendanceStatus.OVERTIME
    assert container.overtime_service.eligible() == []
