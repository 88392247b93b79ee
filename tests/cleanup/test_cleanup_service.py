from datetime import date

from src.attendance_engine.attendance_engine.core.enums import AttendanceStatus
from tests.fakes import schedule, utc


def _seed(repo):
    repo.add(employee_id="E1", work_date=date(2026, 2, 10), clock_in=None, status=AttendanceStatus.ABSENT)
    repo.add(employee_id="E2", work_date=date(2026, 2, 10), clock_in=None, status=AttendanceStatus.ABSENT)
    repo.add(employee_id="E1", work_date=date(2026, 2, 9), clock_in=None, status=AttendanceStatus.ABSENT)
    repo.add(
        employee_id="E3", work_date=date(2026, 2, 10), clock_in=utc(2026, 2, 10, 1, 0), status=AttendanceStatus.PRESENT
    )


def test_remove_today_absences_uses_local_today(container, attendance_repo, clock):
    _seed(attendance_repo)
    # 2026-02-09 17:00 UTC is already the 10th in Manila
    clock.set(utc(2026, 2, 9, 17, 0))

    assert container.cleanup_service.remove_today_absences() == 2
    remaining = sorted((r.employee_id, r.work_date.day) for r in attendance_repo.records.values())
    assert remaining == [("E1", 9), ("E3", 10)]


def test_remove_all_absences(container, attendance_repo):
    _seed(attendance_repo)

    assert container.cleanup_service.remove_all_absences() == 3
    assert [r.status for r in attendance_repo.records.values()] == [AttendanceStatus.PRESENT]


def test_absence_marker_can_run_again_after_cleanup(container, attendance_repo, schedules_repo, clock):
    schedules_repo.schedules.append(schedule("E1"))
    clock.set(utc(2026, 2, 10, 9, 5))
    container.absence_marker.mark_today()

    assert container.cleanup_service.remove_today_absences() == 1
    assert container.absence_marker.mark_today().marked_absent == 1
