from datetime import date, time

from src.attendance_engine.attendance_engine.schedules.mysql_schedule_repository import _row_to_schedule
from tests.fakes import schedule


def test_weekday_coverage():
    s = schedule("E1")

    assert s.covers(date(2026, 2, 10))
    assert not s.covers(date(2026, 2, 14))


def test_assignment_bounds_limit_coverage():
    s = schedule("E1", start_date=date(2026, 2, 10), end_date=date(2026, 2, 12))

    assert not s.covers(date(2026, 2, 9))
    assert s.covers(date(2026, 2, 12))
    assert not s.covers(date(2026, 2, 13))


def test_overnight_shift_hours():
    s = schedule("E1", "22:00", "06:00")

    assert s.is_overnight
    assert s.scheduled_hours() == 8.0
    assert schedule("E1", "09:00", None).scheduled_hours() is None


def test_row_mapping_accepts_weekday_keyed_dates():
    s = _row_to_schedule(
        {
            "schedule_id": 7,
            "employee_id": "E1",
            "shift_name": "Opening",
            "shift_start": "08:30:00",
            "shift_end": time(17, 30),
            "days": '["Monday", "Tuesday"]',
            "schedule_dates": '{"Tuesday": ["2026-02-10"], "Friday": ["2026-02-13"]}',
            "start_date": None,
            "end_date": None,
            "status": "Active",
        }
    )

    assert s.shift_start == time(8, 30)
    assert s.days == frozenset({"Monday", "Tuesday"})
    assert s.schedule_dates == frozenset({date(2026, 2, 10), date(2026, 2, 13)})
    assert s.covers(date(2026, 2, 13))
    assert not s.covers(date(2026, 2, 9))
