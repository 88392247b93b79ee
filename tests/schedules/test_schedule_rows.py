from datetime import date, time

from src.attendance_engine.attendance_engine.schedules.mysql_schedule_repository import _rows_to_schedules


def _row(schedule_id, employee_id, **overrides):
    row = {
        "schedule_id": schedule_id,
        "employee_id": employee_id,
        "shift_name": "Day Shift",
        "shift_start": "09:00:00",
        "shift_end": "17:00:00",
        "days": '["Monday", "Tuesday"]',
        "schedule_dates": None,
        "start_date": None,
        "end_date": None,
        "status": "Active",
    }
    row.update(overrides)
    return row


def test_rows_are_parsed_including_weekday_keyed_dates():
    [s] = _rows_to_schedules([_row(1, "E1", schedule_dates='{"Tuesday": ["2026-02-10"]}')])

    assert s.shift_end == time(17, 0)
    assert s.days == frozenset({"Monday", "Tuesday"})
    assert s.schedule_dates == frozenset({date(2026, 2, 10)})


def test_unreadable_rows_are_skipped():
    rows = [
        _row(1, "E1", schedule_dates='["2026-02-31"]'),
        _row(2, "E2", shift_end="late"),
        _row(3, "E3", days="{not json"),
        _row(4, "E4"),
    ]

    assert [s.employee_id for s in _rows_to_schedules(rows)] == ["E4"]
