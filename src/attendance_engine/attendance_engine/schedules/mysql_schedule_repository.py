from __future__ import annotations

import json
import logging
from datetime import date
from typing import Any, FrozenSet, Sequence

from ..common.datetime_utils import parse_iso_date
from ..core.enums import ScheduleStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_time
from .model import EmployeeSchedule
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)

_COLUMNS = """
    schedule_id, employee_id, shift_name, shift_start, shift_end,
    days, schedule_dates, start_date, end_date, status
"""


def _load_json(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = value.strip()
        return json.loads(value) if value else None
    return value


def _parse_days(value: Any) -> FrozenSet[str]:
    data = _load_json(value) or []
    return frozenset(str(d) for d in data)


def _parse_dates(value: Any) -> FrozenSet[date]:
    """Explicit dates are stored either as a list or as {weekday: [dates]}."""

    data = _load_json(value)
    if not data:
        return frozenset()

    raw: list = []
    if isinstance(data, dict):
        for items in data.values():
            raw.extend(items or [])
    else:
        raw = list(data)

    return frozenset(d if isinstance(d, date) else parse_iso_date(str(d)[:10]) for d in raw)


def _row_to_schedule(r: dict) -> EmployeeSchedule:
    return EmployeeSchedule(
        schedule_id=int(r["schedule_id"]),
        employee_id=str(r["employee_id"]),
        shift_name=r.get("shift_name") or "",
        shift_start=normalize_mysql_time(r.get("shift_start")),
        shift_end=normalize_mysql_time(r.get("shift_end")),
        days=_parse_days(r.get("days")),
        schedule_dates=_parse_dates(r.get("schedule_dates")),
        start_date=r.get("start_date"),
        end_date=r.get("end_date"),
        status=ScheduleStatus(r.get("status") or ScheduleStatus.ACTIVE.value),
    )


def _rows_to_schedules(rows: Sequence[dict]) -> list[EmployeeSchedule]:
    """Convert rows, dropping any that cannot be parsed so one bad row does not hide the rest."""

    schedules: list[EmployeeSchedule] = []
    for r in rows:
        try:
            schedules.append(_row_to_schedule(r))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning(
                "Skipping unreadable schedule schedule_id=%s employee=%s: %s",
                r.get("schedule_id"),
                r.get("employee_id"),
                exc,
            )
    return schedules


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[EmployeeSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employee_schedules
                WHERE status=%s
                ORDER BY employee_id ASC, schedule_id ASC
                """,
                (ScheduleStatus.ACTIVE.value,),
            )
            return _rows_to_schedules(fetchall(cur))

    def list_active_for_employee(self, employee_id: str) -> Sequence[EmployeeSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employee_schedules
                WHERE employee_id=%s AND status=%s
                ORDER BY schedule_id ASC
                """,
                (employee_id, ScheduleStatus.ACTIVE.value),
            )
            return _rows_to_schedules(fetchall(cur))
