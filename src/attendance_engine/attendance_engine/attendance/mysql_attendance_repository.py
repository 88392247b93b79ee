from __future__ import annotations

import math
from datetime import date, datetime
from typing import Collection, Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import CLOCKED_IN, AttendanceStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, is_duplicate_key, to_db_datetime
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, employee_id, work_date, clock_in, clock_out, status, total_hours, overtime_hours"


def _optional_float(value) -> Optional[float]:
    return float(value) if value is not None else None


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=str(r["employee_id"]),
        work_date=r["work_date"],
        clock_in=from_db_datetime(r.get("clock_in")),
        clock_out=from_db_datetime(r.get("clock_out")),
        status=AttendanceStatus(r["status"]),
        total_hours=_optional_float(r.get("total_hours")),
        overtime_hours=_optional_float(r.get("overtime_hours")),
    )


def _in_clause(values: Collection) -> tuple[str, tuple]:
    items = tuple(v.value if isinstance(v, AttendanceStatus) else v for v in values)
    return ",".join(["%s"] * len(items)), items


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _fetch_one(self, where: str, params: tuple, *, order: str = "attendance_id DESC") -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE {where} ORDER BY {order} LIMIT 1", params)
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def _fetch_all(self, where: str, params: tuple, *, order: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE {where} ORDER BY {order}", params)
            return [_row_to_record(r) for r in fetchall(cur)]

    def _execute(self, sql: str, params: tuple) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return int(cur.rowcount)

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self._fetch_one("attendance_id=%s", (int(attendance_id),))

    def get_latest_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return self._fetch_one("employee_id=%s AND work_date=%s", (employee_id, work_date))

    def find_open_session(
        self, employee_id: str, work_date: date, statuses: Collection[AttendanceStatus]
    ) -> Optional[AttendanceRecord]:
        placeholders, values = _in_clause(statuses)
        return self._fetch_one(
            f"employee_id=%s AND work_date=%s AND clock_out IS NULL AND status IN ({placeholders})",
            (employee_id, work_date, *values),
        )

    def find_latest_session(
        self, employee_id: str, work_date: date, statuses: Collection[AttendanceStatus]
    ) -> Optional[AttendanceRecord]:
        placeholders, values = _in_clause(statuses)
        return self._fetch_one(
            f"employee_id=%s AND work_date=%s AND clock_in IS NOT NULL AND status IN ({placeholders})",
            (employee_id, work_date, *values),
        )

    def find_by_status(self, employee_id: str, work_date: date, status: AttendanceStatus) -> Optional[AttendanceRecord]:
        return self._fetch_one("employee_id=%s AND work_date=%s AND status=%s", (employee_id, work_date, status.value))

    def seconds_since_last_change(self, employee_id: str, within_seconds: float) -> Optional[float]:
        # Compared on the server clock, the same one that stamps updated_at.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT TIMESTAMPDIFF(SECOND, MAX(updated_at), NOW()) AS age
                FROM attendance_records
                WHERE employee_id=%s AND updated_at >= NOW() - INTERVAL %s SECOND
                """,
                (employee_id, int(math.ceil(within_seconds))),
            )
            r = fetchone(cur)
        age = r.get("age") if r else None
        return float(age) if age is not None else None

    def create_record(
        self,
        *,
        employee_id: str,
        work_date: date,
        clock_in: Optional[datetime],
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(employee_id, work_date, clock_in, status)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (employee_id, work_date, to_db_datetime(clock_in), status.value),
                )
                attendance_id = int(cur.lastrowid)
        except IntegrityError as exc:
            if is_duplicate_key(exc):
                raise ConflictError("Employee already has an open attendance record for this date") from exc
            raise

        return AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=employee_id,
            work_date=work_date,
            clock_in=clock_in,
            clock_out=None,
            status=status,
        )

    def convert_absent(self, *, attendance_id: int, clock_in: datetime, status: AttendanceStatus) -> bool:
        return (
            self._execute(
                """
                UPDATE attendance_records
                SET clock_in=%s, status=%s
                WHERE attendance_id=%s AND status=%s
                """,
                (to_db_datetime(clock_in), status.value, int(attendance_id), AttendanceStatus.ABSENT.value),
            )
            > 0
        )

    def close_session(
        self,
        *,
        attendance_id: int,
        clock_out: datetime,
        total_hours: float,
        overtime_hours: Optional[float] = None,
    ) -> bool:
        return (
            self._execute(
                """
                UPDATE attendance_records
                SET clock_out=%s, total_hours=%s, overtime_hours=COALESCE(%s, overtime_hours)
                WHERE attendance_id=%s AND clock_out IS NULL
                """,
                (to_db_datetime(clock_out), float(total_hours), overtime_hours, int(attendance_id)),
            )
            > 0
        )

    def mark_missed_clock_out(self, *, attendance_id: int) -> bool:
        placeholders, values = _in_clause(CLOCKED_IN)
        return (
            self._execute(
                f"""
                UPDATE attendance_records
                SET status=%s
                WHERE attendance_id=%s AND clock_out IS NULL AND status IN ({placeholders})
                """,
                (AttendanceStatus.MISSED_CLOCK_OUT.value, int(attendance_id), *values),
            )
            > 0
        )

    def set_overtime(self, *, attendance_id: int, overtime_hours: float) -> bool:
        placeholders, values = _in_clause(CLOCKED_IN)
        return (
            self._execute(
                f"""
                UPDATE attendance_records
                SET status=%s, overtime_hours=%s
                WHERE attendance_id=%s AND clock_in IS NOT NULL AND status IN ({placeholders})
                """,
                (AttendanceStatus.OVERTIME.value, float(overtime_hours), int(attendance_id), *values),
            )
            > 0
        )

    def clear_overtime(self, *, attendance_id: int) -> bool:
        return (
            self._execute(
                """
                UPDATE attendance_records
                SET status=%s, overtime_hours=NULL
                WHERE attendance_id=%s AND status=%s AND clock_out IS NULL
                """,
                (AttendanceStatus.PRESENT.value, int(attendance_id), AttendanceStatus.OVERTIME.value),
            )
            > 0
        )

    def update_overtime_hours(self, *, attendance_id: int, overtime_hours: float) -> bool:
        return (
            self._execute(
                "UPDATE attendance_records SET overtime_hours=%s WHERE attendance_id=%s AND status=%s",
                (float(overtime_hours), int(attendance_id), AttendanceStatus.OVERTIME.value),
            )
            > 0
        )

    def list_for_date(
        self, work_date: date, *, statuses: Optional[Collection[AttendanceStatus]] = None
    ) -> Sequence[AttendanceRecord]:
        where = "work_date=%s"
        params: tuple = (work_date,)
        if statuses:
            placeholders, values = _in_clause(statuses)
            where += f" AND status IN ({placeholders})"
            params += values
        return self._fetch_all(where, params, order="clock_in DESC, attendance_id DESC")

    def list_open_sessions(self, work_date: date, statuses: Collection[AttendanceStatus]) -> Sequence[AttendanceRecord]:
        placeholders, values = _in_clause(statuses)
        return self._fetch_all(
            f"work_date=%s AND clock_in IS NOT NULL AND clock_out IS NULL AND status IN ({placeholders})",
            (work_date, *values),
            order="attendance_id ASC",
        )

    def list_records(
        self,
        *,
        work_date: Optional[date] = None,
        employee_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["1=1"]
        params: list[object] = []

        if work_date is not None:
            clauses.append("work_date=%s")
            params.append(work_date)
        if employee_id:
            clauses.append("employee_id=%s")
            params.append(employee_id)
        if start_date is not None and end_date is not None:
            clauses.append("work_date BETWEEN %s AND %s")
            params.extend([start_date, end_date])

        return self._fetch_all(" AND ".join(clauses), tuple(params), order="work_date DESC, clock_in DESC")

    def delete_absent(self, *, work_date: Optional[date] = None) -> int:
        if work_date is None:
            return self._execute("DELETE FROM attendance_records WHERE status=%s", (AttendanceStatus.ABSENT.value,))
        return self._execute(
            "DELETE FROM attendance_records WHERE status=%s AND work_date=%s",
            (AttendanceStatus.ABSENT.value, work_date),
        )
