from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from flask import jsonify

from ..attendance.model import AttendanceRecord, AttendanceView
from ..core.exceptions import ConflictError, DomainError, NotFoundError, TooManyRequestsError


def _iso_instant(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _iso_date(value: Optional[date]) -> Optional[str]:
    return value.strftime("%Y-%m-%d") if value else None


def record_to_dict(r: AttendanceRecord) -> dict:
    return {
        "attendance_id": r.attendance_id,
        "employee_id": r.employee_id,
        "date": _iso_date(r.work_date),
        "clock_in": _iso_instant(r.clock_in),
        "clock_out": _iso_instant(r.clock_out),
        "status": r.status.value,
        "total_hours": r.total_hours,
        "overtime_hours": r.overtime_hours,
    }


def view_to_dict(v: AttendanceView) -> dict:
    data = record_to_dict(v.record)
    data.update(
        {
            "employee_name": v.employee_name,
            "department": v.department or "N/A",
            "position": v.position or "N/A",
        }
    )
    return data


def status_code_for(exc: DomainError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ConflictError):
        return 409
    if isinstance(exc, TooManyRequestsError):
        return 429
    # ValidationError and any other domain rule violation.
    return 400


def error_response(exc: DomainError):
    body = {"error": str(exc)}
    if isinstance(exc, TooManyRequestsError):
        body["waitTime"] = exc.retry_after
    return jsonify(body), status_code_for(exc)
