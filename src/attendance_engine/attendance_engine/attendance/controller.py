from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.serializers import error_response, record_to_dict, view_to_dict
from ..core.exceptions import DomainError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _json_body() -> dict:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    def _query_date(name: str) -> Optional[date]:
        value = (request.args.get(name) or "").strip()
        if not value:
            return None
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError(f"Invalid {name} (YYYY-MM-DD)")

    @app.route("/attendance", methods=["POST"], endpoint="record_attendance")
    def record_attendance():
        data = _json_body()
        employee_id = data.get("employee_id")
        try:
            result = container.clock_service.record(
                employee_id,
                clock_in=data.get("clock_in"),
                clock_out=data.get("clock_out"),
                status=data.get("status"),
            )
            return (
                jsonify({"message": result.message, "attendance": record_to_dict(result.record)}),
                201 if result.created else 200,
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to record attendance employee=%s", employee_id)
            return jsonify({"error": "Failed to record attendance"}), 500

    @app.route("/attendance", methods=["GET"], endpoint="list_attendance")
    def list_attendance():
        try:
            views = container.clock_service.list_records(
                work_date=_query_date("date"),
                employee_id=request.args.get("employee_id"),
                start_date=_query_date("start_date"),
                end_date=_query_date("end_date"),
            )
            return jsonify([view_to_dict(v) for v in views]), 200
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to fetch attendance records")
            return jsonify({"error": "Failed to fetch attendance records"}), 500

    @app.route("/attendance/today", methods=["GET"], endpoint="list_today_attendance")
    def list_today_attendance():
        try:
            views = container.clock_service.list_today()
            return jsonify([view_to_dict(v) for v in views]), 200
        except Exception:
            logger.exception("Failed to fetch today's attendance")
            return jsonify({"error": "Failed to fetch today's attendance"}), 500

    @app.route("/attendance/overtime/eligible", methods=["GET"], endpoint="overtime_eligible")
    def overtime_eligible():
        try:
            views = container.overtime_service.eligible()
            return jsonify([view_to_dict(v) for v in views]), 200
        except Exception:
            logger.exception("Failed to fetch overtime eligible employees")
            return jsonify({"error": "Failed to fetch overtime eligible employees"}), 500

    @app.route("/attendance/overtime", methods=["GET"], endpoint="overtime_assignments")
    def overtime_assignments():
        try:
            views = container.overtime_service.assignments()
            payload = []
            for v in views:
                item = view_to_dict(v)
                item["overtime_status"] = "Completed" if v.record.clock_out else "In Progress"
                payload.append(item)
            return jsonify(payload), 200
        except Exception:
            logger.exception("Failed to fetch overtime assignments")
            return jsonify({"error": "Failed to fetch overtime assignments"}), 500

    @app.route("/attendance/overtime", methods=["POST"], endpoint="assign_overtime")
    def assign_overtime():
        data = _json_body()
        employee_ids = data.get("employee_ids")
        if not isinstance(employee_ids, list):
            employee_ids = [data.get("employee_id")] if data.get("employee_id") else []
        try:
            result = container.overtime_service.assign(
                employee_ids,
                estimated_hours=data.get("estimated_hours"),
                reason=data.get("reason"),
            )
            return (
                jsonify(
                    {
                        "message": (
                            f"Overtime assignment complete: {result.success_count} success, "
                            f"{result.error_count} errors"
                        ),
                        "success_count": result.success_count,
                        "error_count": result.error_count,
                        "results": [
                            {
                                "employee_id": o.employee_id,
                                "success": o.success,
                                "error": o.error,
                                "attendance_id": o.attendance_id,
                            }
                            for o in result.outcomes
                        ],
                    }
                ),
                200,
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to assign overtime employees=%s", employee_ids)
            return jsonify({"error": "Failed to assign overtime"}), 500

    @app.route("/attendance/overtime/<employee_id>", methods=["DELETE"], endpoint="remove_overtime")
    def remove_overtime(employee_id: str):
        try:
            record = container.overtime_service.remove(employee_id)
            return jsonify({"message": "Overtime assignment removed successfully", "attendance": record_to_dict(record)}), 200
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to remove overtime employee=%s", employee_id)
            return jsonify({"error": "Failed to remove overtime assignment"}), 500

    @app.route("/attendance/overtime/hours", methods=["PUT"], endpoint="update_overtime_hours")
    def update_overtime_hours():
        data = _json_body()
        try:
            record = container.overtime_service.update_hours(data.get("attendance_id"), data.get("overtime_hours"))
            return jsonify({"message": "Overtime hours updated successfully", "attendance": record_to_dict(record)}), 200
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to update overtime hours attendance_id=%s", data.get("attendance_id"))
            return jsonify({"error": "Failed to update overtime hours"}), 500
