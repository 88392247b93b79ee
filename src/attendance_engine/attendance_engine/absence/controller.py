from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.serializers import error_response
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from .service import AbsenceRunResult

logger = logging.getLogger(__name__)


def _result_to_dict(result: AbsenceRunResult) -> dict:
    return {
        "message": f"Marked {result.marked_absent} employees as absent",
        "date": result.work_date.strftime("%Y-%m-%d"),
        "markedAbsent": result.marked_absent,
        "scheduled": result.scheduled,
        "skipped": result.skipped,
        "errors": result.errors,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/absent-marking/run-now", methods=["POST"], endpoint="absent_marking_run_now")
    def absent_marking_run_now():
        try:
            return jsonify(_result_to_dict(container.absence_marker.mark_today())), 200
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Absence marking run failed")
            return jsonify({"error": "Failed to run absent marking"}), 500

    @app.route("/absent-marking/mark-date", methods=["POST"], endpoint="absent_marking_mark_date")
    def absent_marking_mark_date():
        data = request.get_json(silent=True) or {}
        raw = str(data.get("date") or "").strip() if isinstance(data, dict) else ""
        try:
            if not raw:
                raise ValidationError("date is required (YYYY-MM-DD)")
            try:
                work_date = parse_iso_date(raw)
            except ValueError:
                raise ValidationError("Invalid date (YYYY-MM-DD)")
            return jsonify(_result_to_dict(container.absence_marker.mark_date(work_date))), 200
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Absence marking failed date=%s", raw)
            return jsonify({"error": "Failed to mark absences"}), 500
