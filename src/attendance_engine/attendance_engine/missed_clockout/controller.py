from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/missed-clockout/run-now", methods=["POST"], endpoint="missed_clockout_run_now")
    def missed_clockout_run_now():
        try:
            result = container.missed_clockout_marker.run()
            return (
                jsonify(
                    {
                        "message": f"Marked {result.marked} sessions as missed clock-out",
                        "checked": result.checked,
                        "marked": result.marked,
                        "skipped": result.skipped,
                        "errors": result.errors,
                    }
                ),
                200,
            )
        except Exception:
            logger.exception("Missed clock-out run failed")
            return jsonify({"error": "Failed to run missed clock-out check"}), 500

    @app.route("/missed-clockout/status", methods=["GET"], endpoint="missed_clockout_status")
    def missed_clockout_status():
        return jsonify(container.missed_clockout_job.status()), 200
