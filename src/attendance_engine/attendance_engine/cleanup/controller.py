from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/cleanup/invalid-absences", methods=["DELETE"], endpoint="cleanup_invalid_absences")
    def cleanup_invalid_absences():
        try:
            removed = container.cleanup_service.remove_today_absences()
            return jsonify({"message": f"Removed {removed} absent records for today", "deleted": removed}), 200
        except Exception:
            logger.exception("Cleanup of today's absences failed")
            return jsonify({"error": "Failed to clean up absences"}), 500

    @app.route("/cleanup/all-absences", methods=["DELETE"], endpoint="cleanup_all_absences")
    def cleanup_all_absences():
        try:
            removed = container.cleanup_service.remove_all_absences()
            return jsonify({"message": f"Removed {removed} absent records", "deleted": removed}), 200
        except Exception:
            logger.exception("Cleanup of all absences failed")
            return jsonify({"error": "Failed to clean up absences"}), 500
