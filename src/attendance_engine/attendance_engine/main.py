from __future__ import annotations

import atexit
import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig, DatabaseConnection

from .container import Container, build_container
from .absence.controller import register as register_absence
from .attendance.controller import register as register_attendance
from .cleanup.controller import register as register_cleanup
from .missed_clockout.controller import register as register_missed_clockout

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
            apply_schema(conn, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("Schema ready (tables=%s)", len(list_tables(conn)))

        container = build_container(
            db_config=db_config,
            system_config_path=getattr(settings, "SYSTEM_CONFIG_PATH", None),
            missed_clockout_interval_seconds=getattr(settings, "MISSED_CLOCKOUT_INTERVAL_SECONDS", 300),
            overtime_requires_schedule=bool(getattr(settings, "OVERTIME_REQUIRES_SCHEDULE", False)),
            repeat_window_seconds=float(getattr(settings, "REPEAT_REQUEST_WINDOW_SECONDS", 10)),
        )

    app.extensions["attendance_engine"] = container

    register_attendance(app, container)
    register_absence(app, container)
    register_cleanup(app, container)
    register_missed_clockout(app, container)

    if bool(getattr(settings, "START_BACKGROUND_JOBS", False)):
        container.missed_clockout_job.start()
        atexit.register(container.missed_clockout_job.stop)

    return app
