import os
from pathlib import Path

from config import env_flag

BASE_DIR = Path(__file__).resolve().parents[1]

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_engine"),
}

# Timezone and clock-out grace period
SYSTEM_CONFIG_PATH = os.getenv("SYSTEM_CONFIG_PATH", str(BASE_DIR / "config" / "system-config.json"))

MISSED_CLOCKOUT_INTERVAL_SECONDS = int(os.getenv("MISSED_CLOCKOUT_INTERVAL_SECONDS", "300"))
START_BACKGROUND_JOBS = env_flag("START_BACKGROUND_JOBS", "1")
OVERTIME_REQUIRES_SCHEDULE = env_flag("OVERTIME_REQUIRES_SCHEDULE", "0")
# Seconds during which a repeated clock event for the same employee is refused
REPEAT_REQUEST_WINDOW_SECONDS = float(os.getenv("REPEAT_REQUEST_WINDOW_SECONDS", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
