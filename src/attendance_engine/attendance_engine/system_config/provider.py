from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Optional, Union

from ..core.constants import DEFAULT_CLOCK_OUT_GRACE_MINUTES, DEFAULT_TIMEZONE
from .model import SystemConfig

logger = logging.getLogger(__name__)


class SystemConfigProvider:
    """Loads the system configuration file once and caches it.

    The file is only re-read on ``refresh()``. A missing or unreadable file
    yields the defaults (UTC, 30 minute grace) instead of an error.
    """

    def __init__(self, path: Union[str, Path, None]):
        self._path = Path(path) if path else None
        self._lock = threading.Lock()
        self._cached: Optional[SystemConfig] = None

    def get(self) -> SystemConfig:
        with self._lock:
            if self._cached is None:
                self._cached = self._load()
            return self._cached

    def refresh(self) -> SystemConfig:
        with self._lock:
            self._cached = self._load()
            return self._cached

    def _load(self) -> SystemConfig:
        if self._path is None or not self._path.exists():
            logger.info("System config file not found (%s); using defaults", self._path)
            return SystemConfig()

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.exception("Failed to read system config %s; using defaults", self._path)
            return SystemConfig()

        if not isinstance(data, dict):
            logger.warning("System config %s is not a JSON object; using defaults", self._path)
            return SystemConfig()

        timezone = data.get("timezone") or DEFAULT_TIMEZONE
        grace = data.get("clockOutGracePeriodMinutes", DEFAULT_CLOCK_OUT_GRACE_MINUTES)
        try:
            grace = int(grace)
        except (TypeError, ValueError):
            logger.warning("Invalid clockOutGracePeriodMinutes=%r; using %s", grace, DEFAULT_CLOCK_OUT_GRACE_MINUTES)
            grace = DEFAULT_CLOCK_OUT_GRACE_MINUTES

        return SystemConfig(timezone=str(timezone), clock_out_grace_period_minutes=grace)


class StaticConfigProvider:
    """Fixed configuration, used by scripts and tests."""

    def __init__(self, config: Optional[SystemConfig] = None):
        self._config = config or SystemConfig()

    def get(self) -> SystemConfig:
        return self._config

    def refresh(self) -> SystemConfig:
        return self._config
