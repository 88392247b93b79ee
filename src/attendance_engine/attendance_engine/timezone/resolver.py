from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Callable, Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..common.datetime_utils import utc_now
from ..common.datetime_utils import weekday_name as _weekday_name
from ..system_config.model import SystemConfig

logger = logging.getLogger(__name__)


class ConfigSource(Protocol):
    def get(self) -> SystemConfig:
        raise NotImplementedError


class TimezoneResolver:
    """Converts UTC instants into calendar values of the configured timezone.

    Every component asks this object for "today", "now" and weekday names so
    they agree with each other. Configuration problems fall back to UTC and
    are logged, never raised.
    """

    def __init__(self, config: ConfigSource, *, clock: Callable[[], datetime] = utc_now):
        self._config = config
        self._clock = clock

    def zone(self):
        try:
            name = self._config.get().timezone or "UTC"
        except Exception:
            logger.exception("Could not load timezone configuration; falling back to UTC")
            return timezone.utc

        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown timezone %r; falling back to UTC", name)
            return timezone.utc

    def now_utc(self) -> datetime:
        now = self._clock()
        if now.tzinfo is None:
            return now.replace(tzinfo=timezone.utc)
        return now.astimezone(timezone.utc)

    def now_local(self) -> datetime:
        return self.now_utc().astimezone(self.zone())

    def current_date(self) -> date:
        return self.now_local().date()

    def date_of(self, instant: datetime) -> date:
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        return instant.astimezone(self.zone()).date()

    def current_time(self) -> str:
        """Current local time as 'HH:MM'."""
        return self.now_local().strftime("%H:%M")

    def current_weekday_name(self) -> str:
        return self.weekday_name(self.current_date())

    @staticmethod
    def weekday_name(value: date) -> str:
        return _weekday_name(value)
