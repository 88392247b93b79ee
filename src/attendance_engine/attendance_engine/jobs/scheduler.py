from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Any, Callable, Optional

from ..common.datetime_utils import utc_now

logger = logging.getLogger(__name__)


class RepeatingJob:
    """Runs ``func`` once on ``start()`` and then every ``interval_seconds``.

    The loop lives in a daemon thread and waits on an Event, so ``stop()``
    returns promptly instead of sleeping out the interval. An exception in one
    run is logged and the next run still happens.
    """

    def __init__(
        self,
        name: str,
        interval_seconds: float,
        func: Callable[[], Any],
        *,
        clock: Callable[[], datetime] = utc_now,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.name = name
        self.interval_seconds = float(interval_seconds)
        self._func = func
        self._clock = clock
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

        self.runs = 0
        self.last_run_at: Optional[datetime] = None
        self.last_result: Any = None
        self.last_error: Optional[str] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        with self._lock:
            if self.is_running:
                return
            self._stop.clear()
            self.run_once()
            self._thread = threading.Thread(target=self._loop, name=f"job-{self.name}", daemon=True)
            self._thread.start()
        logger.info("Started job %s (every %ss)", self.name, self.interval_seconds)

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        with self._lock:
            thread = self._thread
            self._stop.set()
            self._thread = None
        if thread is not None:
            thread.join(timeout)
            logger.info("Stopped job %s", self.name)

    def run_once(self) -> Any:
        self.last_run_at = self._clock()
        self.runs += 1
        try:
            result = self._func()
        except Exception as exc:
            self.last_error = str(exc)
            logger.exception("Job %s failed", self.name)
            return None
        self.last_result = result
        self.last_error = None
        return result

    def _loop(self) -> None:
        while not self._stop.wait(self.interval_seconds):
            self.run_once()

    def status(self) -> dict:
        return {
            "name": self.name,
            "running": self.is_running,
            "interval_seconds": self.interval_seconds,
            "runs": self.runs,
            "last_run_at": self.last_run_at.isoformat() if self.last_run_at else None,
            "last_error": self.last_error,
        }
