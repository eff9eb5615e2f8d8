"""Thread-based fixed-cadence ticker.

Drives the tick loop from a daemon thread. The loop waits on a
threading.Event between ticks, so stop() takes effect without waiting for
the rest of the period.
"""

import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)


class ThreadTicker:
    """Ticker implementation that calls a callback every ``period`` seconds."""

    def __init__(self, period: float = 1.0, name: str = "linkwatch-ticker") -> None:
        """Initialize the ticker.

        Args:
            period: Seconds between callback invocations.
            name: Thread name, visible in debuggers and logs.

        Raises:
            ValueError: If period is not positive.
        """
        if period <= 0:
            raise ValueError(f"period must be positive, got {period}")
        self.period = period
        self.name = name
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self.ticks = 0
        self.error: Exception | None = None

    def start(self, callback: Callable[[], None]) -> None:
        """Start ticking on a background thread.

        Raises:
            RuntimeError: If the ticker is already running.
        """
        if self.is_running():
            raise RuntimeError("Ticker is already running")

        self._stop_event.clear()
        self.error = None
        self._thread = threading.Thread(
            target=self._run, args=(callback,), name=self.name, daemon=True
        )
        self._thread.start()
        logger.debug("Ticker started with period %ss", self.period)

    def _run(self, callback: Callable[[], None]) -> None:
        while not self._stop_event.wait(self.period):
            try:
                callback()
            except Exception as e:
                logger.exception("Tick callback failed, stopping ticker")
                self.error = e
                self._stop_event.set()
                raise
            self.ticks += 1

    def stop(self, timeout: float | None = None) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.debug("Ticker stopped after %d ticks", self.ticks)

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the ticker stops.

        Returns:
            True if the ticker stopped, False if the timeout expired first.
        """
        return self._stop_event.wait(timeout)
