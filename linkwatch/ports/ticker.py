"""Ticker port interface.

Defines the fixed-cadence scheduling primitive that drives the tick loop.
"""

from collections.abc import Callable
from typing import Protocol


class Ticker(Protocol):
    """Protocol for invoking a callback at a fixed cadence.

    Attributes:
        error: Exception that stopped the ticker, or None.
    """

    error: Exception | None

    def start(self, callback: Callable[[], None]) -> None:
        """Begin invoking callback once per period."""
        ...

    def stop(self, timeout: float | None = None) -> None:
        """Stop invoking the callback.

        Args:
            timeout: Seconds to wait for an in-flight callback to finish.
        """
        ...

    def is_running(self) -> bool:
        """Check whether the ticker is active."""
        ...

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the ticker stops or the timeout expires.

        Returns:
            True if the ticker stopped.
        """
        ...
