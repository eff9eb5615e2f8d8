"""Clock port interface.

Defines the time source used by the monitor and retry coordinator.
"""

from typing import Protocol


class Clock(Protocol):
    """Protocol for a monotonic time source."""

    def now(self) -> float:
        """Return the current time.

        Returns:
            Monotonic timestamp in seconds. Only differences between values
            are meaningful.
        """
        ...
