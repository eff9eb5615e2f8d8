"""System clock adapter backed by time.monotonic."""

import time


class MonotonicClock:
    """Clock reading the process-wide monotonic timer."""

    def now(self) -> float:
        return time.monotonic()
