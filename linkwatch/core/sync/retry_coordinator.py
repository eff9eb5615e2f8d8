"""Sync retry coordination with debounce.

Tracks whether a sync is pending after a failure and decides when a retry
should be signaled. Also hosts the decision table for which failed requests
are worth retrying at all.
"""

import logging

from linkwatch.core.events import EventDispatcher, EventKind
from linkwatch.domain.config import MIN_DEBOUNCE_SECONDS
from linkwatch.domain.entities import AttemptDecision, ErrorKind

logger = logging.getLogger(__name__)

NON_RETRYABLE_STATUS_CODES = frozenset({400, 401, 403, 404})


def classify_retryable(response_code: int | None, error_kind: ErrorKind | str | None) -> bool:
    """Decide whether a failed request should be retried.

    Rules are evaluated in order; status-code exclusions take precedence
    over the error kind:

    1. 400, 401, 403, 404: client errors, never retried.
    2. 5xx: server errors, retried.
    3. ConnectionError: retried.
    4. Timeout: retried.
    5. Anything else: not retried.

    Args:
        response_code: HTTP response code, or None/0 if no response arrived.
        error_kind: Kind of error reported by the request layer.

    Returns:
        True if the request should be retried.
    """
    code = response_code or 0
    if code in NON_RETRYABLE_STATUS_CODES:
        return False
    if code >= 500:
        return True
    if error_kind == ErrorKind.CONNECTION_ERROR:
        return True
    if error_kind == ErrorKind.TIMEOUT:
        return True
    return False


class SyncRetryCoordinator:
    """Owns the pending-sync flag and the retry debounce window.

    A failure (or a sync attempt blocked while offline) marks a sync as
    pending and stamps the failure time. Once online and the debounce has
    elapsed since the latest failure, ``tick`` publishes RETRY_READY exactly
    once and clears the pending flag.
    """

    def __init__(
        self,
        dispatcher: EventDispatcher,
        debounce_seconds: float = 60.0,
        show_network_warnings: bool = True,
    ) -> None:
        """Initialize the coordinator.

        Args:
            dispatcher: Dispatcher that receives RETRY_READY.
            debounce_seconds: Minimum delay after a failure before retrying
                (clamped to at least 5 seconds).
            show_network_warnings: Log warnings for failures and blocked
                attempts.
        """
        self._dispatcher = dispatcher
        self._debounce_seconds = MIN_DEBOUNCE_SECONDS
        self.set_debounce(debounce_seconds)
        self.show_network_warnings = show_network_warnings

        self._has_pending_sync_data = False
        self._last_failure_at: float | None = None

    @property
    def debounce_seconds(self) -> float:
        return self._debounce_seconds

    @property
    def last_failure_at(self) -> float | None:
        return self._last_failure_at

    def has_pending_sync_data(self) -> bool:
        return self._has_pending_sync_data

    def set_debounce(self, seconds: float) -> float:
        """Set the debounce interval, clamped to the 5 second floor.

        Returns:
            The debounce actually applied.
        """
        self._debounce_seconds = max(MIN_DEBOUNCE_SECONDS, float(seconds))
        logger.debug("Retry debounce set to %ss", self._debounce_seconds)
        return self._debounce_seconds

    def tick(self, now: float, is_online: bool) -> bool:
        """Signal a retry if the debounce window has elapsed while online.

        Args:
            now: Current clock time.
            is_online: Current connectivity.

        Returns:
            True if RETRY_READY was published.
        """
        if not (self._has_pending_sync_data and is_online):
            return False
        if self._last_failure_at is None:
            return False
        if now - self._last_failure_at < self._debounce_seconds:
            return False

        self._fire_retry()
        logger.debug("Retry ready")
        return True

    def report_failure(self, now: float) -> None:
        """Record a failed sync. The debounce restarts from this failure."""
        self._has_pending_sync_data = True
        self._last_failure_at = now
        if self.show_network_warnings:
            logger.warning("Sync failed - will retry")

    def restore_pending(self, now: float) -> None:
        """Mark restored offline data as pending, debounced from ``now``.

        Same bookkeeping as a failure, without the failure warning.
        """
        self._has_pending_sync_data = True
        self._last_failure_at = now
        logger.debug("Restored data pending sync")

    def report_success(self) -> None:
        """Record a successful sync, clearing the pending flag."""
        self._has_pending_sync_data = False
        logger.debug("Sync succeeded")

    def guard_attempt(self, is_online: bool, now: float) -> AttemptDecision:
        """Check whether a sync may be attempted right now.

        A blocked attempt while offline counts as a failure: the pending flag
        is set and the failure time moves to ``now``. Repeatedly guarding
        while offline therefore keeps pushing the retry window forward.

        Args:
            is_online: Current connectivity.
            now: Current clock time.

        Returns:
            ALLOWED when online, DENIED otherwise.
        """
        if is_online:
            return AttemptDecision.ALLOWED

        if self.show_network_warnings:
            logger.warning("Cannot sync - offline")
        self._has_pending_sync_data = True
        self._last_failure_at = now
        return AttemptDecision.DENIED

    def force_retry_if_online(self, is_online: bool) -> bool:
        """Signal a retry immediately, ignoring the debounce window.

        Returns:
            True if RETRY_READY was published.
        """
        if not (is_online and self._has_pending_sync_data):
            return False

        logger.debug("Force sync")
        self._fire_retry()
        return True

    def retry_countdown(self, now: float, is_online: bool) -> float:
        """Seconds until the pending retry becomes eligible.

        Returns:
            0 when nothing is pending or when online; otherwise the remaining
            debounce time, never negative.
        """
        if not self._has_pending_sync_data or is_online:
            return 0.0
        if self._last_failure_at is None:
            return 0.0
        remaining = self._debounce_seconds - (now - self._last_failure_at)
        return max(0.0, remaining)

    def _fire_retry(self) -> None:
        # Clear before publishing so a listener that re-checks sees no pending sync.
        self._has_pending_sync_data = False
        self._last_failure_at = None
        self._dispatcher.publish(EventKind.RETRY_READY)
