"""Network manager facade.

Wires the ConnectivityMonitor, SyncRetryCoordinator and EventDispatcher
together and exposes a single thread-safe surface to hosts. A driving loop
calls ``tick`` at a fixed cadence; network-result callbacks call the
``report_*`` and ``can_attempt_sync`` methods, possibly from other threads.
"""

import logging
import threading

from linkwatch.core.connectivity import ConnectivityMonitor
from linkwatch.core.events import EventDispatcher, EventKind, Subscription
from linkwatch.core.events.dispatcher import Listener
from linkwatch.core.sync import SyncRetryCoordinator, classify_retryable
from linkwatch.domain.config import LinkwatchConfig
from linkwatch.domain.entities import ErrorKind, NetworkStatus
from linkwatch.domain.exceptions import ManagerClosedError
from linkwatch.ports.clock import Clock
from linkwatch.ports.reachability import ReachabilityProbe

logger = logging.getLogger(__name__)

# Parent of every module logger in the package.
PACKAGE_LOGGER = "linkwatch"


class NetworkManager:
    """Thread-safe facade over connectivity monitoring and sync retries.

    All state-changing calls run under one reentrant lock. Notifications are
    delivered synchronously while that lock is held, so listeners may read
    state through the query methods; calling mutating methods from inside a
    listener is not supported.
    """

    def __init__(
        self,
        config: LinkwatchConfig,
        clock: Clock,
        probe: ReachabilityProbe,
        dispatcher: EventDispatcher | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            config: Configuration for detection, retry and logging.
            clock: Time source shared by monitor and coordinator.
            probe: Reachability probe.
            dispatcher: Dispatcher for notifications (a new one if omitted).
        """
        self._clock = clock
        self._lock = threading.RLock()
        self._started = False
        self._closed = False
        self._level_before_debug: int | None = None
        self.dispatcher = dispatcher or EventDispatcher()

        self.coordinator = SyncRetryCoordinator(
            self.dispatcher,
            debounce_seconds=config.retry.debounce_seconds,
            show_network_warnings=config.logging.show_network_warnings,
        )
        self.monitor = ConnectivityMonitor(
            clock,
            probe,
            self.dispatcher,
            schedule=config.detection.schedule,
            enabled=config.detection.enabled,
            has_pending_sync=self.coordinator.has_pending_sync_data,
            show_network_warnings=config.logging.show_network_warnings,
        )
        self._config = config

    @property
    def config(self) -> LinkwatchConfig:
        return self._config

    def start(self) -> None:
        """Perform the initial probe. Only the first call has any effect."""
        with self._lock:
            if self._started:
                return
            self._started = True
            logger.debug(
                "Configured: retry debounce=%ss, detection %s",
                self.coordinator.debounce_seconds,
                "enabled" if self.monitor.enabled else "disabled",
            )
            if self.monitor.enabled:
                self.monitor.force_probe_now()

    def tick(self) -> None:
        """Run one evaluation pass of the retry check and the probe schedule.

        Raises:
            ManagerClosedError: If the manager has been closed.
        """
        with self._lock:
            if self._closed:
                raise ManagerClosedError(
                    "Network manager is closed",
                    hint="Create a new NetworkManager instead of reusing a closed one",
                )
            now = self._clock.now()
            self.coordinator.tick(now, self.monitor.is_online())
            self.monitor.tick(now)

    def check_now(self) -> None:
        """Probe reachability immediately, bypassing the schedule."""
        with self._lock:
            self.monitor.force_probe_now()

    # Queries

    def is_online(self) -> bool:
        with self._lock:
            return self.monitor.is_online()

    def has_pending_sync_data(self) -> bool:
        with self._lock:
            return self.coordinator.has_pending_sync_data()

    def get_network_status(self) -> NetworkStatus:
        with self._lock:
            return self.monitor.status()

    def get_retry_countdown(self) -> float:
        """Seconds until a pending retry is eligible, 0 if none or online."""
        with self._lock:
            return self.coordinator.retry_countdown(
                self._clock.now(), self.monitor.is_online()
            )

    # Sync commands

    def report_sync_failure(self) -> None:
        """Record that a sync request failed."""
        with self._lock:
            self.coordinator.report_failure(self._clock.now())

    def report_sync_success(self) -> None:
        """Record that a sync request succeeded."""
        with self._lock:
            self.coordinator.report_success()

    def can_attempt_sync(self) -> bool:
        """Guard a sync attempt; a denied attempt counts as a failure."""
        with self._lock:
            decision = self.coordinator.guard_attempt(
                self.monitor.is_online(), self._clock.now()
            )
            return decision.allowed

    def force_sync_if_online(self) -> bool:
        """Signal RETRY_READY now if online with a pending sync."""
        with self._lock:
            return self.coordinator.force_retry_if_online(self.monitor.is_online())

    def should_retry_request(
        self, response_code: int | None, error_kind: ErrorKind | str | None
    ) -> bool:
        return classify_retryable(response_code, error_kind)

    def mark_restored_backup(self) -> None:
        """Mark restored offline data as pending, subject to the debounce."""
        with self._lock:
            self.coordinator.restore_pending(self._clock.now())

    # Configuration

    def apply_config(self, config: LinkwatchConfig) -> None:
        """Apply new configuration without restarting.

        Schedule, detection flag, debounce and warning toggles take effect
        from the next tick. Turning debug_logs on sets the package logger to
        DEBUG; turning it off restores the level it had before. Connection state and pending sync are kept.
        """
        with self._lock:
            self.monitor.schedule = config.detection.schedule
            self.monitor.enabled = config.detection.enabled
            self.monitor.show_network_warnings = config.logging.show_network_warnings
            self.coordinator.show_network_warnings = config.logging.show_network_warnings
            self.coordinator.set_debounce(config.retry.debounce_seconds)
            if config.logging.debug_logs != self._config.logging.debug_logs:
                self._apply_debug_logs(config.logging.debug_logs)
            self._config = config

    def _apply_debug_logs(self, enabled: bool) -> None:
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        if enabled:
            self._level_before_debug = package_logger.level
            package_logger.setLevel(logging.DEBUG)
        else:
            package_logger.setLevel(
                logging.INFO if self._level_before_debug is None else self._level_before_debug
            )
            self._level_before_debug = None
        logger.debug("Debug logging %s", "enabled" if enabled else "disabled")

    def set_sync_retry_debounce(self, seconds: float) -> float:
        """Update the retry debounce (minimum 5 seconds).

        Returns:
            The debounce actually applied.
        """
        with self._lock:
            return self.coordinator.set_debounce(seconds)

    # Subscriptions

    def subscribe(self, kind: EventKind, listener: Listener) -> Subscription:
        return self.dispatcher.subscribe(kind, listener)

    def close(self) -> None:
        """Drop all subscribers and refuse further ticks."""
        with self._lock:
            self._closed = True
            self.dispatcher.clear()
