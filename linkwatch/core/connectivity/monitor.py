"""Connectivity monitor with adaptive probe scheduling.

The monitor owns the online/offline state and decides when to re-probe
reachability. Probes are frequent right after a state change and back off
as the state persists, per the configured ProbeSchedule.
"""

import logging
from collections.abc import Callable

from linkwatch.core.events import EventDispatcher, EventKind
from linkwatch.domain.config import ProbeSchedule
from linkwatch.domain.entities import (
    ConnectionState,
    NetworkStatus,
    Reachability,
    derive_status,
)
from linkwatch.ports.clock import Clock
from linkwatch.ports.reachability import ReachabilityProbe

logger = logging.getLogger(__name__)


def _no_pending_sync() -> bool:
    return False


class ConnectivityMonitor:
    """Tracks connection state and runs the adaptive probe loop.

    The monitor starts ONLINE, with the state and last probe both stamped
    at construction time. State is mutated only by ``probe``.

    The monitor is not thread-safe on its own; NetworkManager serializes
    access when it is driven from more than one thread.
    """

    def __init__(
        self,
        clock: Clock,
        probe: ReachabilityProbe,
        dispatcher: EventDispatcher,
        schedule: ProbeSchedule | None = None,
        enabled: bool = True,
        has_pending_sync: Callable[[], bool] = _no_pending_sync,
        show_network_warnings: bool = True,
    ) -> None:
        """Initialize the monitor.

        Args:
            clock: Time source.
            probe: Reachability probe queried on every probe pass.
            dispatcher: Dispatcher that receives state-change notifications.
            schedule: Adaptive probe schedule (defaults to ProbeSchedule()).
            enabled: Whether ``tick`` probes at all.
            has_pending_sync: Supplier of the pending-sync flag, used to derive
                NetworkStatus.
            show_network_warnings: Log a warning when connectivity is lost.
        """
        self._clock = clock
        self._probe = probe
        self._dispatcher = dispatcher
        self.schedule = schedule or ProbeSchedule()
        self.enabled = enabled
        self.show_network_warnings = show_network_warnings
        self._has_pending_sync = has_pending_sync

        now = clock.now()
        self._state = ConnectionState.ONLINE
        self._state_entered_at = now
        self._last_probe_at = now

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def state_entered_at(self) -> float:
        return self._state_entered_at

    @property
    def last_probe_at(self) -> float:
        return self._last_probe_at

    def is_online(self) -> bool:
        return self._state.is_online

    def status(self) -> NetworkStatus:
        """Current NetworkStatus derived from state and the pending flag."""
        return derive_status(self._state, self._has_pending_sync())

    def tick(self, now: float) -> bool:
        """Probe if the adaptive interval has elapsed since the last probe.

        Args:
            now: Current clock time.

        Returns:
            True if a probe was performed.
        """
        if not self.enabled:
            return False

        elapsed = now - self._state_entered_at
        interval = self.schedule.select_interval(elapsed)
        if now - self._last_probe_at < interval:
            return False

        self._last_probe_at = now
        self.probe(now)
        logger.debug(
            "%s for %.0fs - checking with interval %ss",
            self._state.value.capitalize(),
            elapsed,
            interval,
        )
        return True

    def probe(self, now: float) -> None:
        """Query reachability, update state and publish notifications.

        Args:
            now: Current clock time, used as the entry time of a new state.
        """
        was_online = self._state.is_online
        previous_status = self.status()

        reachability = self._probe.classify()
        new_state = reachability.to_state()
        if new_state is not None and new_state is not self._state:
            self._state = new_state
            self._state_entered_at = now
            self._log_transition(reachability)

        is_online = self._state.is_online
        if was_online != is_online:
            self._dispatcher.publish(EventKind.CONNECTIVITY_CHANGED, is_online)
            if is_online:
                self._dispatcher.publish(EventKind.CONNECTION_RESTORED)
            else:
                self._dispatcher.publish(EventKind.CONNECTION_LOST)

        status = self.status()
        if status is not previous_status:
            self._dispatcher.publish(EventKind.STATUS_CHANGED, status)

    def force_probe_now(self) -> None:
        """Probe immediately, bypassing the schedule."""
        self.probe(self._clock.now())

    def _log_transition(self, reachability: Reachability) -> None:
        if reachability is Reachability.UNREACHABLE:
            if self.show_network_warnings:
                logger.warning("NO INTERNET - connection lost")
        elif reachability is Reachability.REACHABLE_REMOTE:
            logger.debug("Online (mobile data)")
        else:
            logger.debug("Online (LAN/Wi-Fi)")
