"""Synchronous event dispatcher.

Owns an explicit registry of subscribers per event kind. Events are delivered
synchronously, in registration order, on the thread that publishes them.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

Listener = Callable[..., None]


class EventKind(str, Enum):
    """Notifications published by the monitor and retry coordinator.

    Payloads:
        CONNECTIVITY_CHANGED: (is_online: bool)
        STATUS_CHANGED: (status: NetworkStatus)
        RETRY_READY: ()
        CONNECTION_LOST: ()
        CONNECTION_RESTORED: ()
    """

    CONNECTIVITY_CHANGED = "connectivity_changed"
    STATUS_CHANGED = "status_changed"
    RETRY_READY = "retry_ready"
    CONNECTION_LOST = "connection_lost"
    CONNECTION_RESTORED = "connection_restored"


@dataclass(eq=False)
class Subscription:
    """Handle returned by EventDispatcher.subscribe.

    Attributes:
        kind: Event kind the listener is registered for.
        listener: The registered callable.
    """

    kind: EventKind
    listener: Listener
    _dispatcher: EventDispatcher = field(repr=False)

    def unsubscribe(self) -> None:
        """Remove this subscription. Safe to call more than once."""
        self._dispatcher.unsubscribe(self)


class EventDispatcher:
    """Registry of listeners keyed by event kind."""

    def __init__(self) -> None:
        self._subscriptions: dict[EventKind, list[Subscription]] = {
            kind: [] for kind in EventKind
        }
        self._lock = threading.Lock()

    def subscribe(self, kind: EventKind, listener: Listener) -> Subscription:
        """Register a listener.

        The same callable may be registered more than once; each
        registration gets its own Subscription and is called once per event.

        Args:
            kind: Event kind to listen for.
            listener: Callable receiving the event payload as positional args.

        Returns:
            Subscription handle used to unsubscribe.
        """
        with self._lock:
            subscription = Subscription(
                kind=kind,
                listener=listener,
                _dispatcher=self,
            )
            self._subscriptions[kind].append(subscription)
            return subscription

    def unsubscribe(self, subscription: Subscription) -> bool:
        """Remove a subscription.

        Returns:
            True if the subscription was registered, False if it was already
            removed.
        """
        with self._lock:
            registered = self._subscriptions[subscription.kind]
            if subscription in registered:
                registered.remove(subscription)
                return True
            return False

    def publish(self, kind: EventKind, *args: Any) -> None:
        """Deliver an event to every listener registered for ``kind``.

        The listener list is copied before delivery, so listeners added or
        removed during delivery take effect from the next publish. A listener
        that raises is logged and does not stop delivery to the rest.

        Args:
            kind: Event kind.
            *args: Payload passed to each listener.
        """
        with self._lock:
            snapshot = list(self._subscriptions[kind])

        for subscription in snapshot:
            try:
                subscription.listener(*args)
            except Exception:
                logger.exception(
                    "Listener %r failed handling %s", subscription.listener, kind.value
                )

    def listener_count(self, kind: EventKind | None = None) -> int:
        """Count registered listeners, for one kind or across all kinds."""
        with self._lock:
            if kind is not None:
                return len(self._subscriptions[kind])
            return sum(len(subs) for subs in self._subscriptions.values())

    def clear(self) -> None:
        """Remove every subscription."""
        with self._lock:
            for subs in self._subscriptions.values():
                subs.clear()
