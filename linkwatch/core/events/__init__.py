"""Event notification for connectivity and sync retry changes."""

from linkwatch.core.events.dispatcher import EventDispatcher, EventKind, Subscription

__all__ = ["EventDispatcher", "EventKind", "Subscription"]
