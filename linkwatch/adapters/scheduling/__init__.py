"""Schedulers that drive the tick loop."""

from linkwatch.adapters.scheduling.thread_ticker import ThreadTicker

__all__ = ["ThreadTicker"]
