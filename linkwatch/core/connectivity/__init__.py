"""Connectivity monitoring with adaptive probe intervals."""

from linkwatch.core.connectivity.monitor import ConnectivityMonitor

__all__ = ["ConnectivityMonitor"]
