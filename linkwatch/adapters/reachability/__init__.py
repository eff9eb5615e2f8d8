"""Reachability probe adapters."""

from linkwatch.adapters.reachability.socket_probe import SocketReachabilityProbe

__all__ = ["SocketReachabilityProbe"]
