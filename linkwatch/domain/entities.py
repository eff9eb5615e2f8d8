"""Domain entities and value objects.

Core domain models representing connectivity state, sync status and the
vocabulary shared by the monitor and the retry coordinator. These are pure
Python enums and functions with no dependencies on infrastructure.
"""

from __future__ import annotations

from enum import Enum


class ConnectionState(str, Enum):
    """Online/offline state tracked by the connectivity monitor."""

    ONLINE = "online"
    OFFLINE = "offline"

    @property
    def is_online(self) -> bool:
        return self is ConnectionState.ONLINE


class Reachability(str, Enum):
    """Coarse network-layer reachability classification.

    Reported by a ReachabilityProbe. Only UNREACHABLE and the two reachable
    values change the connection state; UNKNOWN leaves it untouched.

    - UNREACHABLE: No usable network transport
    - REACHABLE_REMOTE: Reachable via carrier/cellular data
    - REACHABLE_LOCAL: Reachable via LAN or Wi-Fi
    - UNKNOWN: Probe could not decide
    """

    UNREACHABLE = "unreachable"
    REACHABLE_REMOTE = "reachable_remote"
    REACHABLE_LOCAL = "reachable_local"
    UNKNOWN = "unknown"

    def to_state(self) -> ConnectionState | None:
        """Map the classification to a connection state.

        Returns:
            The implied ConnectionState, or None if the classification
            must not alter state.
        """
        if self is Reachability.UNREACHABLE:
            return ConnectionState.OFFLINE
        if self in (Reachability.REACHABLE_REMOTE, Reachability.REACHABLE_LOCAL):
            return ConnectionState.ONLINE
        return None


class NetworkStatus(str, Enum):
    """Connectivity combined with sync status.

    - ONLINE: Connected and ready for network operations
    - OFFLINE_PENDING: Offline with data waiting to be synced
    - OFFLINE_NO_DATA: Offline with nothing pending
    """

    ONLINE = "online"
    OFFLINE_PENDING = "offline_pending"
    OFFLINE_NO_DATA = "offline_no_data"


def derive_status(state: ConnectionState, has_pending_sync_data: bool) -> NetworkStatus:
    """Derive the network status from connection state and pending flag.

    Args:
        state: Current connection state.
        has_pending_sync_data: Whether a failed sync awaits retry.

    Returns:
        ONLINE for any online state, otherwise OFFLINE_PENDING or
        OFFLINE_NO_DATA depending on the pending flag.
    """
    if state is ConnectionState.ONLINE:
        return NetworkStatus.ONLINE
    if has_pending_sync_data:
        return NetworkStatus.OFFLINE_PENDING
    return NetworkStatus.OFFLINE_NO_DATA


class ErrorKind(str, Enum):
    """Kind of error reported for a failed network request.

    Values match the error names hosts typically report, so plain strings
    such as "Timeout" compare equal to the enum members.
    """

    NONE = "None"
    CONNECTION_ERROR = "ConnectionError"
    TIMEOUT = "Timeout"
    PROTOCOL_ERROR = "ProtocolError"
    DATA_PROCESSING_ERROR = "DataProcessingError"


class AttemptDecision(str, Enum):
    """Outcome of guarding a sync attempt."""

    ALLOWED = "allowed"
    DENIED = "denied"

    @property
    def allowed(self) -> bool:
        return self is AttemptDecision.ALLOWED
