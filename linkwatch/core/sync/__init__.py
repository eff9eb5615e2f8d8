"""Sync retry coordination.

Contains the SyncRetryCoordinator, which owns the pending-sync flag and the
retry debounce, and the classify_retryable decision table.
"""

from linkwatch.core.sync.retry_coordinator import SyncRetryCoordinator, classify_retryable

__all__ = ["SyncRetryCoordinator", "classify_retryable"]
