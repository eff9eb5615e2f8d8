"""Reachability probe port interface.

Defines the collaborator the connectivity monitor queries to decide whether
the network is reachable.
"""

from typing import Protocol

from linkwatch.domain.entities import Reachability


class ReachabilityProbe(Protocol):
    """Protocol for classifying current network reachability."""

    def classify(self) -> Reachability:
        """Classify current reachability.

        Returns:
            Reachability classification.

        Note:
            Implementations must not raise. Any failure of the underlying
            query must be reported as Reachability.UNREACHABLE, and the call
            must be bounded by a timeout so it cannot stall the tick loop.
        """
        ...
