"""Socket-based reachability probe.

Opens a short-lived TCP connection to a well-known host. If the connection
succeeds, the local address of the socket is matched against the host's
network interfaces (via psutil) to tell cellular links apart from LAN/Wi-Fi.
"""

import logging
import socket

import psutil

from linkwatch.domain.entities import Reachability

logger = logging.getLogger(__name__)

# Interface name prefixes used by cellular modems on Linux, macOS/iOS and Android.
CELLULAR_INTERFACE_PREFIXES = ("wwan", "rmnet", "ccmni", "pdp_ip", "ppp", "wwp")


def interface_for_address(address: str) -> str | None:
    """Find the name of the interface holding a local IP address.

    Args:
        address: Local IP address (IPv4 or IPv6).

    Returns:
        Interface name, or None if no interface carries the address.
    """
    for name, addrs in psutil.net_if_addrs().items():
        for addr in addrs:
            # IPv6 link-local addresses carry a %scope suffix
            if addr.address.split("%", 1)[0] == address:
                return name
    return None


def classify_interface(name: str | None) -> Reachability:
    """Classify a connected interface as cellular or local network."""
    if name and name.lower().startswith(CELLULAR_INTERFACE_PREFIXES):
        return Reachability.REACHABLE_REMOTE
    return Reachability.REACHABLE_LOCAL


class SocketReachabilityProbe:
    """ReachabilityProbe that connects to a TCP endpoint.

    Any socket error, including a timeout, is reported as UNREACHABLE.
    """

    def __init__(self, host: str = "1.1.1.1", port: int = 53, timeout: float = 3.0) -> None:
        """Initialize the probe.

        Args:
            host: Host to connect to.
            port: TCP port to connect to.
            timeout: Connect timeout in seconds; bounds every classify() call.
        """
        self.host = host
        self.port = port
        self.timeout = timeout

    def classify(self) -> Reachability:
        try:
            with socket.create_connection((self.host, self.port), timeout=self.timeout) as sock:
                local_address = sock.getsockname()[0]
        except OSError as e:
            logger.debug("Probe of %s:%s failed: %s", self.host, self.port, e)
            return Reachability.UNREACHABLE

        try:
            interface = interface_for_address(local_address)
        except psutil.Error as e:
            logger.debug("Could not inspect network interfaces: %s", e)
            interface = None

        return classify_interface(interface)
