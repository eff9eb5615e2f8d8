"""Factory classes for manager and adapter instantiation.

This module centralizes the creation of the NetworkManager and its
collaborators, keeping the CLI layer free from direct adapter imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from linkwatch.core.backup import OfflineBackupService
    from linkwatch.core.network_manager import NetworkManager
    from linkwatch.domain.config import LinkwatchConfig
    from linkwatch.ports.clock import Clock
    from linkwatch.ports.config import ConfigProvider
    from linkwatch.ports.reachability import ReachabilityProbe
    from linkwatch.ports.ticker import Ticker


def get_default_backup_path() -> Path:
    """Default location of the offline backup store."""
    return Path.home() / ".linkwatch" / "backup.json"


class ConfigFactory:
    """Factory for creating configuration providers."""

    def create_config_provider(self) -> ConfigProvider:
        from linkwatch.adapters.config.toml_config_provider import TomlConfigProvider

        return TomlConfigProvider()


class ManagerFactory:
    """Factory for creating a wired NetworkManager.

    Args:
        config: LinkwatchConfig with detection, retry, logging and probe settings.
    """

    def __init__(self, config: LinkwatchConfig) -> None:
        """Initialize factory with configuration.

        Args:
            config: Configuration used for every object this factory creates.
        """
        self._config = config

    def create_probe(self) -> ReachabilityProbe:
        """Create the socket reachability probe described by the config."""
        from linkwatch.adapters.reachability import SocketReachabilityProbe

        return SocketReachabilityProbe(
            host=self._config.probe.host,
            port=self._config.probe.port,
            timeout=self._config.probe.timeout,
        )

    def create_network_manager(
        self,
        clock: Clock | None = None,
        probe: ReachabilityProbe | None = None,
    ) -> NetworkManager:
        """Create a NetworkManager.

        Args:
            clock: Time source (MonotonicClock if omitted).
            probe: Reachability probe (socket probe from config if omitted).

        Returns:
            NetworkManager that has not been started yet.
        """
        from linkwatch.adapters.clock.monotonic import MonotonicClock
        from linkwatch.core.network_manager import NetworkManager

        return NetworkManager(
            self._config,
            clock=clock or MonotonicClock(),
            probe=probe or self.create_probe(),
        )

    def create_ticker(self, period: float) -> Ticker:
        """Create the thread ticker that drives NetworkManager.tick."""
        from linkwatch.adapters.scheduling import ThreadTicker

        return ThreadTicker(period=period)

    def create_backup_service(
        self,
        manager: NetworkManager,
        path: Path | None = None,
    ) -> OfflineBackupService:
        """Create an OfflineBackupService bound to a manager.

        Args:
            manager: Manager supplying connectivity and receiving the
                pending-sync mark after a restore.
            path: JSON store location (default: ~/.linkwatch/backup.json).
        """
        from linkwatch.adapters.persistence import JsonFileStore
        from linkwatch.core.backup import OfflineBackupService

        return OfflineBackupService(
            JsonFileStore(path or get_default_backup_path()),
            is_online=manager.is_online,
            on_restored=manager.mark_restored_backup,
        )
