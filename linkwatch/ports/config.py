"""Configuration provider port.

Defines the interface for loading and accessing application configuration.
"""

from pathlib import Path
from typing import Protocol

from linkwatch.domain.config import LinkwatchConfig


class ConfigProvider(Protocol):
    """Protocol for loading and providing configuration."""

    def load(self, config_dir: Path | None = None) -> LinkwatchConfig:
        """Load configuration.

        Args:
            config_dir: Directory containing a local config.toml, if any

        Returns:
            LinkwatchConfig instance with loaded or default values

        Note:
            Implementations should gracefully fall back to defaults
            if config file is missing or invalid.
        """
        ...
