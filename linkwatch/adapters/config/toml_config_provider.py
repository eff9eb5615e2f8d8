"""TOML-based configuration provider.

Loads configuration from <config_dir>/config.toml with global config fallback.

Config loading priority (highest to lowest):
1. Local: <config_dir>/config.toml
2. Global: ~/.config/linkwatch/config.toml (user defaults)
3. Built-in defaults
"""

import logging
from pathlib import Path

from linkwatch.domain.config import LinkwatchConfig
from linkwatch.shared.config_io import get_global_config_path, load_config_data

logger = logging.getLogger(__name__)


class TomlConfigProvider:
    """Configuration provider that loads from TOML files.

    Implements config cascade:
    1. Load global config (~/.config/linkwatch/config.toml) if present
    2. Load local config (<config_dir>/config.toml) if present
    3. Local values override global values (key-level merge)
    4. Missing values fall back to built-in defaults

    Gracefully handles missing or invalid configs with warnings.
    """

    def load(self, config_dir: Path | None = None) -> LinkwatchConfig:
        """Load configuration with global fallback.

        Uses domain-level merging via LinkwatchConfig.from_partial so that
        validation happens at each merge step.

        Args:
            config_dir: Directory containing a local config.toml, or None to
                use only the global config

        Returns:
            LinkwatchConfig instance with merged global/local values or defaults
        """
        global_path = get_global_config_path()

        config = LinkwatchConfig.default()

        if global_path.exists():
            try:
                global_data = load_config_data(global_path)
                config = LinkwatchConfig.from_partial(config, global_data)
                logger.debug("Loaded global config from %s", global_path)
            except (FileNotFoundError, ValueError, TypeError) as e:
                logger.warning(
                    "Failed to parse global config at %s: %s. Ignoring global config.",
                    global_path,
                    e,
                )

        if config_dir is None:
            return config

        local_path = config_dir / "config.toml"
        if local_path.exists():
            try:
                local_data = load_config_data(local_path)
                config = LinkwatchConfig.from_partial(config, local_data)
                logger.debug("Loaded local config from %s", local_path)
            except (FileNotFoundError, ValueError, TypeError) as e:
                logger.warning(
                    "Failed to parse %s: %s. Using global/default configuration.",
                    local_path,
                    e,
                )

        return config
