"""Configuration I/O utilities for reading and writing TOML config files.

This module handles serialization/deserialization of LinkwatchConfig to/from TOML format.
"""

import os
import platform
import tomllib  # Built-in Python 3.11+
from pathlib import Path
from typing import Any

import tomli_w

from linkwatch.domain.config import LinkwatchConfig


def get_global_config_path() -> Path:
    """Get the path to the global config file.

    The location is platform-dependent:
    - Linux/macOS: $XDG_CONFIG_HOME/linkwatch/config.toml or ~/.config/linkwatch/config.toml
    - Windows: %APPDATA%/linkwatch/config.toml

    Returns:
        Path to the global config file (may not exist)
    """
    if platform.system() == "Windows":
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "linkwatch" / "config.toml"
        return Path.home() / ".config" / "linkwatch" / "config.toml"

    xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg_config:
        return Path(xdg_config) / "linkwatch" / "config.toml"
    return Path.home() / ".config" / "linkwatch" / "config.toml"


def load_config_data(path: Path) -> dict[str, Any]:
    """Load raw TOML data from a config file.

    Args:
        path: Path to config.toml file

    Returns:
        Dictionary with parsed TOML data

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in config file: {e}") from e


def config_data_to_linkwatch_config(data: dict[str, Any]) -> LinkwatchConfig:
    """Convert raw config data dictionary to LinkwatchConfig.

    Args:
        data: Dictionary with config sections

    Returns:
        LinkwatchConfig instance

    Raises:
        ValueError: If a value fails validation or a key is unknown
    """
    try:
        return LinkwatchConfig.from_partial(LinkwatchConfig.default(), data)
    except TypeError as e:
        # dataclasses.replace reports unknown keys as TypeError
        raise ValueError(f"Invalid configuration: {e}") from e


def load_config(path: Path) -> LinkwatchConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to config.toml file

    Returns:
        Parsed LinkwatchConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed
    """
    data = load_config_data(path)
    return config_data_to_linkwatch_config(data)


def config_to_data(config: LinkwatchConfig) -> dict[str, Any]:
    """Convert a LinkwatchConfig to a TOML-serializable dictionary."""
    return {
        "detection": {
            "enabled": config.detection.enabled,
            "thresholds": list(config.detection.schedule.thresholds),
            "intervals": list(config.detection.schedule.intervals),
        },
        "retry": {
            "debounce_seconds": config.retry.debounce_seconds,
        },
        "logging": {
            "show_network_warnings": config.logging.show_network_warnings,
            "debug_logs": config.logging.debug_logs,
        },
        "probe": {
            "host": config.probe.host,
            "port": config.probe.port,
            "timeout": config.probe.timeout,
        },
    }


def save_config(config: LinkwatchConfig, path: Path) -> None:
    """Save configuration to a TOML file.

    Args:
        config: LinkwatchConfig to save
        path: Destination path for config.toml
    """
    data = config_to_data(config)

    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("wb") as f:
        tomli_w.dump(data, f)


def create_default_config_file(path: Path) -> None:
    """Create a default config.toml file with sensible defaults and comments.

    Args:
        path: Destination path for config.toml
    """
    # Template string preserves comments and formatting
    template = """\
# linkwatch configuration
# Created by: linkwatch config init

[detection]
# Probe reachability on a schedule
enabled = true

# Elapsed time in the current state (seconds) at which the probe interval
# steps up: 1 minute, 10 minutes, 1 hour, 10 hours
thresholds = [60.0, 600.0, 3600.0, 36000.0]

# Probe interval (seconds) for each step; the last applies beyond 10 hours
intervals = [5.0, 10.0, 30.0, 600.0, 3600.0]

[retry]
# Minimum delay before retrying a failed sync (seconds, minimum 5)
debounce_seconds = 60.0

[logging]
# Log warnings when connectivity is lost or a sync fails
show_network_warnings = true

# Detailed debug logging
debug_logs = false

[probe]
# TCP endpoint used to test reachability
host = "1.1.1.1"
port = 53

# Connect timeout (seconds)
timeout = 3.0
"""

    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as f:
        f.write(template)
