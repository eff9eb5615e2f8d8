"""Config domain models for linkwatch.

Configuration is stored in config.toml and covers connectivity detection,
the adaptive probe schedule, sync retry debounce, logging toggles and the
default reachability probe. This module defines the domain models that
represent validated configuration state.
"""

from dataclasses import dataclass, field, replace
from typing import Any

MIN_DEBOUNCE_SECONDS = 5.0


@dataclass(frozen=True)
class ProbeSchedule:
    """Adaptive probe schedule.

    The interval used between probes grows the longer the current
    connection state has persisted. ``thresholds[i]`` is the exclusive upper
    bound of elapsed time for ``intervals[i]``; the last interval applies to
    anything beyond the final threshold.

    Attributes:
        thresholds: Four strictly increasing elapsed-time bounds in seconds
                    (default: 1 minute, 10 minutes, 1 hour, 10 hours)
        intervals: Five probe intervals in seconds (default: 5s, 10s, 30s,
                   10 minutes, 1 hour)

    Raises:
        ValueError: If the lengths are wrong, any value is not positive, or
                   thresholds are not strictly increasing.
    """

    thresholds: tuple[float, ...] = (60.0, 600.0, 3600.0, 36000.0)
    intervals: tuple[float, ...] = (5.0, 10.0, 30.0, 600.0, 3600.0)

    def __post_init__(self) -> None:
        """Validate schedule after initialization."""
        object.__setattr__(self, "thresholds", tuple(float(t) for t in self.thresholds))
        object.__setattr__(self, "intervals", tuple(float(i) for i in self.intervals))

        if len(self.thresholds) != 4:
            raise ValueError(
                f"thresholds must have exactly 4 entries, got {len(self.thresholds)}"
            )
        if len(self.intervals) != 5:
            raise ValueError(
                f"intervals must have exactly 5 entries, got {len(self.intervals)}"
            )
        if any(t <= 0 for t in self.thresholds):
            raise ValueError(f"thresholds must be positive, got {list(self.thresholds)}")
        if any(i <= 0 for i in self.intervals):
            raise ValueError(f"intervals must be positive, got {list(self.intervals)}")
        for lower, upper in zip(self.thresholds, self.thresholds[1:]):
            if upper <= lower:
                raise ValueError(
                    f"thresholds must be strictly increasing, got {list(self.thresholds)}"
                )

    def select_interval(self, elapsed: float) -> float:
        """Select the probe interval for time spent in the current state.

        Args:
            elapsed: Seconds since the current state began.

        Returns:
            Interval in seconds (first matching bucket wins).
        """
        for threshold, interval in zip(self.thresholds, self.intervals):
            if elapsed < threshold:
                return interval
        return self.intervals[-1]


@dataclass(frozen=True)
class DetectionConfig:
    """Configuration for connectivity detection.

    Attributes:
        enabled: Whether scheduled probing runs at all (default: True)
        schedule: Adaptive probe schedule
    """

    enabled: bool = True
    schedule: ProbeSchedule = field(default_factory=ProbeSchedule)


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for sync retry behavior.

    Attributes:
        debounce_seconds: Minimum delay after a failure before a retry is
                          signaled (default: 60). Values below 5 seconds are
                          clamped to 5 rather than rejected.
    """

    debounce_seconds: float = 60.0

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "debounce_seconds",
            max(MIN_DEBOUNCE_SECONDS, float(self.debounce_seconds)),
        )


@dataclass(frozen=True)
class LoggingConfig:
    """Configuration for log output.

    Attributes:
        show_network_warnings: Log warnings when connectivity is lost or a
                               sync fails (default: True)
        debug_logs: Enable detailed debug logging (default: False)
    """

    show_network_warnings: bool = True
    debug_logs: bool = False


@dataclass(frozen=True)
class ProbeConfig:
    """Configuration for the default socket reachability probe.

    Attributes:
        host: Host to open a TCP connection to (default: 1.1.1.1)
        port: TCP port (default: 53)
        timeout: Connect timeout in seconds (default: 3.0)

    Raises:
        ValueError: If port is out of range or timeout is not positive.
    """

    host: str = "1.1.1.1"
    port: int = 53
    timeout: float = 3.0

    def __post_init__(self) -> None:
        """Validate probe config after initialization."""
        if not 0 < self.port < 65536:
            raise ValueError(f"port must be between 1 and 65535, got {self.port}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")


@dataclass(frozen=True)
class LinkwatchConfig:
    """Complete linkwatch configuration.

    Attributes:
        detection: Connectivity detection and probe schedule
        retry: Sync retry configuration
        logging: Logging toggles
        probe: Default reachability probe settings
    """

    detection: DetectionConfig = field(default_factory=DetectionConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    probe: ProbeConfig = field(default_factory=ProbeConfig)

    @staticmethod
    def default() -> "LinkwatchConfig":
        """Create a config with all default values."""
        return LinkwatchConfig(
            detection=DetectionConfig(),
            retry=RetryConfig(),
            logging=LoggingConfig(),
            probe=ProbeConfig(),
        )

    @staticmethod
    def from_partial(base: "LinkwatchConfig", data: dict[str, Any]) -> "LinkwatchConfig":
        """Overlay raw config data onto an existing config.

        Only keys present in ``data`` are changed; every section is
        re-validated through its dataclass.

        Args:
            base: Config providing values for anything not in data
            data: Raw dictionary as parsed from TOML

        Returns:
            New LinkwatchConfig with overrides applied

        Raises:
            ValueError: If a value fails validation.
            TypeError: If a section contains unknown keys.
        """
        detection_data = dict(data.get("detection", {}))
        schedule_data = {
            key: tuple(detection_data.pop(key))
            for key in ("thresholds", "intervals")
            if key in detection_data
        }
        schedule = replace(base.detection.schedule, **schedule_data)
        detection = replace(base.detection, schedule=schedule, **detection_data)

        return LinkwatchConfig(
            detection=detection,
            retry=replace(base.retry, **data.get("retry", {})),
            logging=replace(base.logging, **data.get("logging", {})),
            probe=replace(base.probe, **data.get("probe", {})),
        )
