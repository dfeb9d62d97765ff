"""Configuration for the activity alarm engine.

Settings live in plain dataclasses and can be loaded from a single YAML
file with ``system`` and ``monitor`` sections. Defaults reproduce the
classic behaviour: one notification per week and a 10 minute decay.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from .baseline import HOURS_PER_DAY
from .processing.smoothing import (
    COLD_START_SENTINEL,
    DEFAULT_HARMONICS,
    DEFAULT_MIN_HISTORY_SECONDS,
    SmoothingStrategy,
)
from .threshold import DEFAULT_EPSILON, DEFAULT_RETURN_PERIOD_HOURS

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

DEFAULT_DECAY_SECONDS = 600.0


@dataclass
class SystemConfig:
    """System-level configuration settings.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
    """

    log_level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class MonitorConfig:
    """Settings of the baseline and trigger pipeline.

    Attributes:
        return_period_hours: Desired average hours between notifications.
        decay_seconds: Time constant of the activity level; the per-second
            decay is its reciprocal.
        smoothing: Denoising strategy for the hourly baseline.
        harmonics: Even harmonic indices kept by the Fourier smoother.
        min_history_seconds: History needed before notifications can fire.
        cold_start_sentinel: Expected mean/stdev reported during cold start.
        probability_epsilon: Clamp for the quantile passed to the inverse CDF.
    """

    return_period_hours: float = DEFAULT_RETURN_PERIOD_HOURS
    decay_seconds: float = DEFAULT_DECAY_SECONDS
    smoothing: SmoothingStrategy = SmoothingStrategy.FOURIER
    harmonics: Tuple[int, ...] = DEFAULT_HARMONICS
    min_history_seconds: float = DEFAULT_MIN_HISTORY_SECONDS
    cold_start_sentinel: float = COLD_START_SENTINEL
    probability_epsilon: float = DEFAULT_EPSILON

    @property
    def decay(self) -> float:
        return 1.0 / self.decay_seconds

    def validate(self) -> "MonitorConfig":
        """Check value ranges.

        Returns:
            self, to allow chaining.

        Raises:
            ValueError: If any setting is out of range.
        """
        if self.return_period_hours <= 0:
            raise ValueError(f"return_period_hours must be positive, got {self.return_period_hours}")
        if self.decay_seconds <= 1:
            raise ValueError(f"decay_seconds must be greater than 1, got {self.decay_seconds}")
        if self.min_history_seconds < 0:
            raise ValueError(
                f"min_history_seconds must not be negative, got {self.min_history_seconds}"
            )
        if not 0 < self.probability_epsilon < 0.5:
            raise ValueError(
                f"probability_epsilon must be in (0, 0.5), got {self.probability_epsilon}"
            )
        in_range = all(0 <= k < HOURS_PER_DAY and k % 2 == 0 for k in self.harmonics)
        if not self.harmonics or not in_range:
            raise ValueError(
                f"harmonics must be even indices in 0..{HOURS_PER_DAY - 2}, got {self.harmonics}"
            )
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MonitorConfig":
        """Build from a parsed ``monitor`` mapping, keeping defaults for gaps."""
        config = cls()
        if "return_period_hours" in data:
            config.return_period_hours = float(data["return_period_hours"])
        if "decay_seconds" in data:
            config.decay_seconds = float(data["decay_seconds"])
        if "smoothing" in data:
            config.smoothing = parse_smoothing(data["smoothing"])
        if "harmonics" in data:
            config.harmonics = tuple(int(k) for k in data["harmonics"])
        if "min_history_seconds" in data:
            config.min_history_seconds = float(data["min_history_seconds"])
        if "cold_start_sentinel" in data:
            config.cold_start_sentinel = float(data["cold_start_sentinel"])
        if "probability_epsilon" in data:
            config.probability_epsilon = float(data["probability_epsilon"])
        return config.validate()


def parse_smoothing(value: Union[str, SmoothingStrategy]) -> SmoothingStrategy:
    """Resolve a strategy name such as ``"fourier"`` (case-insensitive)."""
    if isinstance(value, SmoothingStrategy):
        return value
    try:
        return SmoothingStrategy(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(s.value for s in SmoothingStrategy)
        raise ValueError(f"Unknown smoothing strategy '{value}' (expected one of: {choices})")


@dataclass
class GlobalConfig:
    """Unified configuration for the entire application."""

    system: SystemConfig = field(default_factory=SystemConfig)
    monitor: MonitorConfig = field(default_factory=MonitorConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GlobalConfig":
        sys_data = data.get("system") or {}
        system_config = SystemConfig(
            log_level=str(sys_data.get("log_level", "INFO")).upper(),
            log_file=sys_data.get("log_file"),
        )
        monitor_config = MonitorConfig.from_dict(data.get("monitor") or {})
        return cls(system=system_config, monitor=monitor_config)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "GlobalConfig":
        """Load the global configuration from a YAML file.

        The YAML file should have the following structure:
        ```yaml
        system:
          log_level: INFO
        monitor:
          return_period_hours: 168
          decay_seconds: 600
          smoothing: fourier
        ```

        Args:
            path: Path to the configuration YAML file.

        Returns:
            A GlobalConfig object populated with the settings.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        config = cls.from_dict(data)
        logger.debug(f"Loaded configuration from {path}: {config}")
        return config


def configure_logging(system: SystemConfig) -> None:
    """Set up root logging from the system settings."""
    handlers = [logging.StreamHandler()]
    if system.log_file:
        handlers.append(logging.FileHandler(system.log_file))
    logging.basicConfig(
        level=getattr(logging, system.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
        force=True,
    )
