"""Data models for activity episodes and baseline statistics."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

# Start times are rendered like the recordings they describe
EPISODE_ID_FORMAT = "%Y-%m-%d %H.%M.%S"


def weekday_index(moment: datetime) -> int:
    """Day of week counted from Sunday (0) to Saturday (6)."""
    return (moment.weekday() + 1) % 7


def is_weekend(weekday: int) -> bool:
    """Check if a Sunday-based weekday index falls on Saturday or Sunday."""
    return weekday == 0 or weekday == 6


@dataclass(frozen=True)
class Episode:
    """One finished idle+active interval pair.

    Attributes:
        start_time: Local time the active part started
        idle_seconds: Seconds of silence immediately before the activity
        active_seconds: Seconds of activity
    """

    start_time: datetime
    idle_seconds: int
    active_seconds: int

    @property
    def identifier(self) -> str:
        return self.start_time.strftime(EPISODE_ID_FORMAT)

    @property
    def is_malformed(self) -> bool:
        """Check if either duration is negative."""
        return self.idle_seconds < 0 or self.active_seconds < 0

    @property
    def total_seconds(self) -> int:
        return self.idle_seconds + self.active_seconds

    def __repr__(self) -> str:
        return f"Episode({self.identifier}, idle={self.idle_seconds}s, active={self.active_seconds}s)"


class TriggerState(Enum):
    """Hysteresis state of the notification trigger."""

    IDLE = "idle"
    TRIGGERED = "triggered"


@dataclass(frozen=True)
class Expectation:
    """Expected activity level for a moment in time.

    Attributes:
        mean: Expected (denoised) mean activity
        stdev: Expected (denoised) standard deviation
        source: Where the values came from: 'fourier', 'interpolated',
            'overall' or 'cold_start'
    """

    mean: float
    stdev: float
    source: str = "overall"

    @property
    def is_cold_start(self) -> bool:
        return self.source == "cold_start"


@dataclass(frozen=True)
class BucketStats:
    """Read-only export of one accumulator."""

    count: int
    mean: float
    stdev: float

    def __str__(self) -> str:
        if not self.count:
            return "BucketStats(empty)"
        return f"BucketStats(n={self.count}, mean={self.mean:.4f}, stdev={self.stdev:.4f})"
