"""Exponentially decayed activity level (duty-cycle formulation)."""

import logging
from typing import Optional

logger = logging.getLogger(__name__)

# Largest double below 1.0
MAX_LEVEL = 1.0 - 2.0**-53


class ActivityEstimator:
    """Tracks a probability-like activity level in [0, 1).

    Every idle second relaxes the level towards 0 and every active second
    relaxes it towards 1, each by a factor of ``decay``:

        idle:   level -= level * decay
        active: level += (1 - level) * decay

    An episode is its idle part followed by its active part. The per-second
    recurrence has the closed form ``level * (1 - decay) ** n`` for n idle
    seconds and ``1 - (1 - level) * (1 - decay) ** n`` for n active seconds,
    so an update costs the same regardless of the episode length. Long
    activity would round the closed form up to exactly 1.0, so the level is
    capped at the largest float below 1.
    """

    def __init__(self, decay: float, level: float = 0.0):
        """Initialize the estimator.

        Args:
            decay: Per-second relaxation factor, 0 < decay < 1
            level: Initial activity level
        """
        if not 0 < decay < 1:
            raise ValueError(f"decay must be in (0, 1), got {decay}")
        self.decay = decay
        self.level = level

    def update(
        self, idle_seconds: int, active_seconds: int, decay: Optional[float] = None
    ) -> float:
        """Fold one episode into the activity level.

        Negative durations leave the level unchanged.

        Args:
            idle_seconds: Seconds of silence before the activity
            active_seconds: Seconds of activity
            decay: Overrides the configured decay for this update only

        Returns:
            The new activity level
        """
        if idle_seconds < 0 or active_seconds < 0:
            return self.level

        retain = 1.0 - (self.decay if decay is None else decay)
        level = self.level * retain**idle_seconds
        level = min(1.0 - (1.0 - level) * retain**active_seconds, MAX_LEVEL)
        self.level = level
        return level

    def reset(self, level: float = 0.0) -> None:
        self.level = level
