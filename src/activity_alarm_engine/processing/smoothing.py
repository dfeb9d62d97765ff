"""Denoising of the hourly baseline curve.

Two strategies turn the 24 discrete hourly buckets of one weekday/weekend
class into an expected value at an arbitrary time of day:

- **Fourier**: a low-pass filter keeping only the DC term and the first
  three daily harmonics, evaluated at a fractional hour. Requires every
  hour of the class to have data.
- **Interpolated**: linear blend of the episode's own bucket with the
  adjacent one, weighted by minute of hour.

Both fall back to the overall statistics, and to a large sentinel while
less than ``min_history_seconds`` of history has been observed.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Sequence, Tuple

import numpy as np

from activity_alarm_engine.baseline import HOURS_PER_DAY, SeasonalBaseline
from activity_alarm_engine.models import Expectation, is_weekend, weekday_index

logger = logging.getLogger(__name__)

# Even indices k stand for harmonic k/2 of the 24 hour period
DEFAULT_HARMONICS = (0, 2, 4, 6)
DEFAULT_MIN_HISTORY_SECONDS = 3600.0
COLD_START_SENTINEL = 1001.0


class SmoothingStrategy(Enum):
    """How the expected value is derived from the hourly buckets."""

    INTERPOLATED = "interpolated"
    FOURIER = "fourier"


class FourierSmoother:
    """Truncated discrete Fourier series of a 24 point daily curve."""

    def __init__(self, harmonics: Sequence[int] = DEFAULT_HARMONICS):
        self.harmonics = np.asarray(harmonics, dtype=float)
        # Single-sided spectrum: non-DC terms count twice
        self.weights = np.where(self.harmonics == 0, 1.0, 2.0)
        hours = np.arange(HOURS_PER_DAY, dtype=float)
        phases = np.pi * np.outer(self.harmonics, hours) / HOURS_PER_DAY
        self._cos = np.cos(phases)
        self._sin = np.sin(phases)

    def transform(self, values: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
        """Forward transform of the hourly values.

        Args:
            values: 24 hourly values, index = hour of day

        Returns:
            (A, B): cosine and sine coefficients, one per harmonic
        """
        f = np.asarray(values, dtype=float)
        if f.shape != (HOURS_PER_DAY,):
            raise ValueError(f"Expected {HOURS_PER_DAY} hourly values, got shape {f.shape}")
        return self._cos @ f, self._sin @ f

    def reconstruct(self, a: np.ndarray, b: np.ndarray, t: float) -> float:
        """Evaluate the truncated series at fractional hour ``t``."""
        phases = np.pi * self.harmonics * t / HOURS_PER_DAY
        terms = self.weights * (a * np.cos(phases) + b * np.sin(phases))
        return float(terms.sum() / HOURS_PER_DAY)

    def denoise(self, values: Sequence[float], t: float) -> float:
        """Low-pass filtered value of the daily curve at hour ``t``."""
        a, b = self.transform(values)
        return self.reconstruct(a, b, t)


class InterpolatingSmoother:
    """Linear blend of an hourly bucket with its nearest neighbor."""

    def expectation(self, baseline: SeasonalBaseline, moment: datetime):
        """Blend own and neighbor bucket, or None if either is empty."""
        weekday = weekday_index(moment)
        own = baseline.bucket(is_weekend(weekday), moment.hour)
        neighbor, weight_a, weight_b = baseline.neighbor_for_interpolation(
            weekday, moment.hour, moment.minute
        )
        if not (own.count() and neighbor.count()):
            return None
        return Expectation(
            mean=weight_a * own.mean() + weight_b * neighbor.mean(),
            stdev=weight_a * own.stdev() + weight_b * neighbor.stdev(),
            source="interpolated",
        )


class SeasonalSmoother:
    """Expected activity for a moment in time, with cold-start fallbacks."""

    def __init__(
        self,
        strategy: SmoothingStrategy = SmoothingStrategy.FOURIER,
        harmonics: Sequence[int] = DEFAULT_HARMONICS,
        min_history_seconds: float = DEFAULT_MIN_HISTORY_SECONDS,
        sentinel: float = COLD_START_SENTINEL,
    ):
        """Initialize the smoother.

        Args:
            strategy: Fourier low-pass or legacy linear interpolation
            harmonics: Harmonic indices kept by the Fourier strategy
            min_history_seconds: Observed seconds needed before the
                baseline is trusted at all
            sentinel: Mean and stdev reported during cold start
        """
        self.strategy = strategy
        self.min_history_seconds = min_history_seconds
        self.sentinel = sentinel
        self._fourier = FourierSmoother(harmonics)
        self._interpolator = InterpolatingSmoother()

    def expectation(
        self, baseline: SeasonalBaseline, moment: datetime, observed_seconds: float
    ) -> Expectation:
        """Expected mean and stdev of the activity level at ``moment``.

        Args:
            baseline: Learned hourly statistics
            moment: Local time being evaluated
            observed_seconds: Cumulative seconds of history seen so far

        Returns:
            The expectation, tagged with the path that produced it
        """
        if observed_seconds < self.min_history_seconds:
            return Expectation(self.sentinel, self.sentinel, source="cold_start")

        if self.strategy is SmoothingStrategy.FOURIER:
            expectation = self._fourier_expectation(baseline, moment)
        else:
            expectation = self._interpolator.expectation(baseline, moment)

        if expectation is None:
            expectation = Expectation(
                baseline.overall.mean(), baseline.overall.stdev(), source="overall"
            )
        return expectation

    def _fourier_expectation(self, baseline: SeasonalBaseline, moment: datetime):
        weekend = is_weekend(weekday_index(moment))
        if baseline.hours_with_data(weekend) < HOURS_PER_DAY:
            return None

        buckets = baseline.day_class(weekend)
        t = moment.hour + moment.minute / 60 + moment.second / 3600
        mean = self._fourier.denoise([b.mean() for b in buckets], t)
        # Ringing can push a smoothed spread below zero
        stdev = max(self._fourier.denoise([b.stdev() for b in buckets], t), 0.0)
        return Expectation(mean, stdev, source="fourier")
