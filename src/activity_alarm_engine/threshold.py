"""Trigger threshold derived from a desired notification return period."""

import logging
import math

from activity_alarm_engine.models import Expectation
from activity_alarm_engine.processing.normal import standard_normal_inverse_cdf

logger = logging.getLogger(__name__)

DEFAULT_RETURN_PERIOD_HOURS = 24.0 * 7  # One notification per week
DEFAULT_EPSILON = 1e-9


class ThresholdPolicy:
    """Turns "one notification every N hours" into an activity threshold.

    With ``events_per_hour`` episodes per hour, a notification every
    ``return_period_hours`` hours means each episode should exceed the
    threshold with probability ``p = 1 / (events_per_hour * return_period)``.
    The threshold sits ``z(1 - p)`` standard deviations above the mean.
    """

    def __init__(
        self,
        return_period_hours: float = DEFAULT_RETURN_PERIOD_HOURS,
        epsilon: float = DEFAULT_EPSILON,
    ):
        self.return_period_hours = return_period_hours
        self.epsilon = epsilon

    def exceedance_probability(self, events_per_hour: float) -> float:
        return 1.0 / (events_per_hour * self.return_period_hours)

    def z_score(self, events_per_hour: float) -> float:
        """Standard normal quantile for the per-episode exceedance target."""
        p = self.exceedance_probability(events_per_hour)
        q = min(max(1.0 - p, self.epsilon), 1.0 - self.epsilon)
        return standard_normal_inverse_cdf(q)

    def threshold(self, expectation: Expectation, events_per_hour: float) -> float:
        """Activity level above which an episode counts as anomalous.

        Cold-start expectations and a zero event rate yield +inf so that
        nothing can trigger.

        Args:
            expectation: Denoised expected mean and stdev
            events_per_hour: Historical episode rate

        Returns:
            The threshold
        """
        if expectation.is_cold_start or events_per_hour <= 0:
            return math.inf

        z = self.z_score(events_per_hour)
        threshold = expectation.mean + z * expectation.stdev
        logger.debug(
            f"events/h={events_per_hour:.3f} z={z:.3f} "
            f"mean={expectation.mean:.4f} stdev={expectation.stdev:.4f} threshold={threshold:.4f}"
        )
        return threshold
