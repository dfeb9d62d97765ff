"""Hysteresis state machine deciding when to notify."""

import logging
import math
from typing import Tuple

from activity_alarm_engine.models import Expectation, TriggerState
from activity_alarm_engine.threshold import ThresholdPolicy

logger = logging.getLogger(__name__)


class TriggerEngine:
    """Two-state trigger with a wider exit than entry.

    Idle -> Triggered when the activity level exceeds the return-period
    threshold; this edge is the only time a notification is emitted.
    Triggered -> Idle once the level drops below mean + 1 stdev.
    """

    def __init__(self, policy: ThresholdPolicy):
        self.policy = policy
        self.state = TriggerState.IDLE

    def evaluate(
        self, activity_level: float, expectation: Expectation, events_per_hour: float
    ) -> Tuple[bool, float]:
        """Advance the state machine by one episode.

        Args:
            activity_level: Current activity level
            expectation: Expected mean and stdev for the episode's time
            events_per_hour: Historical episode rate

        Returns:
            (notify, threshold) where threshold is NaN if it was not
            computed (state was Triggered)
        """
        if self.state is TriggerState.IDLE:
            threshold = self.policy.threshold(expectation, events_per_hour)
            if activity_level > threshold:
                self.state = TriggerState.TRIGGERED
                return True, threshold
            return False, threshold

        release = expectation.mean + expectation.stdev
        if activity_level < release:
            logger.info(f"Activity {activity_level:.4f} back below {release:.4f}, trigger re-armed")
            self.state = TriggerState.IDLE
        return False, math.nan

    @property
    def triggered(self) -> bool:
        return self.state is TriggerState.TRIGGERED

    def reset(self) -> None:
        self.state = TriggerState.IDLE
