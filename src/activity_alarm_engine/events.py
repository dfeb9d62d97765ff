"""Result records produced by the engine for each processed episode."""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from activity_alarm_engine.models import Episode, TriggerState


@dataclass(frozen=True)
class NotificationEvent:
    """Emitted once on each Idle -> Triggered transition.

    The host decides what to do with it (run a script, send a message).
    """

    episode_start_time: datetime
    episode_identifier: str
    activity_level: float
    threshold: float


@dataclass(frozen=True)
class EpisodeOutcome:
    """Diagnostics for one processed episode.

    Attributes:
        episode: The episode that was processed
        accepted: False when the episode was malformed and ignored
        activity_level: Activity level after the update
        expected_mean: Denoised expected mean for the episode's time
        expected_stdev: Denoised expected standard deviation
        expectation_source: How the expectation was obtained
        threshold: Trigger threshold (NaN when not evaluated)
        state: Trigger state after evaluation
        bucket_mean: Mean of the hourly bucket the episode landed in
        overall_mean: Mean of the overall accumulator
        events_per_hour: Historical episode rate used for the threshold
        notification: Set only on the Idle -> Triggered edge
    """

    episode: Episode
    accepted: bool
    activity_level: float
    expected_mean: float = math.nan
    expected_stdev: float = math.nan
    expectation_source: str = ""
    threshold: float = math.nan
    state: TriggerState = TriggerState.IDLE
    bucket_mean: float = math.nan
    overall_mean: float = math.nan
    events_per_hour: float = 0.0
    notification: Optional[NotificationEvent] = None

    @property
    def notify(self) -> bool:
        """True if the host should fire a notification for this episode."""
        return self.notification is not None

    @property
    def triggered(self) -> bool:
        return self.state is TriggerState.TRIGGERED
