"""Main Engine class - orchestrates the per-episode pipeline."""

import logging
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Tuple

from activity_alarm_engine.baseline import SeasonalBaseline
from activity_alarm_engine.config import MonitorConfig
from activity_alarm_engine.estimator import ActivityEstimator
from activity_alarm_engine.events import EpisodeOutcome, NotificationEvent
from activity_alarm_engine.models import BucketStats, Episode, TriggerState, weekday_index
from activity_alarm_engine.processing.smoothing import SeasonalSmoother
from activity_alarm_engine.threshold import ThresholdPolicy
from activity_alarm_engine.trigger import TriggerEngine

logger = logging.getLogger(__name__)


class Engine:
    """Adaptive activity alarm engine.

    Owns all learned state (activity level, hourly baseline, episode rate
    counters and trigger state) and runs the pipeline for each finished
    episode:
    Episode → Activity Level → Baseline → Smoothing → Threshold → Trigger → Callbacks

    Not thread-safe: a multi-threaded host must serialize all calls.

    Example:
        >>> from activity_alarm_engine import Engine, MonitorConfig
        >>>
        >>> engine = Engine(
        ...     MonitorConfig(return_period_hours=24),
        ...     on_notification=lambda event: print(f"BUSY: {event.episode_identifier}"),
        ... )
        >>> engine.replay(history)  # Rebuild state, no callbacks
        >>> engine.on_episode_finished(start_time, idle_seconds=120, active_seconds=15)
    """

    def __init__(
        self,
        config: Optional[MonitorConfig] = None,
        on_notification: Optional[Callable[[NotificationEvent], None]] = None,
        on_episode: Optional[Callable[[EpisodeOutcome], None]] = None,
    ):
        """Initialize the engine.

        Args:
            config: Pipeline settings (uses defaults if None)
            on_notification: Called on each Idle -> Triggered transition
            on_episode: Called with the diagnostics of every live episode
        """
        self.config = (config or MonitorConfig()).validate()
        self.on_notification = on_notification
        self.on_episode = on_episode

        self.policy = ThresholdPolicy(
            self.config.return_period_hours, self.config.probability_epsilon
        )
        self.smoother = SeasonalSmoother(
            strategy=self.config.smoothing,
            harmonics=self.config.harmonics,
            min_history_seconds=self.config.min_history_seconds,
            sentinel=self.config.cold_start_sentinel,
        )
        self.reset()

        logger.info(
            f"Engine initialized: return period {self.config.return_period_hours:g}h, "
            f"decay 1/{self.config.decay_seconds:g}s, {self.config.smoothing.value} smoothing"
        )

    def reset(self) -> None:
        """Forget all learned state."""
        self.estimator = ActivityEstimator(self.config.decay)
        self.baseline = SeasonalBaseline()
        self.trigger = TriggerEngine(self.policy)
        self._episode_count = 0
        self._observed_seconds = 0

    def on_episode_finished(
        self, start_time: datetime, idle_seconds: int, active_seconds: int
    ) -> EpisodeOutcome:
        """Entry point for the capture side: one call per recording cycle."""
        return self.process_episode(Episode(start_time, idle_seconds, active_seconds))

    def process_episode(self, episode: Episode) -> EpisodeOutcome:
        """Process one finished episode and fire callbacks.

        Args:
            episode: The finished episode, in chronological order

        Returns:
            Diagnostics including whether a notification fired
        """
        outcome = self._process(episode)

        if outcome.notify:
            self._notify(outcome.notification)

        if self.on_episode:
            try:
                self.on_episode(outcome)
            except Exception as e:
                logger.error(f"Error in on_episode callback: {e}")

        return outcome

    def replay(self, episodes: Iterable[Episode]) -> int:
        """Rebuild state from the full history of episodes.

        Starts from a clean state, so replaying the same log twice gives
        the same result as replaying it once. Callbacks are not invoked.

        Args:
            episodes: Historical episodes in chronological order

        Returns:
            Number of episodes that were accepted
        """
        self.reset()
        logger.info("Replaying episode history...")

        accepted = 0
        total = 0
        for episode in episodes:
            total += 1
            if self._process(episode).accepted:
                accepted += 1

        logger.info(
            f"Replayed {accepted}/{total} episode(s), {self._observed_seconds}s of history, "
            f"activity level {self.activity_level:.4f}, state {self.state.value}"
        )
        return accepted

    def _process(self, episode: Episode) -> EpisodeOutcome:
        if episode.is_malformed:
            logger.warning(f"Ignoring malformed episode {episode!r}")
            return EpisodeOutcome(
                episode=episode,
                accepted=False,
                activity_level=self.activity_level,
                state=self.state,
            )

        level = self.estimator.update(episode.idle_seconds, episode.active_seconds)

        moment = episode.start_time
        bucket = self.baseline.record(level, weekday_index(moment), moment.hour)

        # The rate includes the episode being evaluated
        self._episode_count += 1
        self._observed_seconds += episode.total_seconds
        events_per_hour = self.events_per_hour

        expectation = self.smoother.expectation(self.baseline, moment, self._observed_seconds)
        notify, threshold = self.trigger.evaluate(level, expectation, events_per_hour)

        logger.debug(
            f"{episode!r}: level={level:.4f} expected={expectation.mean:.4f}"
            f"±{expectation.stdev:.4f} ({expectation.source}) threshold={threshold:.4f}"
        )

        notification = None
        if notify:
            notification = NotificationEvent(
                episode_start_time=moment,
                episode_identifier=episode.identifier,
                activity_level=level,
                threshold=threshold,
            )

        return EpisodeOutcome(
            episode=episode,
            accepted=True,
            activity_level=level,
            expected_mean=expectation.mean,
            expected_stdev=expectation.stdev,
            expectation_source=expectation.source,
            threshold=threshold,
            state=self.trigger.state,
            bucket_mean=bucket.mean(),
            overall_mean=self.baseline.overall.mean(),
            events_per_hour=events_per_hour,
            notification=notification,
        )

    def _notify(self, event: NotificationEvent) -> None:
        """Announce an Idle -> Triggered transition."""
        logger.critical("=" * 60)
        logger.critical(f"UNUSUAL ACTIVITY: [{event.episode_identifier}]")
        logger.critical(f"Level {event.activity_level:.4f} > threshold {event.threshold:.4f}")
        logger.critical("=" * 60)

        if self.on_notification:
            try:
                self.on_notification(event)
            except Exception as e:
                logger.error(f"Error in on_notification callback: {e}")

    @property
    def activity_level(self) -> float:
        return self.estimator.level

    @property
    def state(self) -> TriggerState:
        return self.trigger.state

    @property
    def episode_count(self) -> int:
        return self._episode_count

    @property
    def observed_seconds(self) -> int:
        """Cumulative idle + active seconds of all accepted episodes."""
        return self._observed_seconds

    @property
    def events_per_hour(self) -> float:
        """Historical episode rate, 0 before any time has been observed."""
        if self._observed_seconds <= 0:
            return 0.0
        return self._episode_count * 3600.0 / self._observed_seconds

    def export_buckets(self) -> List[Tuple[int, BucketStats, BucketStats]]:
        """Per-hour (hour, weekday stats, weekend stats) rows for export."""
        return self.baseline.export()

    def export_overall(self) -> BucketStats:
        return self.baseline.overall.stats()
