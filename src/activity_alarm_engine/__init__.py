"""Activity Alarm Engine - adaptive detection of unusually busy periods.

A standalone library that learns a time-of-day/day-of-week baseline of
activity from a stream of idle/active episodes and fires a one-shot
notification when current activity is anomalously high.

Usage:
    from activity_alarm_engine import Engine, GlobalConfig

    config = GlobalConfig.load("monitor.yaml")
    engine = Engine(config.monitor, on_notification=print)
    engine.replay(history)
    engine.on_episode_finished(start_time, idle_seconds, active_seconds)
"""

__version__ = "1.0.0"

# Core exports
from activity_alarm_engine.models import (
    BucketStats,
    Episode,
    Expectation,
    TriggerState,
    weekday_index,
)
from activity_alarm_engine.events import EpisodeOutcome, NotificationEvent
from activity_alarm_engine.engine import Engine
from activity_alarm_engine.baseline import SeasonalBaseline
from activity_alarm_engine.estimator import ActivityEstimator
from activity_alarm_engine.threshold import ThresholdPolicy
from activity_alarm_engine.trigger import TriggerEngine
from activity_alarm_engine.processing.moments import OnlineMoments
from activity_alarm_engine.processing.normal import standard_normal_inverse_cdf
from activity_alarm_engine.processing.smoothing import (
    FourierSmoother,
    SeasonalSmoother,
    SmoothingStrategy,
)
from activity_alarm_engine.config import (
    GlobalConfig,
    MonitorConfig,
    SystemConfig,
    configure_logging,
)

__all__ = [
    # Version
    "__version__",
    # Core classes
    "Engine",
    "ActivityEstimator",
    "SeasonalBaseline",
    "SeasonalSmoother",
    "FourierSmoother",
    "ThresholdPolicy",
    "TriggerEngine",
    "OnlineMoments",
    "standard_normal_inverse_cdf",
    # Configuration
    "GlobalConfig",
    "MonitorConfig",
    "SystemConfig",
    "SmoothingStrategy",
    "configure_logging",
    # Models
    "Episode",
    "Expectation",
    "TriggerState",
    "BucketStats",
    "EpisodeOutcome",
    "NotificationEvent",
    "weekday_index",
]
