"""Hour-of-day by weekday/weekend baseline of the activity level."""

import logging
from typing import List, Tuple

from activity_alarm_engine.models import BucketStats, is_weekend
from activity_alarm_engine.processing.moments import OnlineMoments

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24


class SeasonalBaseline:
    """48 hourly accumulators (24 weekday, 24 weekend) plus an overall one.

    Weekday indices count from Sunday (0) to Saturday (6); Saturday and
    Sunday form the weekend class.
    """

    def __init__(self):
        self.overall = OnlineMoments()
        self.weekday = [OnlineMoments() for _ in range(HOURS_PER_DAY)]
        self.weekend = [OnlineMoments() for _ in range(HOURS_PER_DAY)]

    def record(self, x: float, weekday: int, hour: int) -> OnlineMoments:
        """Push an observation into the overall and the matching hourly bucket.

        Args:
            x: Observed activity level
            weekday: Day of week, 0 = Sunday
            hour: Hour of day (0..23)

        Returns:
            The hourly bucket that received the observation
        """
        if not 0 <= weekday <= 6:
            raise ValueError(f"weekday must be in 0..6, got {weekday}")
        bucket = self.bucket(is_weekend(weekday), hour)
        self.overall.push(x)
        bucket.push(x)
        return bucket

    def bucket(self, weekend: bool, hour: int) -> OnlineMoments:
        if not 0 <= hour < HOURS_PER_DAY:
            raise ValueError(f"hour must be in 0..{HOURS_PER_DAY - 1}, got {hour}")
        return self.day_class(weekend)[hour]

    def day_class(self, weekend: bool) -> List[OnlineMoments]:
        """All 24 hourly buckets of one weekday/weekend class."""
        return self.weekend if weekend else self.weekday

    def hours_with_data(self, weekend: bool) -> int:
        return sum(1 for b in self.day_class(weekend) if b.count() > 0)

    def neighbor_for_interpolation(
        self, weekday: int, hour: int, minute: int
    ) -> Tuple[OnlineMoments, float, float]:
        """Pick the adjacent hourly bucket to blend with.

        In the second half of the hour the next hour is used, otherwise the
        previous one. Crossing midnight moves to the neighboring calendar
        day, which may belong to the other weekday/weekend class.

        Args:
            weekday: Day of week, 0 = Sunday
            hour: Hour of day (0..23)
            minute: Minute of hour (0..59)

        Returns:
            (neighbor bucket, weight of own bucket, weight of neighbor)
        """
        if minute >= 30:
            if hour == HOURS_PER_DAY - 1:
                neighbor = self.bucket(is_weekend((weekday + 1) % 7), 0)
            else:
                neighbor = self.bucket(is_weekend(weekday), hour + 1)
            weight_a = (90.0 - minute) / 60
        else:
            if hour == 0:
                neighbor = self.bucket(is_weekend((weekday - 1) % 7), HOURS_PER_DAY - 1)
            else:
                neighbor = self.bucket(is_weekend(weekday), hour - 1)
            weight_a = (31.0 + minute) / 60
        return neighbor, weight_a, 1.0 - weight_a

    def export(self) -> List[Tuple[int, BucketStats, BucketStats]]:
        """Per-hour (hour, weekday stats, weekend stats) rows."""
        return [
            (h, self.weekday[h].stats(), self.weekend[h].stats()) for h in range(HOURS_PER_DAY)
        ]
