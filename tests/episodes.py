"""Episode builders shared by the tests."""

from datetime import datetime, timedelta
from typing import List

from activity_alarm_engine.models import Episode

# 2024-01-01 was a Monday
MONDAY = datetime(2024, 1, 1)
WEDNESDAY = datetime(2024, 1, 3)
FRIDAY = datetime(2024, 1, 5)
SATURDAY = datetime(2024, 1, 6)
SUNDAY = datetime(2024, 1, 7)


def hourly_episodes(
    start: datetime, hours: int, idle_seconds: int = 3540, active_seconds: int = 60
) -> List[Episode]:
    """One identical episode at half past every hour."""
    return [
        Episode(start + timedelta(hours=i, minutes=30), idle_seconds, active_seconds)
        for i in range(hours)
    ]
