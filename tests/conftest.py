from typing import List

import pytest

from activity_alarm_engine.models import Episode

from episodes import MONDAY, hourly_episodes


@pytest.fixture
def two_weeks_quiet() -> List[Episode]:
    """Fourteen days of silent hours; the activity level stays exactly zero."""
    return hourly_episodes(MONDAY, 24 * 14, idle_seconds=3600, active_seconds=0)
