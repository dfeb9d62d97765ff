"""Tests for the duty-cycle activity estimator."""

import pytest

from activity_alarm_engine.estimator import ActivityEstimator

DECAY = 1.0 / 600


def per_second(level: float, idle_seconds: int, active_seconds: int, decay: float) -> float:
    """Reference recurrence, one step per elapsed second."""
    for _ in range(idle_seconds):
        level -= level * decay
    for _ in range(active_seconds):
        level += (1 - level) * decay
    return level


def test_two_episodes_match_per_second_recurrence():
    estimator = ActivityEstimator(DECAY)
    estimator.update(600, 30)
    level = estimator.update(300, 5)

    expected = per_second(per_second(0.0, 600, 30, DECAY), 300, 5, DECAY)
    assert level == pytest.approx(expected, rel=1e-9)
    assert estimator.level == level


def test_starting_level_is_respected():
    estimator = ActivityEstimator(DECAY, level=0.8)
    level = estimator.update(120, 0)
    assert level == pytest.approx(per_second(0.8, 120, 0, DECAY), rel=1e-9)


def test_level_stays_below_one():
    estimator = ActivityEstimator(DECAY)
    for _ in range(10):
        level = estimator.update(0, 3600)
    assert 0.99 < level < 1.0


def test_ten_hours_of_activity_stays_below_one():
    estimator = ActivityEstimator(DECAY)
    assert estimator.update(0, 36000) < 1.0


@pytest.mark.parametrize(
    "start, idle, active",
    [(0.0, 0, 36000), (0.5, 36000, 0), (0.2, 5000, 7200), (0.9, 120, 20000)],
)
def test_long_episodes_match_per_second_recurrence(start, idle, active):
    estimator = ActivityEstimator(DECAY, level=start)
    level = estimator.update(idle, active)
    expected = per_second(start, idle, active, DECAY)
    assert level == pytest.approx(expected, rel=1e-9, abs=1e-12)
    assert level < 1.0


def test_zero_length_episode_is_identity():
    estimator = ActivityEstimator(DECAY, level=0.4)
    assert estimator.update(0, 0) == pytest.approx(0.4)


@pytest.mark.parametrize("idle, active", [(-1, 10), (10, -1), (-5, -5)])
def test_negative_durations_are_ignored(idle, active):
    estimator = ActivityEstimator(DECAY, level=0.25)
    assert estimator.update(idle, active) == 0.25
    assert estimator.level == 0.25


def test_decay_override_applies_once():
    estimator = ActivityEstimator(DECAY)
    level = estimator.update(0, 10, decay=0.5)
    assert level == pytest.approx(1 - 0.5**10)
    assert estimator.decay == DECAY


@pytest.mark.parametrize("decay", [0.0, 1.0, -0.1])
def test_invalid_decay(decay):
    with pytest.raises(ValueError):
        ActivityEstimator(decay)
