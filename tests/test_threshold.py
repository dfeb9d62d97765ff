"""Tests for the return-period threshold policy."""

import math

import pytest

from activity_alarm_engine.models import Expectation
from activity_alarm_engine.processing.normal import standard_normal_inverse_cdf
from activity_alarm_engine.threshold import ThresholdPolicy

EXPECTED = Expectation(mean=0.2, stdev=0.05, source="fourier")


def test_exceedance_probability():
    policy = ThresholdPolicy(return_period_hours=168)
    assert policy.exceedance_probability(2.0) == pytest.approx(1 / 336)


def test_threshold_is_mean_plus_z_stdev():
    policy = ThresholdPolicy(return_period_hours=24)
    z = standard_normal_inverse_cdf(1 - 1 / (4.0 * 24))
    assert policy.threshold(EXPECTED, 4.0) == pytest.approx(0.2 + z * 0.05)


def test_longer_return_period_raises_threshold():
    daily = ThresholdPolicy(return_period_hours=24).threshold(EXPECTED, 6.0)
    weekly = ThresholdPolicy(return_period_hours=168).threshold(EXPECTED, 6.0)
    assert weekly > daily > EXPECTED.mean


def test_cold_start_is_unreachable():
    policy = ThresholdPolicy()
    sentinel = Expectation(1001.0, 1001.0, source="cold_start")
    assert policy.threshold(sentinel, 10.0) == math.inf


def test_zero_event_rate_is_unreachable():
    assert ThresholdPolicy().threshold(EXPECTED, 0.0) == math.inf


def test_probability_is_clamped():
    """A return period shorter than one episode asks for p > 1."""
    policy = ThresholdPolicy(return_period_hours=0.1, epsilon=1e-9)
    z = policy.z_score(1.0)
    assert z < -5
    assert math.isfinite(policy.threshold(EXPECTED, 1.0))
