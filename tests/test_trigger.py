"""Tests for the hysteresis trigger."""

import math

from activity_alarm_engine.models import Expectation, TriggerState
from activity_alarm_engine.threshold import ThresholdPolicy
from activity_alarm_engine.trigger import TriggerEngine

EXPECTED = Expectation(mean=10.0, stdev=2.0, source="fourier")
EVENTS_PER_HOUR = 10.0


def make_trigger() -> TriggerEngine:
    return TriggerEngine(ThresholdPolicy(return_period_hours=168))


def test_starts_idle():
    assert make_trigger().state is TriggerState.IDLE


def test_below_threshold_stays_idle():
    trigger = make_trigger()
    notify, threshold = trigger.evaluate(12.0, EXPECTED, EVENTS_PER_HOUR)
    assert not notify
    assert threshold > 12.0
    assert trigger.state is TriggerState.IDLE


def test_hysteresis():
    trigger = make_trigger()

    notify, threshold = trigger.evaluate(30.0, EXPECTED, EVENTS_PER_HOUR)
    assert notify
    assert 10.0 < threshold < 30.0
    assert trigger.triggered

    # Stays triggered down to mean + 1 stdev, without repeating the notification
    for level in (30.0, 20.0, 14.0, 12.0):
        notify, threshold = trigger.evaluate(level, EXPECTED, EVENTS_PER_HOUR)
        assert not notify
        assert math.isnan(threshold)
        assert trigger.state is TriggerState.TRIGGERED

    notify, _ = trigger.evaluate(11.99, EXPECTED, EVENTS_PER_HOUR)
    assert not notify
    assert trigger.state is TriggerState.IDLE


def test_rearmed_trigger_notifies_again():
    trigger = make_trigger()
    assert trigger.evaluate(30.0, EXPECTED, EVENTS_PER_HOUR)[0]
    trigger.evaluate(5.0, EXPECTED, EVENTS_PER_HOUR)
    assert trigger.evaluate(30.0, EXPECTED, EVENTS_PER_HOUR)[0]


def test_cold_start_never_triggers():
    trigger = make_trigger()
    sentinel = Expectation(1001.0, 1001.0, source="cold_start")
    for level in (0.5, 1000.0, 1e9):
        notify, threshold = trigger.evaluate(level, sentinel, EVENTS_PER_HOUR)
        assert not notify
        assert threshold == math.inf
    assert trigger.state is TriggerState.IDLE


def test_reset():
    trigger = make_trigger()
    trigger.evaluate(30.0, EXPECTED, EVENTS_PER_HOUR)
    trigger.reset()
    assert trigger.state is TriggerState.IDLE
