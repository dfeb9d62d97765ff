"""Tests for the inverse standard normal CDF approximation."""

import pytest

from activity_alarm_engine.processing.normal import standard_normal_inverse_cdf


def test_median_is_zero():
    assert standard_normal_inverse_cdf(0.5) == pytest.approx(0.0, abs=1e-3)


@pytest.mark.parametrize("p", [0.001, 0.02, 0.1, 0.3, 0.45])
def test_symmetry(p):
    assert standard_normal_inverse_cdf(p) == pytest.approx(-standard_normal_inverse_cdf(1 - p))


@pytest.mark.parametrize(
    "p, expected",
    [(0.975, 1.959964), (0.8413447, 1.0), (0.9986501, 3.0), (0.05, -1.644854)],
)
def test_known_quantiles(p, expected):
    assert standard_normal_inverse_cdf(p) == pytest.approx(expected, abs=1.7e-3)


@pytest.mark.parametrize("p", [0.0, 1.0, -0.5, 1.5])
def test_degenerate_probability_returns_zero(p):
    assert standard_normal_inverse_cdf(p) == 0.0


def test_monotonic():
    ps = [i / 100 for i in range(1, 100)]
    zs = [standard_normal_inverse_cdf(p) for p in ps]
    assert zs == sorted(zs)
