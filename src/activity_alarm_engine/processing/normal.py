"""Approximate quantiles of the standard normal distribution."""

import math

# Abramowitz and Stegun formula 26.2.23, |error| < 4.5e-4
C0, C1, C2 = 2.515517, 0.802853, 0.010328
D1, D2, D3 = 1.432788, 0.189269, 0.001308


def standard_normal_inverse_cdf(p: float) -> float:
    """Approximate z such that P(Z <= z) = p for a standard normal Z.

    Degenerate probabilities (p <= 0 or p >= 1) return 0 instead of
    raising.

    Args:
        p: Target cumulative probability.

    Returns:
        The approximate z-score.
    """
    if p <= 0 or p >= 1:
        return 0.0

    t = math.sqrt(-2.0 * math.log(p if p < 0.5 else 1.0 - p))
    z = t - ((C2 * t + C1) * t + C0) / (((D3 * t + D2) * t + D1) * t + 1.0)
    return -z if p < 0.5 else z
