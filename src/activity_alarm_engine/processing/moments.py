"""Running statistics over a stream of scalar observations."""

import math

from activity_alarm_engine.models import BucketStats


class OnlineMoments:
    """Running count, mean and sample variance.

    Uses Welford's incremental update (Knuth TAOCP vol 2, p. 232) so the
    rounding error does not grow with the number of observations.
    """

    __slots__ = ("_n", "_m", "_s")

    def __init__(self):
        self._n = 0
        self._m = 0.0
        self._s = 0.0

    def push(self, x: float) -> None:
        """Incorporate one observation."""
        self._n += 1
        if self._n == 1:
            self._m = x
            self._s = 0.0
        else:
            new_m = self._m + (x - self._m) / self._n
            self._s += (x - self._m) * (x - new_m)
            self._m = new_m

    def mean(self) -> float:
        return self._m if self._n > 0 else 0.0

    def variance(self) -> float:
        """Bessel-corrected sample variance, 0 with fewer than two samples."""
        return self._s / (self._n - 1) if self._n > 1 else 0.0

    def stdev(self) -> float:
        return math.sqrt(self.variance())

    def count(self) -> int:
        return self._n

    def stats(self) -> BucketStats:
        """Snapshot of (count, mean, stdev) for export."""
        return BucketStats(count=self._n, mean=self.mean(), stdev=self.stdev())

    def __repr__(self) -> str:
        return f"OnlineMoments(n={self._n}, mean={self.mean():.4g}, stdev={self.stdev():.4g})"
