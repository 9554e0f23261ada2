"""Online mean and variance of a scalar stream (Welford's algorithm)."""

from dataclasses import dataclass


@dataclass
class RunningStats:
    """
    Numerically stable running mean and sample variance.

    Attributes:
        count: Number of values pushed.
        mean: Running mean, 0.0 before any value.
        m2: Sum of squared deviations from the running mean.
    """

    count: int = 0
    mean: float = 0.0
    m2: float = 0.0

    def push(self, x: float) -> None:
        """Add a value in O(1)."""
        self.count += 1
        delta = x - self.mean
        self.mean += delta / self.count
        self.m2 += delta * (x - self.mean)

    @property
    def variance(self) -> float | None:
        """Sample variance, or None with fewer than two values."""
        if self.count < 2:
            return None
        return self.m2 / (self.count - 1)
