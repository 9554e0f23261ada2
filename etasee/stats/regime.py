"""Detection of sustained pace changes."""

from etasee.constants import REGIME_MIN_MAD_FRACTION
from etasee.constants import REGIME_MIN_OBSERVATIONS


class RegimeDetector:
    """
    Flags samples that deviate sharply from the recent pace window.

    Keeps an EMA of seconds per unit (``window_mean``) and of the absolute
    deviation from it (``window_mad``). After ``min_observations`` samples,
    a sample further than ``threshold`` window MADs from the mean is a shift.
    The caller decides how long to adapt faster after a shift.
    """

    def __init__(
        self,
        alpha: float,
        threshold: float,
        min_observations: int = REGIME_MIN_OBSERVATIONS,
    ) -> None:
        self.alpha = alpha
        self.threshold = threshold
        self.min_observations = min_observations
        self.count = 0
        self.window_mean: float | None = None
        self.window_mad: float = 0.0

    @property
    def active(self) -> bool:
        """Whether enough samples have been seen to flag shifts."""
        return self.count >= self.min_observations

    def is_shift(self, x: float) -> bool:
        """Whether x departs from the current window enough to be a shift."""
        if not self.active or self.window_mean is None:
            return False
        # Perfectly steady input has zero MAD; floor it so float jitter is not a shift
        mad = max(self.window_mad, REGIME_MIN_MAD_FRACTION * abs(self.window_mean))
        return abs(x - self.window_mean) > self.threshold * mad

    def push(self, x: float) -> None:
        """Add a sample to the rolling window."""
        self.count += 1
        if self.window_mean is None:
            self.window_mean = x
            return
        deviation = abs(x - self.window_mean)
        self.window_mean += self.alpha * (x - self.window_mean)
        self.window_mad += self.alpha * (deviation - self.window_mad)
