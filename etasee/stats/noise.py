"""Robust sigma estimate of pace residuals."""

import math

from etasee.constants import NOISE_METER_ALPHA
from etasee.constants import SQRT_PI_OVER_2


class NoiseMeter:
    """
    Tracks the spread of residuals with two exponential moving averages.

    One EMA follows the absolute residual (a MAD-style, outlier-resistant
    scale), the other the squared residual (an RMS scale that reacts faster).
    sigma() averages the two Gaussian-equivalent sigmas.
    """

    def __init__(self, alpha: float = NOISE_METER_ALPHA) -> None:
        self.alpha = alpha
        self._abs_avg: float | None = None
        self._sq_avg: float | None = None

    def push(self, residual: float) -> None:
        """Add one residual."""
        abs_r = abs(residual)
        sq_r = residual * residual
        if self._abs_avg is None:
            self._abs_avg = abs_r
        else:
            self._abs_avg = self.alpha * abs_r + (1.0 - self.alpha) * self._abs_avg
        if self._sq_avg is None:
            self._sq_avg = sq_r
        else:
            self._sq_avg = self.alpha * sq_r + (1.0 - self.alpha) * self._sq_avg

    def sigma(self) -> float | None:
        """
        Estimate the residual sigma.

        Returns:
            Mean of the MAD-based and RMS-based sigmas, whichever of the two
            is available if only one is, or None before any residual.
        """
        mad_sigma = self._abs_avg * SQRT_PI_OVER_2 if self._abs_avg is not None else None
        rms_sigma = math.sqrt(self._sq_avg) if self._sq_avg is not None else None
        if mad_sigma is not None and rms_sigma is not None:
            return 0.5 * (mad_sigma + rms_sigma)
        return mad_sigma if mad_sigma is not None else rms_sigma
