"""Recursive least squares fit of elapsed time against progress.

Fits ``elapsed ≈ A + B * done`` online. The forgetting factor discounts
old observations geometrically so the fit follows slow pace changes.
"""

from etasee.constants import TREND_INITIAL_COVARIANCE
from etasee.constants import TREND_RESIDUAL_BLEND


class ProgressTrend:
    """
    Two-parameter RLS regressor with a 2x2 covariance matrix.

    Attributes:
        a: Intercept (seconds).
        b: Slope (seconds per unit).
        residual_variance: EMA of squared prediction errors, None before the
            first update.
    """

    def __init__(self, forgetting_factor: float) -> None:
        """
        Initialize with high uncertainty.

        Args:
            forgetting_factor: RLS lambda in (0, 1]; smaller forgets faster.
        """
        self.forgetting_factor = forgetting_factor
        self.a = 0.0
        self.b = 1.0
        self.residual_variance: float | None = None
        self._p00 = TREND_INITIAL_COVARIANCE
        self._p01 = 0.0
        self._p10 = 0.0
        self._p11 = TREND_INITIAL_COVARIANCE

    @property
    def covariance(self) -> tuple[tuple[float, float], tuple[float, float]]:
        """Current covariance matrix as nested row tuples."""
        return ((self._p00, self._p01), (self._p10, self._p11))

    def update(self, x0: float, x1: float, y: float) -> None:
        """
        Add one observation.

        Args:
            x0: Intercept regressor (normally 1.0).
            x1: Completed units.
            y: Elapsed seconds since start.
        """
        lam = self.forgetting_factor
        px0 = self._p00 * x0 + self._p01 * x1
        px1 = self._p10 * x0 + self._p11 * x1
        denom = lam + x0 * px0 + x1 * px1
        g0 = px0 / denom
        g1 = px1 / denom

        error = y - (self.a * x0 + self.b * x1)
        self.a += g0 * error
        self.b += g1 * error

        # P = (P - g xᵀ P) / λ
        xtp0 = x0 * self._p00 + x1 * self._p10
        xtp1 = x0 * self._p01 + x1 * self._p11
        self._p00 = (self._p00 - g0 * xtp0) / lam
        self._p01 = (self._p01 - g0 * xtp1) / lam
        self._p10 = (self._p10 - g1 * xtp0) / lam
        self._p11 = (self._p11 - g1 * xtp1) / lam

        off_diagonal = 0.5 * (self._p01 + self._p10)
        self._p01 = off_diagonal
        self._p10 = off_diagonal

        squared_error = error * error
        if self.residual_variance is None:
            self.residual_variance = squared_error
        else:
            self.residual_variance = (
                TREND_RESIDUAL_BLEND * squared_error
                + (1.0 - TREND_RESIDUAL_BLEND) * self.residual_variance
            )

    def predict(self, x1: float) -> float:
        """Predicted elapsed seconds once x1 units are done."""
        return self.a + self.b * x1

    def leverage(self, x0: float, x1: float) -> float:
        """Quadratic form xᵀ P x, the predictive variance multiplier at x."""
        px0 = self._p00 * x0 + self._p01 * x1
        px1 = self._p10 * x0 + self._p11 * x1
        return x0 * px0 + x1 * px1
