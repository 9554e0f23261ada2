"""Adaptive scalar Kalman filter for the current pace."""

from etasee.constants import PACE_INITIAL_RESIDUAL_SCALE
from etasee.constants import PACE_INITIAL_VARIANCE
from etasee.constants import PACE_MIN_PROCESS_NOISE
from etasee.constants import PACE_MIN_RESIDUAL_VARIANCE


class PaceFilter:
    """
    Tracks seconds per unit as a slowly drifting latent variable.

    Process and measurement noise are not fixed: both scale with an EMA of
    the squared innovation, so the filter tightens on steady input and
    loosens when pace gets noisy. ``drift_factor`` sets how much of that
    noise is attributed to genuine pace change (process) rather than jitter.
    """

    def __init__(self) -> None:
        self._mean: float | None = None
        self._variance: float | None = None
        self._residual_variance: float | None = None

    @property
    def has_value(self) -> bool:
        """Whether at least one observation has been seen."""
        return self._mean is not None

    @property
    def value(self) -> float | None:
        """Filtered seconds per unit."""
        return self._mean

    @property
    def variance(self) -> float | None:
        """Variance of the filtered pace."""
        return self._variance

    def update(self, z: float, drift_factor: float, noise_blend: float) -> None:
        """
        Run one predict/update step.

        Args:
            z: Observed seconds per unit, already robust-weighted toward the
                running mean by the caller.
            drift_factor: Process noise as a fraction of the residual variance.
            noise_blend: EMA factor for the residual variance.
        """
        if self._mean is None or self._variance is None or self._residual_variance is None:
            self._mean = z
            self._variance = PACE_INITIAL_VARIANCE
            self._residual_variance = max(
                PACE_MIN_RESIDUAL_VARIANCE,
                PACE_INITIAL_RESIDUAL_SCALE * z * z + PACE_MIN_RESIDUAL_VARIANCE,
            )
            return

        innovation = z - self._mean
        self._residual_variance = (
            1.0 - noise_blend
        ) * self._residual_variance + noise_blend * innovation * innovation
        process_noise = max(PACE_MIN_PROCESS_NOISE, drift_factor * self._residual_variance)
        measurement_noise = max(PACE_MIN_RESIDUAL_VARIANCE, self._residual_variance)

        predicted_variance = self._variance + process_noise
        gain = predicted_variance / (predicted_variance + measurement_noise)

        self._mean += gain * innovation
        self._variance = (1.0 - gain) * predicted_variance
