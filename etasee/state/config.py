"""Estimator configuration.

EstimatorOptions bundles every tunable of the estimation engine and the
display stabilizer in one immutable value. Construct it once and share it
between estimators; use dataclasses.replace() to derive variants.
"""

import math
from dataclasses import dataclass
from dataclasses import fields

from etasee.exceptions import ConfigurationError

# Options that must lie strictly inside (0, 1)
_OPEN_UNIT_INTERVAL = ("quantile_target",)

# Options that must lie in (0, 1]
_HALF_OPEN_UNIT_INTERVAL = (
    "noise_blend",
    "forgetting_factor",
    "ema_alpha",
    "ema_alpha_warmup",
    "regime_alpha",
)

# Options that must be strictly positive
_POSITIVE = (
    "outlier_cutoff",
    "drift_factor",
    "max_drop_per_second",
    "cold_start_sec_per_unit",
    "regime_threshold",
)

# Options that must be zero or positive
_NON_NEGATIVE = (
    "rise_grace_seconds",
    "rise_min_jump",
    "max_lag_at_end",
    "lag_slope_sqrt",
    "near_end_snap_seconds",
    "warmup_samples",
    "regime_warmup_steps",
)


@dataclass(frozen=True)
class EstimatorOptions:
    """
    Tunable parameters for EtaEstimator.

    Attributes:
        outlier_cutoff: Huber threshold in multiples of the residual sigma.
        noise_blend: EMA factor for the pace filter's residual variance.
        drift_factor: Pace filter process noise as a fraction of the
            residual variance. Higher values trust recent pace more.
        forgetting_factor: RLS forgetting factor (lambda) of the trend fit.
        ema_alpha: Steady-state EMA rate of the pace EMA.
        ema_alpha_warmup: Faster EMA rate used during warmup and after a
            regime shift.
        warmup_samples: Samples before the pace EMA switches to ema_alpha.
        max_drop_per_second: Rate at which the displayed value may fall.
        rise_grace_seconds: Window after a displayed drop during which
            rises are suppressed.
        rise_min_jump: Minimum rise in seconds worth displaying.
        cold_start_sec_per_unit: Seed for the pace EMA.
        max_lag_at_end: Floor of the lag tolerated between display and
            target before drop credit is forced.
        lag_slope_sqrt: Growth of the tolerated lag with sqrt(target).
        near_end_snap_seconds: Targets at or below this converge directly.
        quantile_target: Quantile of seconds-per-unit tracked by P².
        regime_alpha: Smoothing factor of the regime detector window.
        regime_threshold: Deviation, in window MADs, that flags a shift.
        regime_warmup_steps: Events of faster adaptation after a shift.
        max_drop_per_tick: If set, the remaining time returned by
            record_progress() falls by at most this many seconds per event.
    """

    outlier_cutoff: float = 3.0
    noise_blend: float = 0.15
    drift_factor: float = 0.02
    forgetting_factor: float = 0.995
    ema_alpha: float = 0.12
    ema_alpha_warmup: float = 0.37
    warmup_samples: int = 20
    max_drop_per_second: float = 1.0
    rise_grace_seconds: float = 3.0
    rise_min_jump: int = 2
    cold_start_sec_per_unit: float = 0.4
    max_lag_at_end: float = 3.0
    lag_slope_sqrt: float = 0.5
    near_end_snap_seconds: float = 8.0
    quantile_target: float = 0.70
    regime_alpha: float = 0.10
    regime_threshold: float = 4.0
    regime_warmup_steps: int = 8
    max_drop_per_tick: float | None = None

    def __post_init__(self) -> None:
        """Validate option ranges.

        Raises:
            ConfigurationError: If any option is non-finite or out of range.
        """
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if not math.isfinite(value):
                raise ConfigurationError(f.name, f"'{f.name}' must be finite, got {value!r}")

        for name in _OPEN_UNIT_INTERVAL:
            value = getattr(self, name)
            if not 0.0 < value < 1.0:
                raise ConfigurationError(name, f"'{name}' must be in (0, 1), got {value!r}")

        for name in _HALF_OPEN_UNIT_INTERVAL:
            value = getattr(self, name)
            if not 0.0 < value <= 1.0:
                raise ConfigurationError(name, f"'{name}' must be in (0, 1], got {value!r}")

        for name in _POSITIVE:
            value = getattr(self, name)
            if value <= 0:
                raise ConfigurationError(name, f"'{name}' must be positive, got {value!r}")

        for name in _NON_NEGATIVE:
            value = getattr(self, name)
            if value < 0:
                raise ConfigurationError(name, f"'{name}' must not be negative, got {value!r}")

        if self.max_drop_per_tick is not None and self.max_drop_per_tick < 0:
            raise ConfigurationError(
                "max_drop_per_tick",
                f"'max_drop_per_tick' must not be negative, got {self.max_drop_per_tick!r}",
            )


DEFAULT_OPTIONS = EstimatorOptions()
