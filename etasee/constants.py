"""Centralized constants for etasee.

This module consolidates the numeric tuning constants that are not exposed
through EstimatorOptions, so every predictor agrees on the same floors,
caps and fixed smoothing factors.
"""

import math

# =============================================================================
# Numerical Floors
# =============================================================================

#: Smallest variance accepted by the fusion engine (seconds squared)
VARIANCE_FLOOR: float = 1e-12

#: Largest inverse-variance weight a single candidate may carry
MAX_CANDIDATE_WEIGHT: float = 1e9

#: Elapsed time substituted for zero or negative intervals between events
MIN_INTERVAL_SECONDS: float = 1e-9

#: Sigma at or below which robust weighting is disabled
MIN_SIGMA: float = 1e-12

# =============================================================================
# Noise Meter
# =============================================================================

#: EMA factor for the mean absolute residual and mean squared residual
NOISE_METER_ALPHA: float = 0.2

#: Converts a mean absolute deviation into a Gaussian sigma
SQRT_PI_OVER_2: float = math.sqrt(math.pi / 2.0)

#: Lower bound on the sigma used for robust weighting, as a fraction of the mean pace
NOISE_MIN_SIGMA_FRACTION: float = 0.05

# =============================================================================
# Pace Filter
# =============================================================================

#: Variance assigned to the pace estimate after the first observation
PACE_INITIAL_VARIANCE: float = 1.0

#: Initial residual variance as a fraction of the first observation squared
PACE_INITIAL_RESIDUAL_SCALE: float = 0.01

#: Lower bound on the residual (measurement) variance
PACE_MIN_RESIDUAL_VARIANCE: float = 1e-9

#: Lower bound on the process noise
PACE_MIN_PROCESS_NOISE: float = 1e-12

# =============================================================================
# Trend Regressor
# =============================================================================

#: Diagonal of the initial RLS covariance matrix
TREND_INITIAL_COVARIANCE: float = 1e6

#: Weight of the newest squared error in the residual variance EMA
TREND_RESIDUAL_BLEND: float = 0.1

# =============================================================================
# Regime Detection
# =============================================================================

#: Observations required before the regime detector may flag a shift
REGIME_MIN_OBSERVATIONS: int = 8

#: Lower bound on the window MAD as a fraction of the window mean
REGIME_MIN_MAD_FRACTION: float = 1e-3

#: Multiplier applied to the drift factor while a regime override is active
REGIME_DRIFT_MULTIPLIER: float = 10.0

#: Noise blend used while a regime override is active (lower bound)
REGIME_NOISE_BLEND: float = 0.5

# =============================================================================
# Fusion Candidates
# =============================================================================

#: Nominal variance of the EMA pace candidate, as a fraction of its eta squared
EMA_CANDIDATE_RELATIVE_VARIANCE: float = 0.25

#: Variance of the P² quantile candidate, as a fraction of its eta squared
QUANTILE_CANDIDATE_RELATIVE_VARIANCE: float = 0.04

#: Number of markers kept by the P² quantile estimator
P2_MARKER_COUNT: int = 5

# =============================================================================
# Display Stabilizer
# =============================================================================

#: Raw estimates at or below this many seconds snap the display to zero
DISPLAY_SNAP_TO_ZERO_SECONDS: float = 0.25

#: Remaining units at or below this count are treated as complete
COMPLETION_TOLERANCE_UNITS: float = 1e-9
