"""Remaining-time estimation package.

This package provides the components that turn progress events into a
displayable remaining time:
- EtaEstimator: Main coordinator class
- FusionAccumulator / fuse: Inverse-variance fusion of predictor outputs
- DisplayStabilizer: Rate-limited, hysteretic display smoothing
"""

from etasee.estimation.estimator import EtaEstimator
from etasee.estimation.fusion import FusionAccumulator
from etasee.estimation.fusion import fuse
from etasee.estimation.stabilizer import DisplayStabilizer
from etasee.estimation.stabilizer import DisplayState

__all__ = [
    "DisplayStabilizer",
    "DisplayState",
    "EtaEstimator",
    "FusionAccumulator",
    "fuse",
]
