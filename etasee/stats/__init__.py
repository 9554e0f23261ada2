"""Streaming statistics used by the predictors."""

from etasee.stats.ema import PaceEma
from etasee.stats.noise import NoiseMeter
from etasee.stats.quantile import P2Quantile
from etasee.stats.regime import RegimeDetector
from etasee.stats.robust import huber_weight
from etasee.stats.welford import RunningStats

__all__ = [
    "NoiseMeter",
    "P2Quantile",
    "PaceEma",
    "RegimeDetector",
    "RunningStats",
    "huber_weight",
]
