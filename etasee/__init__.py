"""Etasee: stable remaining-time estimates for progress indicators."""

from importlib.metadata import version

from etasee.estimation import DisplayStabilizer
from etasee.estimation import EtaEstimator
from etasee.estimation import fuse
from etasee.exceptions import ConfigurationError
from etasee.exceptions import EtaseeError
from etasee.exceptions import InvalidTotalError
from etasee.state.clock import Clock
from etasee.state.clock import FrozenClock
from etasee.state.clock import SystemClock
from etasee.state.config import DEFAULT_OPTIONS
from etasee.state.config import EstimatorOptions
from etasee.types import Candidate
from etasee.types import Snapshot
from etasee.utils import format_duration

__version__ = version("etasee")

__all__ = [
    "Candidate",
    "Clock",
    "ConfigurationError",
    "DEFAULT_OPTIONS",
    "DisplayStabilizer",
    "EstimatorOptions",
    "EtaEstimator",
    "EtaseeError",
    "FrozenClock",
    "InvalidTotalError",
    "Snapshot",
    "SystemClock",
    "format_duration",
    "fuse",
]
