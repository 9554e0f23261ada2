"""Configuration and time sources shared by the estimator."""

from etasee.state.clock import Clock
from etasee.state.clock import FrozenClock
from etasee.state.clock import SystemClock
from etasee.state.clock import get_clock
from etasee.state.clock import reset_clock
from etasee.state.clock import set_clock
from etasee.state.config import DEFAULT_OPTIONS
from etasee.state.config import EstimatorOptions

__all__ = [
    "Clock",
    "DEFAULT_OPTIONS",
    "EstimatorOptions",
    "FrozenClock",
    "SystemClock",
    "get_clock",
    "reset_clock",
    "set_clock",
]
