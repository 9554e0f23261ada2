"""Value types shared between the estimator and its callers.

This module provides the small immutable records that cross component
boundaries: fusion candidates and estimator snapshots.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import NamedTuple

# Sleep-like callback used by the demo host to wait between work units.
# Args: (seconds: float)
SleepFunction = Callable[[float], None]


class Candidate(NamedTuple):
    """A remaining-time estimate from one predictor.

    Attributes:
        eta_seconds: Estimated remaining time in seconds.
        variance: Estimated variance of eta_seconds in seconds squared.
    """

    eta_seconds: float
    variance: float


@dataclass(frozen=True)
class Snapshot:
    """
    Point-in-time view of an estimator.

    Attributes:
        remaining_seconds: Raw fused remaining time, +inf before any progress.
        percent_complete: Completion percentage in [0, 100].
        pace_ema: Exponentially smoothed seconds per unit.
        pace_filtered: Pace filter estimate of seconds per unit, None until
            the first progress event.
    """

    remaining_seconds: float
    percent_complete: float
    pace_ema: float
    pace_filtered: float | None = None

    @property
    def is_complete(self) -> bool:
        """Whether all work has been completed."""
        return self.percent_complete >= 100.0
