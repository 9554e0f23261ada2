"""Inverse-variance fusion of remaining-time candidates."""

import math
from collections.abc import Iterable

from etasee.constants import MAX_CANDIDATE_WEIGHT
from etasee.constants import VARIANCE_FLOOR
from etasee.types import Candidate


class FusionAccumulator:
    """
    Running inverse-variance weighted mean of candidate estimates.

    Each candidate is weighted by ``1 / max(VARIANCE_FLOOR, variance)``,
    capped at ``MAX_CANDIDATE_WEIGHT`` so a near-zero variance cannot
    swamp the others numerically. Candidates with a non-finite or
    non-positive eta, or a NaN variance, are skipped.

    Attributes:
        weighted_sum: Sum of weight * eta over accepted candidates.
        weight_total: Sum of weights over accepted candidates.
        accepted: Number of accepted candidates.
    """

    def __init__(self) -> None:
        self.weighted_sum = 0.0
        self.weight_total = 0.0
        self.accepted = 0

    def add(self, candidate: Candidate) -> bool:
        """
        Fold a candidate into the running mean.

        Returns:
            True if the candidate was accepted.
        """
        eta, variance = candidate
        if not math.isfinite(eta) or eta <= 0.0:
            return False
        if math.isnan(variance):
            return False
        weight = min(MAX_CANDIDATE_WEIGHT, 1.0 / max(VARIANCE_FLOOR, variance))
        self.weighted_sum += weight * eta
        self.weight_total += weight
        self.accepted += 1
        return True

    def result(self) -> float:
        """Fused estimate, or +inf if no candidate was accepted."""
        if self.weight_total <= 0.0:
            return math.inf
        return max(0.0, self.weighted_sum / self.weight_total)


def fuse(candidates: Iterable[Candidate]) -> float:
    """
    Combine candidates by inverse-variance weighting.

    Args:
        candidates: (eta_seconds, variance) pairs.

    Returns:
        Fused remaining seconds, or +inf if none was usable.
    """
    accumulator = FusionAccumulator()
    for candidate in candidates:
        accumulator.add(candidate)
    return accumulator.result()
