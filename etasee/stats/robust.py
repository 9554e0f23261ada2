"""Robust weighting helpers."""

from etasee.constants import MIN_SIGMA


def huber_weight(residual: float, sigma: float | None, cutoff: float) -> float:
    """
    Soft Huber-type weight for a residual.

    Residuals within ``cutoff * sigma`` get full weight; larger ones are
    shrunk proportionally to their size but never discarded.

    Args:
        residual: Deviation of the sample from the running estimate.
        sigma: Estimated residual sigma, None if unknown.
        cutoff: Threshold in multiples of sigma.

    Returns:
        Weight in (0, 1].
    """
    if sigma is None or sigma <= MIN_SIGMA:
        return 1.0
    t = abs(residual) / (cutoff * sigma)
    return 1.0 if t <= 1.0 else 1.0 / t
