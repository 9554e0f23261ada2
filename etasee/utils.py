"""Shared utility functions for etasee."""

import math


def format_duration(seconds: float) -> str:
    """
    Format a remaining time as a clock string.

    Args:
        seconds: Duration in seconds. Negative values are treated as 0.

    Returns:
        "mm:ss" below one hour, "h:mm:ss" above, and "∞" for infinity or NaN.
    """
    if math.isnan(seconds) or math.isinf(seconds):
        return "∞"
    total = int(round(max(0.0, seconds)))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"
