"""Online regression of elapsed time against progress."""

from etasee.regression.trend import ProgressTrend

__all__ = ["ProgressTrend"]
