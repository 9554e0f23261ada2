"""Adaptive filters for pace tracking."""

from etasee.filters.pace import PaceFilter

__all__ = ["PaceFilter"]
