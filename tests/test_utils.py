"""Tests for utility functions."""

import math

import pytest

from etasee.utils import format_duration


class TestFormatDuration:
    """Tests for format_duration function."""

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0.0, "00:00"),
            (5.0, "00:05"),
            (59.6, "01:00"),
            (754.0, "12:34"),
            (3599.0, "59:59"),
            (3600.0, "1:00:00"),
            (3725.0, "1:02:05"),
            (90061.0, "25:01:01"),
        ],
    )
    def test_formats(self, seconds: float, expected: str) -> None:
        """Test minute and hour formats."""
        assert format_duration(seconds) == expected

    def test_infinity(self) -> None:
        """Test an unknown remaining time."""
        assert format_duration(math.inf) == "∞"

    def test_nan(self) -> None:
        """Test NaN is shown as unknown."""
        assert format_duration(math.nan) == "∞"

    def test_negative(self) -> None:
        """Test negative durations clamp to zero."""
        assert format_duration(-3.0) == "00:00"
