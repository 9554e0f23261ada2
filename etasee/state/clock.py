"""Injectable clock for testable time handling.

The estimator never reads the system time directly. It asks a Clock, so
tests can drive it with a FrozenClock and advance time explicitly instead
of sleeping.

Example usage:
    # Production code
    from etasee import EtaEstimator

    estimator = EtaEstimator(total=100)  # uses get_clock()

    # Test code
    from etasee.state.clock import FrozenClock

    def test_pace():
        clock = FrozenClock()
        estimator = EtaEstimator(total=10, clock=clock)

        clock.advance(0.5)
        estimator.record_progress()
        assert estimator.snapshot().pace_filtered == 0.5
"""

import time as _time
from typing import Protocol


class Clock(Protocol):
    """Protocol for injectable time sources.

    A single method returning monotonically non-decreasing seconds is all
    the estimator needs.
    """

    def monotonic(self) -> float:
        """Return monotonic clock value for measuring durations.

        This is not affected by system clock adjustments and is suitable
        for measuring elapsed time.
        """
        ...


class SystemClock:
    """Default clock implementation using time.monotonic()."""

    def monotonic(self) -> float:
        """Return monotonic clock value."""
        return _time.monotonic()


class FrozenClock:
    """Clock frozen at a specific time for testing.

    Useful for testing time-dependent logic without flakiness.

    Example:
        clock = FrozenClock(100.0)
        assert clock.monotonic() == 100.0

        clock.advance(0.05)
        assert clock.monotonic() == 100.05
    """

    def __init__(self, frozen_monotonic: float = 0.0) -> None:
        """Initialize with a specific frozen time.

        Args:
            frozen_monotonic: Monotonic value to freeze at. Defaults to 0.0.
        """
        self._monotonic = frozen_monotonic

    def monotonic(self) -> float:
        """Return the frozen monotonic value."""
        return self._monotonic

    def advance(self, seconds: float) -> None:
        """Advance the frozen time by the given number of seconds.

        Also usable as a drop-in ``sleep`` replacement.

        Args:
            seconds: Number of seconds to advance. Must not be negative,
                since the clock is monotonic.
        """
        if seconds < 0:
            raise ValueError(f"Cannot move a monotonic clock backwards by {seconds}s")
        self._monotonic += seconds

    def set_monotonic(self, value: float) -> None:
        """Set the frozen monotonic value.

        Args:
            value: Monotonic value to set.
        """
        self._monotonic = value


# Default global clock instance
_default_clock: Clock = SystemClock()


def get_clock() -> Clock:
    """Get the current default clock.

    Returns:
        The currently configured clock instance.
    """
    return _default_clock


def set_clock(clock: Clock) -> None:
    """Set the default clock (primarily for testing).

    Args:
        clock: Clock instance to use as default.
    """
    global _default_clock
    _default_clock = clock


def reset_clock() -> None:
    """Reset the default clock to SystemClock."""
    global _default_clock
    _default_clock = SystemClock()
