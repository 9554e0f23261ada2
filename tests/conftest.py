"""Shared test fixtures for etasee tests."""

from collections.abc import Generator

import pytest

from etasee.estimation.estimator import EtaEstimator
from etasee.state.clock import FrozenClock
from etasee.state.clock import reset_clock
from etasee.types import Snapshot


@pytest.fixture
def frozen_clock() -> FrozenClock:
    """A clock frozen at an arbitrary non-zero start time."""
    return FrozenClock(1000.0)


@pytest.fixture(autouse=True)
def cleanup_clock() -> Generator[None, None, None]:
    """Reset the global clock after each test."""
    yield
    reset_clock()


def feed(
    estimator: EtaEstimator,
    clock: FrozenClock,
    interval: float,
    count: int,
    units: float = 1.0,
) -> Snapshot:
    """Record ``count`` events spaced ``interval`` seconds apart."""
    snapshot = estimator.snapshot()
    for _ in range(count):
        clock.advance(interval)
        snapshot = estimator.record_progress(units)
    return snapshot


def assert_approx(actual: float, expected: float, rel_tol: float, abs_tol: float) -> None:
    """Assert |actual - expected| <= max(abs_tol, rel_tol * |expected|)."""
    tol = max(abs_tol, abs(expected) * rel_tol)
    assert abs(actual - expected) <= tol, f"Expected ≈ {expected} (±{tol}), got {actual}"
