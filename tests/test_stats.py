"""Tests for the streaming statistics helpers."""

import math

import pytest

from etasee.constants import SQRT_PI_OVER_2
from etasee.stats.ema import PaceEma
from etasee.stats.noise import NoiseMeter
from etasee.stats.regime import RegimeDetector
from etasee.stats.robust import huber_weight
from etasee.stats.welford import RunningStats


class TestRunningStats:
    """Tests for the Welford accumulator."""

    def test_empty(self) -> None:
        """Test an empty accumulator."""
        stats = RunningStats()
        assert stats.count == 0
        assert stats.variance is None

    def test_single_value_has_no_variance(self) -> None:
        """Test variance is undefined for one sample."""
        stats = RunningStats()
        stats.push(3.0)
        assert stats.mean == 3.0
        assert stats.variance is None

    def test_mean_and_variance(self) -> None:
        """Test against a known sample variance."""
        stats = RunningStats()
        for x in [2, 4, 4, 4, 5, 5, 7, 9]:
            stats.push(x)
        assert stats.count == 8
        assert stats.mean == pytest.approx(5.0)
        assert stats.variance == pytest.approx(32.0 / 7.0)

    def test_large_offset_is_stable(self) -> None:
        """Test small variance on a large offset is not lost to cancellation."""
        stats = RunningStats()
        for x in [1e9 + 4, 1e9 + 7, 1e9 + 13, 1e9 + 16]:
            stats.push(x)
        assert stats.variance == pytest.approx(30.0)


class TestNoiseMeter:
    """Tests for the residual noise meter."""

    def test_no_sigma_before_samples(self) -> None:
        """Test sigma is unavailable before any residual."""
        assert NoiseMeter().sigma() is None

    def test_first_residual(self) -> None:
        """Test sigma after one residual averages the MAD and RMS estimates."""
        meter = NoiseMeter()
        meter.push(-2.0)
        assert meter.sigma() == pytest.approx(0.5 * (2.0 * SQRT_PI_OVER_2 + 2.0))

    def test_constant_magnitude(self) -> None:
        """Test a residual stream of constant magnitude."""
        meter = NoiseMeter()
        for i in range(50):
            meter.push(1.0 if i % 2 else -1.0)
        assert meter.sigma() == pytest.approx(0.5 * (SQRT_PI_OVER_2 + 1.0))

    def test_decays_toward_recent(self) -> None:
        """Test sigma shrinks after the residuals become small."""
        meter = NoiseMeter()
        meter.push(10.0)
        before = meter.sigma()
        for _ in range(20):
            meter.push(0.0)
        after = meter.sigma()
        assert before is not None and after is not None
        assert after < before * 0.1


class TestHuberWeight:
    """Tests for the robust weighting function."""

    def test_unknown_sigma(self) -> None:
        """Test full weight without a noise estimate."""
        assert huber_weight(100.0, None, 3.0) == 1.0

    def test_zero_sigma(self) -> None:
        """Test full weight when sigma is zero."""
        assert huber_weight(100.0, 0.0, 3.0) == 1.0

    def test_inside_cutoff(self) -> None:
        """Test residuals within the cutoff keep full weight."""
        assert huber_weight(2.0, 1.0, 3.0) == 1.0
        assert huber_weight(3.0, 1.0, 3.0) == 1.0

    def test_outside_cutoff(self) -> None:
        """Test large residuals are shrunk, not rejected."""
        assert huber_weight(6.0, 1.0, 3.0) == pytest.approx(0.5)
        assert huber_weight(-30.0, 1.0, 3.0) == pytest.approx(0.1)


class TestPaceEma:
    """Tests for the exponentially smoothed pace."""

    def test_seeded(self) -> None:
        """Test the EMA is available before any sample."""
        ema = PaceEma(seed=0.4, alpha=0.12, alpha_warmup=0.37, warmup_samples=2)
        assert ema.value == 0.4
        assert ema.warming_up

    def test_warmup_then_steady_rate(self) -> None:
        """Test the warmup rate is used for the first samples only."""
        ema = PaceEma(seed=0.4, alpha=0.12, alpha_warmup=0.37, warmup_samples=2)
        ema.update(1.0)
        assert ema.value == pytest.approx(0.4 + 0.37 * 0.6)
        ema.update(1.0)
        second = 0.622 + 0.37 * (1.0 - 0.622)
        assert ema.value == pytest.approx(second)
        assert not ema.warming_up
        ema.update(1.0)
        assert ema.value == pytest.approx(second + 0.12 * (1.0 - second))

    def test_fast_forces_warmup_rate(self) -> None:
        """Test fast=True uses the warmup rate after warmup."""
        ema = PaceEma(seed=1.0, alpha=0.1, alpha_warmup=0.5, warmup_samples=0)
        ema.update(2.0, fast=True)
        assert ema.value == pytest.approx(1.5)

    def test_weight_scales_step(self) -> None:
        """Test a robust weight shortens the step toward the sample."""
        ema = PaceEma(seed=1.0, alpha=0.5, alpha_warmup=0.5, warmup_samples=0)
        ema.update(3.0, weight=0.5)
        assert ema.value == pytest.approx(1.5)


class TestRegimeDetector:
    """Tests for the regime-shift detector."""

    def test_inactive_during_warmup(self) -> None:
        """Test no shift is flagged before enough observations."""
        detector = RegimeDetector(alpha=0.1, threshold=4.0)
        for _ in range(7):
            assert not detector.is_shift(1000.0)
            detector.push(1.0)
        assert not detector.active

    def test_flags_jump_after_steady_input(self) -> None:
        """Test a large jump after steady input is a shift."""
        detector = RegimeDetector(alpha=0.1, threshold=4.0)
        for _ in range(8):
            detector.push(1.0)
        assert detector.active
        assert detector.is_shift(10.0)
        assert not detector.is_shift(1.0)

    def test_float_jitter_is_not_a_shift(self) -> None:
        """Test tiny deviations on perfectly steady input are ignored."""
        detector = RegimeDetector(alpha=0.1, threshold=4.0)
        for _ in range(20):
            detector.push(0.05)
        assert not detector.is_shift(0.05 + 1e-12)

    def test_noisy_input(self) -> None:
        """Test ordinary noise is tolerated while a real jump is not."""
        detector = RegimeDetector(alpha=0.1, threshold=4.0)
        for i in range(50):
            detector.push(1.0 if i % 2 else 1.1)
        assert detector.window_mean is not None
        assert math.isclose(detector.window_mean, 1.05, abs_tol=0.01)
        assert not detector.is_shift(1.08)
        assert detector.is_shift(2.0)

    def test_window_follows_new_level(self) -> None:
        """Test the window mean moves toward a new level."""
        detector = RegimeDetector(alpha=0.1, threshold=4.0)
        for _ in range(10):
            detector.push(1.0)
        for _ in range(40):
            detector.push(2.0)
        assert detector.window_mean == pytest.approx(2.0, abs=0.02)
        assert not detector.is_shift(2.0)
