"""Tests for inverse-variance fusion."""

import math

import pytest

from etasee.estimation.fusion import FusionAccumulator
from etasee.estimation.fusion import fuse
from etasee.types import Candidate


class TestFuse:
    """Tests for fuse()."""

    def test_empty(self) -> None:
        """Test no candidates gives infinity."""
        assert fuse([]) == math.inf

    def test_weighted_mean(self) -> None:
        """Test candidates are weighted by inverse variance."""
        assert fuse([Candidate(10.0, 1.0), Candidate(20.0, 4.0)]) == pytest.approx(12.0)

    def test_equal_variances(self) -> None:
        """Test equal variances give the plain mean."""
        assert fuse([Candidate(10.0, 2.0), Candidate(30.0, 2.0)]) == pytest.approx(20.0)

    @pytest.mark.parametrize("eta", [0.0, -5.0, math.inf, math.nan])
    def test_invalid_eta_skipped(self, eta: float) -> None:
        """Test unusable estimates do not contribute."""
        assert fuse([Candidate(eta, 1.0), Candidate(15.0, 1.0)]) == pytest.approx(15.0)

    def test_only_invalid_gives_infinity(self) -> None:
        """Test infinity when nothing is usable."""
        assert fuse([Candidate(0.0, 1.0), Candidate(math.inf, 1.0)]) == math.inf

    def test_zero_variance_is_capped(self) -> None:
        """Test a zero variance dominates without overflowing."""
        result = fuse([Candidate(10.0, 0.0), Candidate(20.0, 1.0)])
        assert math.isfinite(result)
        assert result == pytest.approx(10.0, rel=1e-6)

    def test_nan_variance_skipped(self) -> None:
        """Test a NaN variance excludes the candidate."""
        assert fuse([Candidate(10.0, math.nan), Candidate(20.0, 1.0)]) == pytest.approx(20.0)


class TestFusionAccumulator:
    """Tests for FusionAccumulator."""

    def test_counts_accepted(self) -> None:
        """Test add() reports and counts accepted candidates."""
        accumulator = FusionAccumulator()
        assert accumulator.add(Candidate(10.0, 1.0))
        assert not accumulator.add(Candidate(-1.0, 1.0))
        assert not accumulator.add(Candidate(5.0, math.nan))
        assert accumulator.add(Candidate(20.0, 1.0))
        assert accumulator.accepted == 2
        assert accumulator.weight_total == pytest.approx(2.0)
        assert accumulator.result() == pytest.approx(15.0)
