"""Tests for the console demo."""

import io

import pytest
from rich.console import Console

from etasee.demo import build_table
from etasee.demo import main
from etasee.demo import run_demo
from etasee.estimation.estimator import EtaEstimator
from etasee.state.clock import FrozenClock


def quiet_console() -> Console:
    """A console writing to a buffer."""
    return Console(file=io.StringIO(), force_terminal=False, width=80)


class TestBuildTable:
    """Tests for build_table()."""

    def test_rows(self, frozen_clock: FrozenClock) -> None:
        """Test the table shows one row per metric."""
        estimator = EtaEstimator(10, clock=frozen_clock)
        table = build_table(estimator, estimator.snapshot(), float("inf"))
        assert table.row_count == 6

    def test_renders(self, frozen_clock: FrozenClock) -> None:
        """Test the table renders progress and the formatted ETA."""
        estimator = EtaEstimator(10, clock=frozen_clock)
        frozen_clock.advance(1.0)
        snapshot = estimator.record_progress()
        console = quiet_console()
        console.print(build_table(estimator, snapshot, 75.0))
        output = console.file.getvalue()  # type: ignore[attr-defined]
        assert "1/10" in output
        assert "10.0%" in output
        assert "01:15" in output


class TestRunDemo:
    """Tests for run_demo()."""

    def test_runs_to_completion(self, frozen_clock: FrozenClock) -> None:
        """Test the demo drives the estimator to completion with a fake sleep."""
        estimator = EtaEstimator(5, clock=frozen_clock)
        snapshot = run_demo(
            estimator,
            [0.2] * 8,
            sleep=frozen_clock.advance,
            console=quiet_console(),
        )
        assert snapshot.is_complete
        assert snapshot.remaining_seconds == 0.0
        assert estimator.sample_count == 5
        assert frozen_clock.monotonic() == pytest.approx(1001.0)


class TestMain:
    """Tests for the etasee-demo entry point."""

    def test_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a short run without delays."""
        assert main(["--total", "3", "--min-ms", "0", "--max-ms", "0", "--seed", "1"]) == 0
        assert "Done." in capsys.readouterr().out

    def test_invalid_total(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a non-positive total is reported as an error."""
        assert main(["--total", "0"]) == 2
        assert "Error:" in capsys.readouterr().out

    def test_invalid_max_drop(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test invalid options are reported as an error."""
        assert main(["--total", "3", "--max-drop-per-tick", "-1"]) == 2
        assert "max_drop_per_tick" in capsys.readouterr().out

    def test_invalid_delay_range(self) -> None:
        """Test an inverted delay range is rejected by the parser."""
        with pytest.raises(SystemExit):
            main(["--min-ms", "10", "--max-ms", "5"])
