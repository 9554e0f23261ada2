"""Console demo: simulated work with a live ETA table.

Run ``etasee-demo --total 50`` to watch the raw and stabilized estimates
while random-length work units complete.
"""

import argparse
import math
import random
import sys
import time
from collections.abc import Sequence

from rich.console import Console
from rich.live import Live
from rich.table import Table
from rich.text import Text

from etasee.estimation.estimator import EtaEstimator
from etasee.exceptions import EtaseeError
from etasee.state.config import EstimatorOptions
from etasee.types import SleepFunction
from etasee.types import Snapshot
from etasee.utils import format_duration

ETA_STYLE = "bold cyan"
DONE_STYLE = "bold green"


def build_table(estimator: EtaEstimator, snapshot: Snapshot, stable_seconds: float) -> Table:
    """
    Render one frame of the demo.

    Args:
        estimator: Estimator being demonstrated.
        snapshot: Latest snapshot (raw estimate).
        stable_seconds: Latest stabilized estimate.

    Returns:
        A two-column rich table.
    """
    table = Table(title="etasee demo", show_header=False, expand=False)
    table.add_column("Metric", style="dim")
    table.add_column("Value", justify="right")

    table.add_row("Done", f"{estimator.done:g}/{estimator.total:g}")
    style = DONE_STYLE if snapshot.is_complete else ETA_STYLE
    table.add_row("Progress", Text(f"{snapshot.percent_complete:.1f}%", style=style))
    table.add_row("ETA", Text(format_duration(stable_seconds), style=style))
    raw = snapshot.remaining_seconds
    table.add_row("Raw ETA (s)", "∞" if math.isinf(raw) else f"{raw:.2f}")
    table.add_row("Pace EMA (s/unit)", f"{snapshot.pace_ema:.3f}")
    filtered = snapshot.pace_filtered
    table.add_row("Pace filter (s/unit)", "-" if filtered is None else f"{filtered:.3f}")
    return table


def run_demo(
    estimator: EtaEstimator,
    delays: Sequence[float],
    units_per_step: float = 1.0,
    sleep: SleepFunction = time.sleep,
    console: Console | None = None,
) -> Snapshot:
    """
    Drive an estimator through simulated work while rendering it live.

    Args:
        estimator: Estimator to feed.
        delays: Seconds of simulated work before each progress event.
        units_per_step: Units reported per event.
        sleep: Called with each delay; tests pass a FrozenClock's advance.
        console: Console to render to. Defaults to stdout.

    Returns:
        The final snapshot.
    """
    console = console or Console()
    snapshot = estimator.snapshot()
    stable = estimator.stabilized_remaining_seconds()
    with Live(
        build_table(estimator, snapshot, stable), console=console, auto_refresh=False
    ) as live:
        for delay in delays:
            if snapshot.is_complete:
                break
            sleep(delay)
            snapshot = estimator.record_progress(units_per_step)
            stable = estimator.stabilized_remaining_seconds()
            live.update(build_table(estimator, snapshot, stable), refresh=True)
    return snapshot


def main(argv: Sequence[str] | None = None) -> int:
    """
    Entry point for the ``etasee-demo`` script.

    Returns:
        Exit code: 0 on success, 2 on invalid arguments.
    """
    parser = argparse.ArgumentParser(
        description="Simulate random work and display a stabilized ETA."
    )
    parser.add_argument("--total", type=float, default=50.0, help="Total units of work")
    parser.add_argument("--units-per-step", type=float, default=1.0, help="Units per event")
    parser.add_argument("--min-ms", type=int, default=100, help="Shortest simulated step")
    parser.add_argument("--max-ms", type=int, default=400, help="Longest simulated step")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--max-drop-per-tick",
        type=float,
        default=None,
        help="Limit how far the per-event ETA may fall (seconds)",
    )
    args = parser.parse_args(argv)

    if args.min_ms < 0 or args.max_ms < args.min_ms:
        parser.error("--min-ms must be >= 0 and <= --max-ms")
    if args.units_per_step <= 0:
        parser.error("--units-per-step must be positive")

    console = Console()
    try:
        options = EstimatorOptions(max_drop_per_tick=args.max_drop_per_tick)
        estimator = EtaEstimator(args.total, options=options)
    except EtaseeError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 2

    rng = random.Random(args.seed)
    steps = int(-(-args.total // args.units_per_step))
    delays = [rng.randint(args.min_ms, args.max_ms) / 1000.0 for _ in range(steps)]

    run_demo(estimator, delays, units_per_step=args.units_per_step, console=console)
    console.print(Text("Done.", style=DONE_STYLE))
    return 0


if __name__ == "__main__":
    sys.exit(main())
