"""Display stabilization of raw remaining-time estimates.

The fused estimate jitters from read to read. DisplayStabilizer turns it
into an integer number of seconds that is comfortable to watch: it falls
at a bounded rate, rises only by meaningful jumps and not right after a
drop, and still converges to zero as the work finishes.
"""

import logging
import math
from dataclasses import dataclass

from etasee.constants import DISPLAY_SNAP_TO_ZERO_SECONDS
from etasee.state.config import DEFAULT_OPTIONS
from etasee.state.config import EstimatorOptions

logger = logging.getLogger(__name__)


@dataclass
class DisplayState:
    """
    Mutable state of the display stabilizer.

    Attributes:
        current: Displayed seconds, None until the first finite read.
        drop_credit: Seconds the displayed value is entitled to fall.
        last_decrease_at: Clock time of the most recent displayed drop.
        last_read_at: Clock time of the most recent finite read.
    """

    current: int | None = None
    drop_credit: float = 0.0
    last_decrease_at: float | None = None
    last_read_at: float | None = None


def _round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


class DisplayStabilizer:
    """
    Converts raw estimates into displayable seconds.

    Each call to ``read`` walks the following rules:

    1. An infinite raw estimate is passed through untouched.
    2. A raw estimate at or below 0.25s, or finished work, snaps to 0.
    3. Drop credit accrues at ``max_drop_per_second`` of elapsed time, up to
       one interval (at least one second) worth.
    4. The raw estimate is rounded to a whole-second target.
    5. The first read adopts the target.
    6. Rises are shown only outside the post-drop grace window and only when
       at least ``rise_min_jump`` seconds.
    7. Falls beyond a lag cap, or any fall near the end, force extra credit.
    8. The display falls by as much whole-second credit as is available.
    """

    def __init__(self, options: EstimatorOptions = DEFAULT_OPTIONS) -> None:
        self.options = options
        self.state = DisplayState()

    @property
    def current(self) -> int | None:
        """Currently displayed seconds."""
        return self.state.current

    def reset(self) -> None:
        """Forget all display state."""
        self.state = DisplayState()

    def lag_cap(self, target: int) -> float:
        """Largest lag between display and target tolerated without forcing credit."""
        return max(
            self.options.max_lag_at_end,
            self.options.lag_slope_sqrt * math.sqrt(max(0, target)),
        )

    def read(self, raw_seconds: float, now: float, complete: bool = False) -> float:
        """
        Stabilize one raw reading.

        Args:
            raw_seconds: Raw fused remaining time.
            now: Current clock time in seconds.
            complete: Whether all work is done.

        Returns:
            Integer-valued seconds to display, or +inf.
        """
        if math.isinf(raw_seconds):
            return math.inf

        state = self.state
        opts = self.options

        if complete or raw_seconds <= DISPLAY_SNAP_TO_ZERO_SECONDS:
            if state.current:
                logger.debug("Display snapped to zero from %ds", state.current)
            state.current = 0
            state.drop_credit = 0.0
            state.last_decrease_at = now
            state.last_read_at = now
            return 0.0

        if state.last_read_at is not None:
            elapsed = max(0.0, now - state.last_read_at)
            rate = opts.max_drop_per_second
            # Credit never exceeds what this interval, or one second, earns
            state.drop_credit = min(rate * max(elapsed, 1.0), state.drop_credit + elapsed * rate)
        state.last_read_at = now

        target = _round_half_up(raw_seconds)

        if state.current is None:
            state.current = target
            return float(target)

        current = state.current
        if target > current:
            in_grace = (
                state.last_decrease_at is not None
                and now - state.last_decrease_at < opts.rise_grace_seconds
            )
            if not in_grace and target - current >= opts.rise_min_jump:
                state.current = target
        elif target < current:
            desired = current - target
            if target <= opts.near_end_snap_seconds:
                state.drop_credit += desired
            else:
                deficit = desired - self.lag_cap(target)
                if deficit > 0:
                    state.drop_credit += deficit

            step = min(desired, int(math.floor(state.drop_credit)))
            if step > 0:
                state.current = current - step
                state.drop_credit -= step
                state.last_decrease_at = now

            if target == 0 and state.current <= 1:
                state.current = 0
                state.drop_credit = 0.0
                state.last_decrease_at = now

        return float(state.current)
