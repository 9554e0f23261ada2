"""Remaining-time estimation from a stream of progress events."""

import dataclasses
import logging
import math
import threading
from collections.abc import Iterator

from etasee.constants import COMPLETION_TOLERANCE_UNITS
from etasee.constants import EMA_CANDIDATE_RELATIVE_VARIANCE
from etasee.constants import MIN_INTERVAL_SECONDS
from etasee.constants import NOISE_MIN_SIGMA_FRACTION
from etasee.constants import QUANTILE_CANDIDATE_RELATIVE_VARIANCE
from etasee.constants import REGIME_DRIFT_MULTIPLIER
from etasee.constants import REGIME_NOISE_BLEND
from etasee.constants import VARIANCE_FLOOR
from etasee.estimation.fusion import FusionAccumulator
from etasee.estimation.stabilizer import DisplayStabilizer
from etasee.exceptions import InvalidTotalError
from etasee.filters.pace import PaceFilter
from etasee.regression.trend import ProgressTrend
from etasee.state.clock import Clock
from etasee.state.clock import get_clock
from etasee.state.config import DEFAULT_OPTIONS
from etasee.state.config import EstimatorOptions
from etasee.stats.ema import PaceEma
from etasee.stats.noise import NoiseMeter
from etasee.stats.quantile import P2Quantile
from etasee.stats.regime import RegimeDetector
from etasee.stats.robust import huber_weight
from etasee.stats.welford import RunningStats
from etasee.types import Candidate
from etasee.types import Snapshot

logger = logging.getLogger(__name__)


def _validate_total(total: float) -> float:
    """Return total as a float, or raise InvalidTotalError."""
    try:
        value = float(total)
    except (TypeError, ValueError) as e:
        raise InvalidTotalError(total, f"Total units must be a number, got {total!r}") from e
    if not math.isfinite(value) or value <= 0.0:
        raise InvalidTotalError(total)
    return value


class EtaEstimator:
    """
    Estimates remaining time for a fixed amount of work.

    Every call to record_progress() turns the interval since the previous
    event into a seconds-per-unit sample and feeds it to a set of independent
    predictors: a Welford running mean, a Kalman-style pace filter, an RLS
    trend of elapsed time against progress, an EMA, and a P² quantile. A
    regime detector watches for sudden sustained pace changes and speeds up
    adaptation for a while when it sees one. Reads fuse the predictors by
    inverse-variance weighting.

    All public methods serialize on a single lock, so one estimator may be
    shared between a worker thread recording progress and a UI thread
    reading it.

    Zero or negative intervals between events (coarse clocks, bursts) are
    clamped to MIN_INTERVAL_SECONDS instead of being rejected, which keeps
    every predictor finite at the cost of treating such events as very fast.

    Example:
        >>> estimator = EtaEstimator(total=100)
        >>> for item in items:
        ...     process(item)
        ...     estimator.record_progress()
        ...     print(estimator.stabilized_remaining_seconds())
    """

    def __init__(
        self,
        total: float,
        options: EstimatorOptions | None = None,
        clock: Clock | None = None,
    ) -> None:
        """
        Initialize the estimator.

        Args:
            total: Total units of work, finite and positive.
            options: Estimator tuning. Defaults to DEFAULT_OPTIONS.
            clock: Time source. Defaults to the global clock from get_clock().

        Raises:
            InvalidTotalError: If total is not finite and positive.
        """
        total = _validate_total(total)
        self.options = options if options is not None else DEFAULT_OPTIONS
        self._clock = clock if clock is not None else get_clock()
        self._lock = threading.Lock()
        self._stabilizer = DisplayStabilizer(self.options)
        self._init_state(total)

    def _init_state(self, total: float) -> None:
        """(Re)create all progress, predictor and display state. Caller holds the lock."""
        opts = self.options
        self._total = total
        self._done = 0.0
        self._start_time = self._clock.monotonic()
        self._last_event_time = self._start_time
        self._sample_count = 0
        self._regime_override = 0
        self._last_tick_eta = math.inf

        self._stats = RunningStats()
        self._noise = NoiseMeter()
        self._pace = PaceFilter()
        self._trend = ProgressTrend(opts.forgetting_factor)
        self._quantile = P2Quantile(opts.quantile_target)
        self._regime = RegimeDetector(opts.regime_alpha, opts.regime_threshold)
        self._ema = PaceEma(
            seed=opts.cold_start_sec_per_unit,
            alpha=opts.ema_alpha,
            alpha_warmup=opts.ema_alpha_warmup,
            warmup_samples=opts.warmup_samples,
        )
        self._stabilizer.reset()

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def total(self) -> float:
        """Total units of work."""
        with self._lock:
            return self._total

    @property
    def done(self) -> float:
        """Completed units of work, never more than total."""
        with self._lock:
            return self._done

    @property
    def percent_complete(self) -> float:
        """Completion percentage in [0, 100]."""
        with self._lock:
            return self._percent_locked()

    @property
    def sample_count(self) -> int:
        """Number of progress events recorded since construction or reset."""
        with self._lock:
            return self._sample_count

    @property
    def is_adapting(self) -> bool:
        """Whether a detected regime shift is still speeding up adaptation."""
        with self._lock:
            return self._regime_override > 0

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def reset(self, total: float) -> None:
        """
        Start over with a new total, keeping options and clock.

        Args:
            total: New total units of work, finite and positive.

        Raises:
            InvalidTotalError: If total is not finite and positive. No state
                is changed in that case.
        """
        total = _validate_total(total)
        with self._lock:
            logger.debug("Resetting estimator: total %s -> %s", self._total, total)
            self._init_state(total)

    def record_progress(self, units: float = 1.0) -> Snapshot:
        """
        Record that units of work were completed just now.

        Args:
            units: Units completed since the previous call. Non-positive or
                non-finite values are ignored.

        Returns:
            Snapshot taken after the update. If max_drop_per_tick is set,
            its remaining_seconds is rate-limited per call.
        """
        with self._lock:
            now = self._clock.monotonic()
            if not math.isfinite(units) or units <= 0.0:
                return self._snapshot_locked(now)

            self._update_locked(units, now)
            snapshot = self._snapshot_locked(now)
            max_drop = self.options.max_drop_per_tick
            if max_drop is not None:
                snapshot = self._clamp_tick_locked(snapshot, max_drop)
            return snapshot

    def _update_locked(self, units: float, now: float) -> None:
        """Feed one progress event to every predictor."""
        opts = self.options

        interval = now - self._last_event_time
        if interval <= 0.0:
            logger.debug("Non-positive interval %.3gs between progress events, clamping", interval)
            interval = MIN_INTERVAL_SECONDS
        self._last_event_time = now
        sec_per_unit = interval / units
        self._sample_count += 1

        shift = self._regime.is_shift(sec_per_unit)
        self._regime.push(sec_per_unit)
        if shift:
            logger.debug(
                "Pace regime shift: %.4gs/unit vs window mean %.4gs/unit",
                sec_per_unit,
                self._regime.window_mean,
            )
            self._regime_override = opts.regime_warmup_steps
        elif self._regime_override > 0:
            self._regime_override -= 1
        adapting = self._regime_override > 0

        base_mean = self._stats.mean if self._stats.count > 0 else sec_per_unit
        residual = sec_per_unit - base_mean
        # Weigh against the noise seen so far, then let this residual update it
        sigma = self._noise.sigma()
        if sigma is not None:
            sigma = max(sigma, NOISE_MIN_SIGMA_FRACTION * abs(base_mean))
        weight = huber_weight(residual, sigma, opts.outlier_cutoff)
        self._noise.push(residual)

        if self._stats.count == 0 or weight >= 1.0:
            for_mean = sec_per_unit
        else:
            for_mean = self._stats.mean + weight * (sec_per_unit - self._stats.mean)
        self._stats.push(for_mean)

        if adapting:
            drift_factor = opts.drift_factor * REGIME_DRIFT_MULTIPLIER
            noise_blend = max(opts.noise_blend, REGIME_NOISE_BLEND)
        else:
            drift_factor = opts.drift_factor
            noise_blend = opts.noise_blend
        pace = self._pace.value
        for_pace = sec_per_unit if pace is None else pace + weight * (sec_per_unit - pace)
        self._pace.update(for_pace, drift_factor, noise_blend)

        self._ema.update(sec_per_unit, weight=weight, fast=adapting)
        self._quantile.push(sec_per_unit)

        self._done = min(self._total, self._done + units)
        self._trend.update(1.0, self._done, now - self._start_time)

    def _clamp_tick_locked(self, snapshot: Snapshot, max_drop: float) -> Snapshot:
        """Limit how far the per-event remaining time may fall."""
        eta = snapshot.remaining_seconds
        if self._remaining_units() <= COMPLETION_TOLERANCE_UNITS:
            eta = 0.0
        elif not math.isinf(self._last_tick_eta):
            eta = max(0.0, min(self._last_tick_eta, max(eta, self._last_tick_eta - max_drop)))
        self._last_tick_eta = eta
        return dataclasses.replace(snapshot, remaining_seconds=eta)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def snapshot(self) -> Snapshot:
        """Return the current raw estimate and progress without changing state."""
        with self._lock:
            return self._snapshot_locked(self._clock.monotonic())

    def remaining_seconds(self) -> float:
        """Raw fused remaining time; +inf before any progress."""
        with self._lock:
            return self._raw_remaining_locked(self._clock.monotonic())

    def stabilized_remaining_seconds(self) -> float:
        """
        Remaining time smoothed for display.

        Unlike snapshot(), this advances the display stabilizer's own
        time-dependent state, so call it once per rendered frame.

        Returns:
            Whole seconds as a float, or +inf before any progress.
        """
        with self._lock:
            now = self._clock.monotonic()
            raw = self._raw_remaining_locked(now)
            complete = self._remaining_units() <= COMPLETION_TOLERANCE_UNITS
            return self._stabilizer.read(raw, now, complete=complete)

    def candidates(self) -> list[Candidate]:
        """The per-predictor (eta, variance) pairs a read would fuse right now."""
        with self._lock:
            left = self._remaining_units()
            if left <= COMPLETION_TOLERANCE_UNITS or self._sample_count == 0:
                return []
            return list(self._candidates_locked(left, self._clock.monotonic()))

    def _remaining_units(self) -> float:
        return max(0.0, self._total - self._done)

    def _percent_locked(self) -> float:
        return max(0.0, min(100.0, 100.0 * self._done / self._total))

    def _snapshot_locked(self, now: float) -> Snapshot:
        return Snapshot(
            remaining_seconds=self._raw_remaining_locked(now),
            percent_complete=self._percent_locked(),
            pace_ema=self._ema.value,
            pace_filtered=self._pace.value,
        )

    def _raw_remaining_locked(self, now: float) -> float:
        left = self._remaining_units()
        if left <= COMPLETION_TOLERANCE_UNITS:
            return 0.0
        if self._sample_count == 0:
            return math.inf

        accumulator = FusionAccumulator()
        for candidate in self._candidates_locked(left, now):
            accumulator.add(candidate)
        return accumulator.result()

    def _candidates_locked(self, left: float, now: float) -> Iterator[Candidate]:
        """Yield one candidate per predictor that currently has an opinion."""
        pace = self._pace.value
        pace_var = self._pace.variance
        if pace is not None and pace_var is not None and pace > 0.0:
            yield Candidate(
                left * pace,
                max(VARIANCE_FLOOR, left * left * max(VARIANCE_FLOOR, pace_var)),
            )

        residual_var = self._trend.residual_variance
        if residual_var is not None:
            elapsed = now - self._start_time
            eta = max(0.0, self._trend.predict(self._total) - elapsed)
            leverage = self._trend.leverage(1.0, self._total)
            yield Candidate(eta, max(VARIANCE_FLOOR, residual_var * max(VARIANCE_FLOOR, leverage)))

        variance = self._stats.variance
        if variance is not None and self._stats.mean > 0.0:
            yield Candidate(left * self._stats.mean, max(VARIANCE_FLOOR, variance * left))

        # Nominal variances are relative to the estimate
        ema_eta = left * self._ema.value
        ema_var = EMA_CANDIDATE_RELATIVE_VARIANCE * ema_eta * ema_eta
        yield Candidate(ema_eta, max(VARIANCE_FLOOR, ema_var))

        quantile = self._quantile.value
        if quantile is not None:
            quantile_eta = left * quantile
            quantile_var = QUANTILE_CANDIDATE_RELATIVE_VARIANCE * quantile_eta * quantile_eta
            yield Candidate(quantile_eta, max(VARIANCE_FLOOR, quantile_var))
