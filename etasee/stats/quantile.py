"""Streaming quantile estimation with the P² algorithm.

Jain & Chlamtac (1985), "The P² algorithm for dynamic calculation of
quantiles and histograms without storing observations". Five markers track
the minimum, the target quantile, the maximum and two midpoints; interior
markers move by piecewise-parabolic interpolation as samples arrive.
"""

from etasee.constants import P2_MARKER_COUNT


class P2Quantile:
    """
    O(1) time and memory estimator of a fixed quantile.

    Attributes:
        p: Target quantile in (0, 1).
        count: Number of samples seen.
    """

    def __init__(self, p: float) -> None:
        """
        Initialize the estimator.

        Args:
            p: Target quantile, e.g. 0.5 for the median.
        """
        if not 0.0 < p < 1.0:
            raise ValueError(f"Quantile must be in (0, 1), got {p}")
        self.p = p
        self.count = 0
        self._heights: list[float] = []
        # 1-based marker positions, as in the paper
        self._positions = [1, 2, 3, 4, 5]
        self._desired = [1.0, 1.0 + 2.0 * p, 1.0 + 4.0 * p, 3.0 + 2.0 * p, 5.0]
        self._increments = [0.0, p / 2.0, p, (1.0 + p) / 2.0, 1.0]

    @property
    def value(self) -> float | None:
        """Current quantile estimate, None before five samples."""
        if self.count < P2_MARKER_COUNT:
            return None
        return self._heights[2]

    def push(self, x: float) -> None:
        """Add one sample."""
        self.count += 1

        if self.count <= P2_MARKER_COUNT:
            self._heights.append(x)
            if self.count == P2_MARKER_COUNT:
                self._heights.sort()
            return

        q = self._heights
        n = self._positions

        # Find cell k such that q[k] <= x < q[k + 1], extending the extremes
        if x < q[0]:
            q[0] = x
            k = 0
        elif x >= q[4]:
            q[4] = x
            k = 3
        else:
            k = 0
            for i in range(1, 4):
                if x >= q[i]:
                    k = i

        for i in range(k + 1, P2_MARKER_COUNT):
            n[i] += 1
        for i in range(P2_MARKER_COUNT):
            self._desired[i] += self._increments[i]

        for i in range(1, 4):
            d = self._desired[i] - n[i]
            if (d >= 1.0 and n[i + 1] - n[i] > 1) or (d <= -1.0 and n[i - 1] - n[i] < -1):
                sign = 1 if d > 0 else -1
                candidate = self._parabolic(i, sign)
                if q[i - 1] < candidate < q[i + 1]:
                    q[i] = candidate
                else:
                    q[i] = self._linear(i, sign)
                n[i] += sign

    def _parabolic(self, i: int, d: int) -> float:
        """P² piecewise-parabolic prediction for marker i moved by d."""
        q = self._heights
        n = self._positions
        return q[i] + d / (n[i + 1] - n[i - 1]) * (
            (n[i] - n[i - 1] + d) * (q[i + 1] - q[i]) / (n[i + 1] - n[i])
            + (n[i + 1] - n[i] - d) * (q[i] - q[i - 1]) / (n[i] - n[i - 1])
        )

    def _linear(self, i: int, d: int) -> float:
        """Linear fallback prediction for marker i moved by d."""
        q = self._heights
        n = self._positions
        j = i + d
        return q[i] + d * (q[j] - q[i]) / (n[j] - n[i])
