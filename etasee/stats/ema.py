"""Exponentially smoothed pace with a warmup rate."""


class PaceEma:
    """
    Exponential moving average of seconds per unit.

    Seeded with a cold-start pace so it is always available. Uses a faster
    rate for the first ``warmup_samples`` updates, and whenever the caller
    asks for it (e.g. after a regime shift).
    """

    def __init__(
        self,
        seed: float,
        alpha: float,
        alpha_warmup: float,
        warmup_samples: int,
    ) -> None:
        self.value = seed
        self.alpha = alpha
        self.alpha_warmup = alpha_warmup
        self.warmup_samples = warmup_samples
        self.count = 0

    @property
    def warming_up(self) -> bool:
        """Whether the warmup rate is still in effect."""
        return self.count < self.warmup_samples

    def update(self, x: float, weight: float = 1.0, fast: bool = False) -> None:
        """
        Blend a new sample into the average.

        Args:
            x: Seconds per unit.
            weight: Robust weight in (0, 1] scaling the step toward x.
            fast: Force the warmup rate regardless of the sample count.
        """
        alpha = self.alpha_warmup if (fast or self.warming_up) else self.alpha
        self.value += alpha * weight * (x - self.value)
        self.count += 1
