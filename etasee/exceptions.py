"""Application-specific exceptions for etasee.

Exception Hierarchy:
    EtaseeError (base)
    ├── EstimatorError
    │   └── InvalidTotalError
    └── ConfigurationError
"""


class EtaseeError(Exception):
    """Base exception for all etasee errors.

    All application-specific exceptions inherit from this class,
    allowing callers to catch all etasee errors with a single handler.
    """


class EstimatorError(EtaseeError):
    """Base exception for estimator-related errors."""


class InvalidTotalError(EstimatorError, ValueError):
    """Raised when an estimator is created or reset with a bad total.

    The total must be a finite, strictly positive number of work units.
    Also a ValueError, so callers validating plain arguments can catch it
    without importing etasee.

    Attributes:
        total: The rejected total.
        message: Human-readable error description.
    """

    def __init__(self, total: float, message: str | None = None) -> None:
        self.total = total
        self.message = message or f"Total units must be finite and positive, got {total!r}"
        super().__init__(self.message)


class ConfigurationError(EtaseeError):
    """Raised when there is a configuration error.

    Attributes:
        parameter: The configuration parameter that is invalid.
        message: Human-readable error description.
    """

    def __init__(self, parameter: str, message: str | None = None) -> None:
        self.parameter = parameter
        self.message = message or f"Invalid configuration for '{parameter}'"
        super().__init__(self.message)
