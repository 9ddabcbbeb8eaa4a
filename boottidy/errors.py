"""Exceptions raised while summarising bootstrap output"""

from typing import Iterable


class TidyError(ValueError):
    """Base class for structural errors in a bootstrap summary."""


class MissingDataError(TidyError):
    """Raise when the replicate matrix is absent or empty."""


class UnknownMethodError(TidyError):
    """Raise when a confidence interval method name matches no interval type."""

    def __init__(self, method: str, available: Iterable[str] = ()):
        self.method = method
        self.available = tuple(available)
        names = ", ".join(self.available) or "none"
        super().__init__(f"Unknown confidence interval method: {method!r} (available: {names})")


class CIComputationError(TidyError):
    """Raise when the interval routine fails for a statistic."""

    def __init__(self, index: int, message: str):
        self.index = index
        super().__init__(f"Confidence interval failed for t{index + 1}*: {message}")
