"""Interfaces for the delegated bootstrap routines"""

from typing import Mapping, Protocol, Sequence

from boottidy.schemas import BootstrapResult


class WeightedMomentsRoutine(Protocol):
    """Protocol for importance-weighted moment estimators."""

    def __call__(self, result: BootstrapResult, index: int) -> tuple[float, float]:
        """Estimate weighted moments for one statistic.

        Args:
            result: Bootstrap result the replicates belong to
            index: 0-based statistic index in the unfiltered matrix

        Returns:
            (weighted_estimate, weighted_variance)
        """
        ...


class IntervalRoutine(Protocol):
    """Protocol for confidence interval calculators."""

    def __call__(
        self,
        index: int,
        result: BootstrapResult,
        conf_level: float,
        method: str,
    ) -> Mapping[str, Sequence[float]]:
        """Compute intervals for one statistic.

        Args:
            index: 0-based statistic index in the unfiltered matrix
            result: Bootstrap result the replicates belong to
            conf_level: Confidence level in (0, 1]
            method: Short method name, e.g. "perc"

        Returns:
            Mapping of interval name (e.g. "percent") to a numeric sequence
            whose last two entries are the lower and upper bounds
        """
        ...
