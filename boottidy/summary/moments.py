"""Bias and standard error estimates for bootstrap replicates.

The estimator depends on two facts about the bootstrap result: whether an
original statistic vector was recorded and whether the replicates were drawn
under importance weights. The four combinations are modelled by
``MomentCase`` and resolved once per summary; each case owns its output
columns and formulas.

| case                | columns                              |
|---------------------|--------------------------------------|
| PLAIN               | estimate, std.error                  |
| WEIGHTED            | estimate, std.error                  |
| ORIGINAL            | statistic, bias, std.error           |
| ORIGINAL_WEIGHTED   | statistic, bias, std.error, estimate |

In ORIGINAL_WEIGHTED the bias and standard error come from the weighted
moments while ``estimate`` is the plain replicate mean, so both summaries are
visible side by side.
"""

import logging
from enum import Enum
from typing import Callable

import numpy as np

from boottidy.routines.base import WeightedMomentsRoutine
from boottidy.schemas import BootstrapResult
from boottidy.summary.select import ColumnSelection
from boottidy.utils.stats import column_means, column_sample_sd

logger = logging.getLogger(__name__)

Columns = dict[str, np.ndarray]


class MomentCase(Enum):
    """Input configuration selecting the moment estimator."""
    PLAIN = "plain"
    WEIGHTED = "weighted"
    ORIGINAL = "original"
    ORIGINAL_WEIGHTED = "original_weighted"

    @classmethod
    def select(cls, has_original: bool, weighted: bool) -> "MomentCase":
        if has_original:
            return cls.ORIGINAL_WEIGHTED if weighted else cls.ORIGINAL
        return cls.WEIGHTED if weighted else cls.PLAIN

    @property
    def columns(self) -> tuple[str, ...]:
        return CASE_COLUMNS[self]

    @property
    def needs_weighted_moments(self) -> bool:
        return self in (MomentCase.WEIGHTED, MomentCase.ORIGINAL_WEIGHTED)


CASE_COLUMNS: dict[MomentCase, tuple[str, ...]] = {
    MomentCase.PLAIN: ("estimate", "std.error"),
    MomentCase.WEIGHTED: ("estimate", "std.error"),
    MomentCase.ORIGINAL: ("statistic", "bias", "std.error"),
    MomentCase.ORIGINAL_WEIGHTED: ("statistic", "bias", "std.error", "estimate"),
}


def _weighted_moments(
    selection: ColumnSelection,
    result: BootstrapResult,
    moments_fn: WeightedMomentsRoutine | None,
) -> tuple[np.ndarray, np.ndarray]:
    """Call the weighted-moments routine once per retained statistic."""
    if moments_fn is None:
        raise ValueError("Weighted bootstrap results need a weighted-moments routine")
    estimates = np.empty(len(selection), dtype=float)
    variances = np.empty(len(selection), dtype=float)
    for pos, index in enumerate(selection.index):
        estimate, variance = moments_fn(result, int(index))
        estimates[pos] = estimate
        variances[pos] = variance
    return estimates, variances


def _sqrt(values: np.ndarray) -> np.ndarray:
    with np.errstate(invalid="ignore"):
        return np.sqrt(values)


def _plain(selection, result, moments_fn) -> Columns:
    return {
        "estimate": column_means(selection.replicates),
        "std.error": column_sample_sd(selection.replicates),
    }


def _weighted(selection, result, moments_fn) -> Columns:
    estimates, variances = _weighted_moments(selection, result, moments_fn)
    return {
        "estimate": estimates,
        "std.error": _sqrt(variances),
    }


def _original(selection, result, moments_fn) -> Columns:
    original = selection.original
    return {
        "statistic": original,
        "bias": column_means(selection.replicates) - original,
        "std.error": column_sample_sd(selection.replicates),
    }


def _original_weighted(selection, result, moments_fn) -> Columns:
    original = selection.original
    estimates, variances = _weighted_moments(selection, result, moments_fn)
    return {
        "statistic": original,
        "bias": estimates - original,
        "std.error": _sqrt(variances),
        "estimate": column_means(selection.replicates),
    }


_ESTIMATORS: dict[MomentCase, Callable[..., Columns]] = {
    MomentCase.PLAIN: _plain,
    MomentCase.WEIGHTED: _weighted,
    MomentCase.ORIGINAL: _original,
    MomentCase.ORIGINAL_WEIGHTED: _original_weighted,
}


def compute_moments(
    selection: ColumnSelection,
    result: BootstrapResult,
    moments_fn: WeightedMomentsRoutine | None = None,
) -> tuple[MomentCase, Columns]:
    """Compute the summary columns for the retained statistics.

    Args:
        selection: Output of ``select_columns``
        result: Unfiltered bootstrap result, passed through to ``moments_fn``
        moments_fn: Weighted-moments routine, required for weighted results

    Returns:
        (case, columns) where columns maps column name to one value per
        retained statistic, ordered as ``case.columns``
    """
    case = MomentCase.select(selection.has_original, selection.weighted)
    logger.debug("Moment case %s for statistics %s", case.value, selection.index.tolist())
    columns = _ESTIMATORS[case](selection, result, moments_fn)
    return case, {name: np.asarray(columns[name], dtype=float) for name in case.columns}
