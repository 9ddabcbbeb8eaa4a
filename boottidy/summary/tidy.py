"""Tidy summaries of bootstrap results"""

import logging

import pandas as pd

from boottidy.config import TidyConfig, TidyOptions
from boottidy.registry import get_routines
from boottidy.routines.base import IntervalRoutine, WeightedMomentsRoutine
from boottidy.schemas import BootstrapResult
from boottidy.summary.confint import ConfMethod, attach_intervals, compute_intervals
from boottidy.summary.moments import compute_moments
from boottidy.summary.select import select_columns
from boottidy.summary.table import assemble_table

logger = logging.getLogger(__name__)


def tidy_bootstrap(
    result: BootstrapResult,
    conf_int: bool = False,
    conf_level: float = 0.95,
    conf_method: str | ConfMethod = "perc",
    *,
    moments_fn: WeightedMomentsRoutine | None = None,
    ci_fn: IntervalRoutine | None = None,
    max_workers: int = 1,
    show_progress: bool = False,
) -> pd.DataFrame:
    """Summarise a bootstrap result with one row per usable statistic.

    Statistics whose replicates are all missing are dropped; ``term`` keeps
    the original 1-based position (``t1*``, ``t3*``, ...). Columns follow the
    moment case (see ``boottidy.summary.moments``). Intervals, when requested,
    are computed for the same retained statistics as the table rows.

    Args:
        result: Finished bootstrap run
        conf_int: Append ``conf.low`` / ``conf.high``
        conf_level: Confidence level in (0, 1]
        conf_method: Interval type, see ``ConfMethod``
        moments_fn: Weighted-moments routine, required when ``result.weighted``
        ci_fn: Interval routine, required when ``conf_int``
        max_workers: Threads used for interval computation
        show_progress: Show a progress bar while computing intervals

    Raises:
        MissingDataError: no usable replicate matrix
        UnknownMethodError: ``conf_method`` matches no interval type
        CIComputationError: the interval routine failed for a statistic
    """
    if isinstance(conf_method, ConfMethod):
        conf_method = conf_method.value
    options = TidyOptions(conf_int=conf_int, conf_level=conf_level, conf_method=conf_method)
    method = None
    if options.conf_int:
        method = ConfMethod.parse(options.conf_method)
        if ci_fn is None:
            raise ValueError("conf_int=True needs an interval routine (ci_fn)")

    selection = select_columns(result)
    case, columns = compute_moments(selection, result, moments_fn)
    table = assemble_table(selection.index, columns)

    if method is not None:
        intervals = compute_intervals(
            selection.index,
            result,
            options.conf_level,
            method,
            ci_fn,
            max_workers=max_workers,
            show_progress=show_progress,
        )
        table = attach_intervals(table, intervals)

    logger.debug("Tidy summary (%s): %d row(s), columns %s", case.value, len(table), list(table.columns))
    return table


def tidy_from_config(
    result: BootstrapResult,
    config: TidyConfig,
    moments_fn: WeightedMomentsRoutine | None = None,
    ci_fn: IntervalRoutine | None = None,
) -> pd.DataFrame:
    """Summarise ``result`` with options and routines taken from ``config``.

    Routines passed explicitly take precedence over the configured backend.
    """
    if moments_fn is None or ci_fn is None:
        default_moments, default_ci = get_routines(config.routines.backend)
        moments_fn = moments_fn or default_moments
        ci_fn = ci_fn or default_ci

    return tidy_bootstrap(
        result,
        conf_int=config.tidy.conf_int,
        conf_level=config.tidy.conf_level,
        conf_method=config.tidy.conf_method,
        moments_fn=moments_fn,
        ci_fn=ci_fn,
        max_workers=config.execution.max_workers,
        show_progress=config.execution.show_progress,
    )
