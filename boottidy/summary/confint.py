"""Confidence interval columns for the tidy table.

Interval computation itself is delegated to an ``IntervalRoutine``. This
module resolves the requested method, calls the routine once per retained
statistic, picks the matching interval out of the routine's output and
appends ``conf.low`` / ``conf.high``.

Method names resolve in two steps:

1. The requested name is matched case-insensitively against the short names
   (``norm``, ``basic``, ``stud``, ``perc``, ``bca``), the long interval
   names (``normal``, ``basic``, ``student``, ``percent``, ``bca``) and a
   few aliases. Otherwise it must be a prefix of exactly one method's short
   or long name.
2. In the routine output the interval is found by its long name, then its
   short name, then as the only key starting with the short name.

Anything unresolved raises ``UnknownMethodError``.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from enum import Enum
from typing import Iterable, Mapping, Sequence

import numpy as np
import pandas as pd
from tqdm import tqdm

from boottidy.errors import CIComputationError, TidyError, UnknownMethodError
from boottidy.routines.base import IntervalRoutine
from boottidy.schemas import BootstrapResult, IntervalEstimate

logger = logging.getLogger(__name__)


class ConfMethod(str, Enum):
    """Confidence interval types."""
    NORM = "norm"
    BASIC = "basic"
    STUD = "stud"
    PERC = "perc"
    BCA = "bca"

    @property
    def interval_name(self) -> str:
        """Name the interval is stored under in routine output."""
        return _INTERVAL_NAMES[self]

    @classmethod
    def parse(cls, name: "str | ConfMethod") -> "ConfMethod":
        """Resolve a method name, alias or unambiguous prefix."""
        if isinstance(name, ConfMethod):
            return name
        key = str(name).strip().lower()
        for method in cls:
            if key in (method.value, method.interval_name):
                return method
        if key in _ALIASES:
            return _ALIASES[key]
        candidates = [
            method for method in cls
            if key and (method.value.startswith(key) or method.interval_name.startswith(key))
        ]
        if len(candidates) != 1:
            raise UnknownMethodError(str(name), [m.value for m in cls])
        return candidates[0]


_INTERVAL_NAMES: dict[ConfMethod, str] = {
    ConfMethod.NORM: "normal",
    ConfMethod.BASIC: "basic",
    ConfMethod.STUD: "student",
    ConfMethod.PERC: "percent",
    ConfMethod.BCA: "bca",
}

_ALIASES: dict[str, ConfMethod] = {
    "percentile": ConfMethod.PERC,
    "studentized": ConfMethod.STUD,
    "bootstrap-t": ConfMethod.STUD,
}


def select_interval(computed: Mapping[str, Sequence[float]], method: ConfMethod) -> Sequence[float]:
    """Pick the interval for ``method`` out of a routine's output."""
    for key in (method.interval_name, method.value):
        if key in computed:
            return computed[key]
    matches = [key for key in computed if str(key).startswith(method.value)]
    if len(matches) != 1:
        raise UnknownMethodError(method.value, [str(key) for key in computed])
    return computed[matches[0]]


def interval_bounds(index: int, values: Sequence[float]) -> tuple[float, float]:
    """Last two numeric components of an interval, as (low, high)."""
    try:
        arr = np.asarray(values, dtype=float).ravel()
    except (TypeError, ValueError) as exc:
        raise CIComputationError(index, f"non-numeric interval {values!r}") from exc
    if arr.shape[0] < 2:
        raise CIComputationError(index, f"interval has {arr.shape[0]} component(s), need 2")
    low, high = float(arr[-2]), float(arr[-1])
    if low > high:
        raise CIComputationError(index, f"lower bound {low} exceeds upper bound {high}")
    return low, high


def compute_interval(
    index: int,
    result: BootstrapResult,
    conf_level: float,
    method: ConfMethod,
    ci_fn: IntervalRoutine,
) -> IntervalEstimate:
    """Run the interval routine for one statistic and extract its bounds."""
    try:
        computed = ci_fn(index, result, conf_level, method.value)
    except TidyError:
        raise
    except Exception as exc:
        raise CIComputationError(index, str(exc)) from exc
    if not isinstance(computed, Mapping):
        raise CIComputationError(index, f"routine returned {type(computed).__name__}, expected a mapping")

    low, high = interval_bounds(index, select_interval(computed, method))
    return IntervalEstimate(
        index=index, method=method.value, conf_level=conf_level, low=low, high=high
    )


def compute_intervals(
    index: Iterable[int],
    result: BootstrapResult,
    conf_level: float,
    method: "str | ConfMethod",
    ci_fn: IntervalRoutine,
    max_workers: int = 1,
    show_progress: bool = False,
) -> list[IntervalEstimate]:
    """Compute intervals for each statistic in ``index``, in the same order.

    Statistics are independent, so with ``max_workers > 1`` they run on a
    thread pool. The first failure aborts the whole computation.
    """
    method = ConfMethod.parse(method)
    indices = [int(i) for i in index]
    intervals: list[IntervalEstimate | None] = [None] * len(indices)
    logger.debug(
        "Computing %s intervals at level %s for %d statistic(s)",
        method.value, conf_level, len(indices),
    )

    with tqdm(total=len(indices), desc="Intervals", disable=not show_progress) as pbar:
        if max_workers <= 1 or len(indices) <= 1:
            for pos, i in enumerate(indices):
                intervals[pos] = compute_interval(i, result, conf_level, method, ci_fn)
                pbar.update(1)
        else:
            with ThreadPoolExecutor(max_workers=min(max_workers, len(indices))) as executor:
                future_to_pos = {
                    executor.submit(compute_interval, i, result, conf_level, method, ci_fn): pos
                    for pos, i in enumerate(indices)
                }
                try:
                    for future in as_completed(future_to_pos):
                        intervals[future_to_pos[future]] = future.result()
                        pbar.update(1)
                except TidyError:
                    for future in future_to_pos:
                        future.cancel()
                    raise

    return intervals


def attach_intervals(table: pd.DataFrame, intervals: Sequence[IntervalEstimate]) -> pd.DataFrame:
    """Append ``conf.low`` and ``conf.high`` aligned by row position."""
    if len(intervals) != len(table):
        raise ValueError(f"Got {len(intervals)} intervals for {len(table)} rows")
    table = table.copy()
    table["conf.low"] = np.array([ci.low for ci in intervals], dtype=float)
    table["conf.high"] = np.array([ci.high for ci in intervals], dtype=float)
    return table
