"""Tidy table assembly"""

from typing import Iterable, Mapping

import numpy as np
import pandas as pd


def term_label(index: int) -> str:
    """Label for a 0-based statistic index, e.g. 0 -> "t1*"."""
    return f"t{index + 1}*"


def assemble_table(index: Iterable[int], columns: Mapping[str, np.ndarray]) -> pd.DataFrame:
    """Build one row per retained statistic.

    Args:
        index: 0-based statistic indices in the unfiltered matrix, in row order
        columns: Column name -> values aligned with ``index``

    Returns:
        DataFrame with a leading ``term`` column followed by ``columns``
    """
    terms = [term_label(int(i)) for i in index]
    data: dict[str, list | np.ndarray] = {"term": terms}
    for name, values in columns.items():
        values = np.asarray(values, dtype=float)
        if values.shape != (len(terms),):
            raise ValueError(
                f"Column {name!r} has shape {values.shape}, expected ({len(terms)},)"
            )
        data[name] = values
    return pd.DataFrame(data)
