"""Statistical utilities"""

import warnings

import numpy as np


def column_counts(data: np.ndarray) -> np.ndarray:
    """Number of non-missing entries per column."""
    return np.sum(~np.isnan(data), axis=0)


def column_means(data: np.ndarray) -> np.ndarray:
    """Per-column mean of the non-missing entries.

    Columns without any observed value give NaN.
    """
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", category=RuntimeWarning)
        return np.nanmean(data, axis=0)


def column_sample_sd(data: np.ndarray) -> np.ndarray:
    """Per-column sample standard deviation (n - 1 denominator), NaN-aware.

    Each column uses only its own non-missing entries. Fewer than two
    observations leave the variance undefined, which comes back as NaN.
    """
    counts = column_counts(data)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", category=RuntimeWarning)
        var = np.nanvar(data, axis=0, ddof=1)
    return np.sqrt(np.where(counts > 1, var, np.nan))
