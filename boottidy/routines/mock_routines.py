"""Mock routines for testing and offline development"""

import numpy as np
from scipy.stats import norm

from boottidy.schemas import BootstrapResult
from boottidy.summary.confint import ConfMethod


def _observed(result: BootstrapResult, index: int) -> tuple[np.ndarray, np.ndarray]:
    """Non-missing replicates of one statistic and their normalised weights."""
    column = result.replicates[:, index]
    weights = result.metadata.get("weights")
    if weights is None:
        weights = np.ones_like(column)
    else:
        weights = np.asarray(weights, dtype=float)
        if weights.shape != column.shape:
            raise ValueError(f"weights has shape {weights.shape}, expected {column.shape}")

    mask = ~np.isnan(column) & np.isfinite(weights)
    if mask.sum() < 2:
        raise ValueError(f"insufficient non-missing replicates for t{index + 1}*")
    w = weights[mask]
    if w.sum() <= 0:
        raise ValueError(f"weights for observed replicates of t{index + 1}* sum to zero")
    return column[mask], w / w.sum()


class MockWeightedMoments:
    """Deterministic weighted moments.

    Weights come from ``metadata["weights"]`` (one per replicate) and default
    to uniform.
    """

    def __call__(self, result: BootstrapResult, index: int) -> tuple[float, float]:
        values, w = _observed(result, index)
        mean = float(np.sum(w * values))
        variance = float(np.sum(w * (values - mean) ** 2))
        return mean, variance


class MockIntervals:
    """Deterministic quantile-based intervals shaped like real routine output.

    Normal intervals carry (level, low, high); all others carry
    (level, low_order, high_order, low, high).
    """

    def __call__(
        self,
        index: int,
        result: BootstrapResult,
        conf_level: float,
        method: str,
    ) -> dict[str, tuple[float, ...]]:
        method = ConfMethod.parse(method)
        values, _ = _observed(result, index)
        alpha = 1.0 - conf_level
        n = values.shape[0]
        lo_order, hi_order = (n + 1) * alpha / 2, (n + 1) * (1 - alpha / 2)
        low, high = np.quantile(values, [alpha / 2, 1 - alpha / 2])

        if method is ConfMethod.NORM:
            centre = float(np.mean(values))
            half = float(norm.ppf(1 - alpha / 2) * np.std(values, ddof=1)) if alpha > 0 else np.inf
            return {method.interval_name: (conf_level, centre - half, centre + half)}

        if method is ConfMethod.BASIC and result.original is not None:
            t0 = float(result.original[index])
            low, high = 2 * t0 - high, 2 * t0 - low

        return {method.interval_name: (conf_level, lo_order, hi_order, float(low), float(high))}
