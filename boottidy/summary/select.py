"""Input extraction and replicate column selection"""

import logging

import numpy as np
from pydantic import BaseModel, ConfigDict

from boottidy.errors import MissingDataError
from boottidy.schemas import BootstrapResult

logger = logging.getLogger(__name__)


class ColumnSelection(BaseModel):
    """Replicate columns that carry at least one observed value.

    ``index`` holds the 0-based positions of the kept columns in the
    unfiltered matrix and drives term labelling downstream.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    replicates: np.ndarray
    index: np.ndarray
    original: np.ndarray | None
    weighted: bool

    @property
    def has_original(self) -> bool:
        return self.original is not None

    def __len__(self) -> int:
        return int(self.index.shape[0])


def retained_columns(replicates: np.ndarray) -> np.ndarray:
    """Return indices of columns that are not entirely missing."""
    all_missing = np.all(np.isnan(replicates), axis=0)
    return np.flatnonzero(~all_missing)


def select_columns(result: BootstrapResult) -> ColumnSelection:
    """Validate a bootstrap result and restrict it to usable statistics.

    Raises:
        MissingDataError: replicate matrix is absent or has no rows or columns.
    """
    replicates = result.replicates
    if replicates is None:
        raise MissingDataError("Bootstrap result has no replicate matrix")
    if replicates.shape[1] == 0:
        raise MissingDataError("Replicate matrix has zero columns")
    if replicates.shape[0] == 0:
        raise MissingDataError("Replicate matrix has zero rows")

    index = retained_columns(replicates)
    dropped = sorted(set(range(replicates.shape[1])) - set(index.tolist()))
    if dropped:
        logger.info(
            "Dropping %d all-missing statistic(s): %s",
            len(dropped),
            ", ".join(f"t{i + 1}*" for i in dropped),
        )

    original = result.original[index] if result.original is not None else None
    return ColumnSelection(
        replicates=replicates[:, index],
        index=index,
        original=original,
        weighted=result.weighted,
    )
