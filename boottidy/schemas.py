"""Pydantic schemas for bootstrap inputs and interval outputs"""

from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class BootstrapResult(BaseModel):
    """Output of a finished bootstrap run.

    ``replicates`` holds one row per replicate and one column per statistic,
    with NaN marking a missing value. Lists are accepted and ``None`` entries
    become NaN. A 1-D input is read as a single statistic.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    replicates: np.ndarray | None = Field(None, description="n_replicates x n_statistics matrix")
    original: np.ndarray | None = Field(None, description="Statistic computed on the un-resampled data")
    weighted: bool = Field(default=False, description="Replicates come from importance-weighted resampling")
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("replicates", mode="before")
    @classmethod
    def _coerce_replicates(cls, value: Any) -> np.ndarray | None:
        if value is None:
            return None
        arr = np.array(value, dtype=float)
        if arr.ndim == 1:
            arr = arr.reshape(-1, 1)
        if arr.ndim != 2:
            raise ValueError(f"replicates must be 2-D, got {arr.ndim} dimensions")
        arr.setflags(write=False)
        return arr

    @field_validator("original", mode="before")
    @classmethod
    def _coerce_original(cls, value: Any) -> np.ndarray | None:
        if value is None:
            return None
        arr = np.array(value, dtype=float).ravel()
        arr.setflags(write=False)
        return arr

    @model_validator(mode="after")
    def _check_lengths(self) -> "BootstrapResult":
        if self.replicates is not None and self.original is not None:
            if self.original.shape[0] != self.replicates.shape[1]:
                raise ValueError(
                    f"original has {self.original.shape[0]} values but replicates "
                    f"has {self.replicates.shape[1]} columns"
                )
        return self

    @property
    def n_statistics(self) -> int:
        """Number of statistic columns in the replicate matrix."""
        if self.replicates is None:
            return 0
        return int(self.replicates.shape[1])


class IntervalEstimate(BaseModel):
    """Confidence interval bounds for one statistic."""
    index: int = Field(..., ge=0, description="0-based statistic index")
    method: str
    conf_level: float = Field(..., gt=0.0, le=1.0)
    low: float
    high: float
