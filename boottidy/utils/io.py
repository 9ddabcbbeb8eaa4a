"""I/O utilities"""

import json
from pathlib import Path
from typing import Any

import pandas as pd

from boottidy.schemas import BootstrapResult


def read_json(path: str | Path) -> dict[str, Any]:
    """Read JSON file."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path: str | Path, obj: dict[str, Any]) -> None:
    """Write JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)


def load_bootstrap_result(path: str | Path) -> BootstrapResult:
    """Load a bootstrap result stored as JSON.

    Expected keys: ``replicates`` (list of rows, null for missing) and
    optionally ``original``, ``weighted`` and ``metadata``.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Bootstrap result not found: {path}")
    return BootstrapResult(**read_json(path))


def write_summary_csv(path: str | Path, table: pd.DataFrame) -> Path:
    """Write a tidy summary table to CSV."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    table.to_csv(path, index=False)
    return path
