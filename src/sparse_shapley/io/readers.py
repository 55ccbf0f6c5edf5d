from __future__ import annotations

import numbers
from pathlib import Path
from typing import Any

import pandas as pd

from ..model.coalition import Coalition
from ..utils.coalition_encoding import normalize_coalition
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


def read_worth_table(
    path: str | Path,
    fmt: str | None = None,
    coalition_column: str = "coalition",
    value_column: str = "value",
) -> pd.DataFrame:
    """Read a coalition-worth table and parse its coalition column.

    The result always has ``coalition`` (Coalition objects) and ``value``
    (float) columns; rows without a value are dropped.
    """
    p = Path(path)
    if fmt is None:
        fmt = p.suffix.lstrip(".").lower()

    if fmt == "csv":
        # keep coalition cells as text so "1" stays player 1, not bitmask 1
        df = pd.read_csv(p, dtype={coalition_column: str})
    elif fmt in {"parquet", "pq"}:
        df = pd.read_parquet(p)
    else:
        msg = f"Unsupported format: {fmt}"
        raise ValueError(msg)

    for column in (coalition_column, value_column):
        if column not in df.columns:
            msg = f"Input table must contain '{column}' column."
            raise ValueError(msg)

    df = df.rename(columns={coalition_column: "coalition", value_column: "value"})
    df["coalition"] = df["coalition"].map(_normalize_coalition_cell)

    missing = df["value"].isna()
    if missing.any():
        logger.warning("Dropping %d rows without a value from %s", int(missing.sum()), p)
        df = df.loc[~missing].reset_index(drop=True)
    return df


def _normalize_coalition_cell(value: Any) -> Coalition:
    """Integer cells (e.g. an int64 Parquet column) name a single player."""
    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        return Coalition([int(value)])
    return normalize_coalition(value)
