from __future__ import annotations

from pathlib import Path

import pandas as pd

from ..model.coalition import Coalition


def write_table(
    df: pd.DataFrame, path: str | Path, fmt: str | None = None
) -> None:
    """Write ``df`` as CSV or Parquet; Coalition cells are written as ``{1,2}``."""
    p = Path(path)
    if fmt is None:
        fmt = p.suffix.lstrip(".").lower()
    if fmt not in {"csv", "parquet", "pq"}:
        msg = f"Unsupported output format: {fmt}"
        raise ValueError(msg)

    out = df.copy()
    for column in out.columns:
        if out[column].map(lambda x: isinstance(x, Coalition)).any():
            out[column] = out[column].map(str)

    p.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "csv":
        out.to_csv(p, index=False)
    else:
        out.to_parquet(p, index=False)
