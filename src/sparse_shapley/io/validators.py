from __future__ import annotations

import pandas as pd
from pandas.api.types import is_numeric_dtype


def validate_worth_table(df: pd.DataFrame) -> None:
    """Check the columns a worth table needs before engines are built."""
    required = {"scenario_id", "game_id", "coalition", "value"}
    missing = required - set(df.columns)
    if missing:
        msg = f"Missing required columns: {sorted(missing)}"
        raise ValueError(msg)
    if not is_numeric_dtype(df["value"]):
        msg = "Column 'value' must be numeric."
        raise ValueError(msg)
