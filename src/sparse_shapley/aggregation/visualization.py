from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd


def plot_individuals(df: pd.DataFrame, out_dir: Path, title_prefix: str = "") -> list[Path]:
    """Bar chart of Shapley values, one figure per (scenario, game).

    Rows without a value (failed players) are left out.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    if "player" not in df.columns or "shapley" not in df.columns:
        return []

    written: list[Path] = []
    for (scenario_id, game_id), g in df.groupby(["scenario_id", "game_id"], sort=True):
        g = g.dropna(subset=["shapley"])
        if g.empty:
            continue
        plt.figure(figsize=(8, 4))
        plt.bar(g["player"].astype(str), g["shapley"].astype(float))
        plt.axhline(0.0, color="black", linewidth=0.5)
        plt.xlabel("player")
        plt.ylabel("Shapley value")
        plt.title(f"{title_prefix}scenario {scenario_id} / game {game_id}")
        plt.tight_layout()
        path = out_dir / f"shapley_{scenario_id}_{game_id}.png"
        plt.savefig(path)
        plt.close()
        written.append(path)
    return written
