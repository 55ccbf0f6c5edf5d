from __future__ import annotations

from typing import Iterable, List, Sequence

import pandas as pd

from ..utils.logging_utils import get_logger
from .coalition import Coalition
from .game import Game

logger = get_logger(__name__)


def build_games_from_table(
    df: pd.DataFrame,
    scenario_column: str = "scenario_id",
    game_column: str = "game_id",
    players_override: Sequence[int] | None = None,
) -> List[Game]:
    """Group a parsed worth table into one :class:`Game` per (scenario, game)."""
    games: list[Game] = []

    group_cols: list[str] = [scenario_column, game_column]
    for (scenario_id, game_id), g in df.groupby(group_cols, sort=True):
        values: dict[Coalition, float] = {}
        for coalition, value in zip(g["coalition"], g["value"]):
            if coalition in values:
                logger.warning(
                    "Game (%s, %s): duplicate row for coalition %s; keeping the last",
                    scenario_id,
                    game_id,
                    coalition,
                )
            values[coalition] = float(value)

        if players_override is not None:
            players = [int(p) for p in players_override]
        else:
            players = sorted(_infer_players_from_coalitions(values))

        games.append(
            Game(
                players=players,
                values=values,
                scenario_id=scenario_id,
                game_id=game_id,
            )
        )

    return games


def _infer_players_from_coalitions(coalitions: Iterable[Coalition]) -> set[int]:
    players: set[int] = set()
    for c in coalitions:
        players.update(c)
    return players
