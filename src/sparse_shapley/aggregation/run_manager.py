from __future__ import annotations

import math
from pathlib import Path
from typing import Any

import pandas as pd

from ..config_loader import load_config, section
from ..indices.shapley import ShapleyEngine
from ..io.readers import read_worth_table
from ..io.validators import validate_worth_table
from ..io.writers import write_table
from ..model.errors import ShapleyError
from ..model.game import Game
from ..model.transforms import build_games_from_table
from ..utils.logging_utils import configure_logging, get_logger
from .axioms import check_efficiency, interchangeable_pairs
from .visualization import plot_individuals

logger = get_logger(__name__)


def run_from_config(config_path: Path, output_dir: Path | None = None) -> Path:
    """Compute Shapley values for every game in the configured worth table.

    ``output_dir`` overrides ``output.path``. Returns the output directory.
    """
    cfg = load_config(config_path)
    input_cfg = section(cfg, "input")
    engine_cfg = section(cfg, "engine")
    output_cfg = section(cfg, "output")
    axioms_cfg = section(cfg, "axioms")
    logging_cfg = section(cfg, "logging")

    log_config = logging_cfg.get("config")
    configure_logging(
        Path(log_config) if log_config else None,
        level=str(logging_cfg.get("level", "INFO")),
    )

    df = read_worth_table(
        input_cfg["path"],
        fmt=input_cfg.get("format"),
        coalition_column=input_cfg.get("coalition_column", "coalition"),
        value_column=input_cfg.get("value_column", "value"),
    )

    # Fill missing scenario/game columns with defaults if absent
    scenario_col = input_cfg.get("scenario_column", "scenario_id")
    game_col = input_cfg.get("game_column", "game_id")
    df = df.rename(columns={scenario_col: "scenario_id", game_col: "game_id"})
    if "scenario_id" not in df.columns:
        df["scenario_id"] = 0
    if "game_id" not in df.columns:
        df["game_id"] = 0

    validate_worth_table(df)

    games = build_games_from_table(df, players_override=input_cfg.get("players"))

    rows: list[dict[str, Any]] = []
    missing_rows: list[dict[str, Any]] = []
    efficiency_rows: list[dict[str, Any]] = []
    symmetry_rows: list[dict[str, Any]] = []
    eager = bool(engine_cfg.get("validate", False))

    for game in games:
        engine = ShapleyEngine(game.players, game.values)

        if eager:
            for coalition in engine.missing_coalitions():
                missing_rows.append(
                    {
                        "scenario_id": game.scenario_id,
                        "game_id": game.game_id,
                        "coalition": coalition,
                        "size": coalition.size(),
                    }
                )
            try:
                engine.validate()
            except ShapleyError as exc:
                logger.warning(
                    "Game (%s, %s) failed validation: %s",
                    game.scenario_id,
                    game.game_id,
                    exc,
                )

        shapley = _compute_game(game, engine, rows)

        complete = len(shapley) == engine.n_players
        if axioms_cfg.get("efficiency", True) and not complete:
            logger.info(
                "Game (%s, %s): efficiency check skipped, %d of %d players valued",
                game.scenario_id,
                game.game_id,
                len(shapley),
                engine.n_players,
            )
        if axioms_cfg.get("efficiency", True) and complete:
            check = check_efficiency(game, shapley)
            if check is not None:
                if not check.satisfied:
                    logger.warning(
                        "Game (%s, %s): efficiency gap %.3e",
                        game.scenario_id,
                        game.game_id,
                        check.gap,
                    )
                efficiency_rows.append(
                    {
                        "scenario_id": game.scenario_id,
                        "game_id": game.game_id,
                        "sum_shapley": check.total,
                        "grand_minus_empty": check.expected,
                        "gap": check.gap,
                        "satisfied": check.satisfied,
                    }
                )

        if axioms_cfg.get("symmetry", True):
            symmetry_rows.extend(_symmetry_rows(game, shapley))

        logger.info(
            "Processed game (%s, %s) with %d players and %d coalitions",
            game.scenario_id,
            game.game_id,
            engine.n_players,
            len(engine.coalition_worth),
        )

    base_dir = _output_dir(
        Path(input_cfg["path"]),
        output_dir if output_dir is not None else output_cfg.get("path"),
    )
    fmt = str(output_cfg.get("format", "csv"))

    result_df = pd.DataFrame(
        rows, columns=["scenario_id", "game_id", "player", "shapley", "error"]
    )
    if result_df.empty:
        logger.warning("No player-level results produced.")
    else:
        metrics_path = base_dir / f"individuals.{fmt}"
        write_table(result_df, metrics_path, fmt=fmt)
        logger.info("Wrote metrics table to %s", metrics_path)

    if missing_rows:
        missing_path = base_dir / f"missing_coalitions.{fmt}"
        write_table(pd.DataFrame(missing_rows), missing_path, fmt=fmt)
        logger.info("Wrote %d missing coalitions to %s", len(missing_rows), missing_path)

    if efficiency_rows:
        efficiency_path = base_dir / "axioms_efficiency.csv"
        write_table(pd.DataFrame(efficiency_rows), efficiency_path, fmt="csv")
        logger.info("Wrote %s", efficiency_path)

    if symmetry_rows:
        symmetry_path = base_dir / "axioms_symmetry.csv"
        write_table(pd.DataFrame(symmetry_rows), symmetry_path, fmt="csv")
        logger.info("Wrote %s", symmetry_path)

    viz_cfg = section(cfg, "visualization")
    if viz_cfg.get("enabled", True) and not result_df.empty:
        try:
            plot_individuals(result_df, base_dir / "figures")
        except Exception as exc:  # noqa: BLE001
            logger.warning("Visualization failed: %s", exc)

    return base_dir


def _compute_game(
    game: Game,
    engine: ShapleyEngine,
    rows: list[dict[str, Any]],
) -> dict[int, float]:
    shapley: dict[int, float] = {}
    for player in engine.players:
        row: dict[str, Any] = {
            "scenario_id": game.scenario_id,
            "game_id": game.game_id,
            "player": player,
            "shapley": None,
            "error": None,
        }
        try:
            value = engine.shapley_value(player)
        except ShapleyError as exc:
            logger.warning(
                "Game (%s, %s), player %s: %s",
                game.scenario_id,
                game.game_id,
                player,
                exc,
            )
            row["error"] = type(exc).__name__
        else:
            shapley[player] = value
            row["shapley"] = value
        rows.append(row)
    return shapley


def _output_dir(src_path: Path, raw_out_path: Any) -> Path:
    if raw_out_path is None:
        # Default: outputs/<input_parent>/<input_stem>/
        try:
            rel = src_path.relative_to(Path.cwd())
        except ValueError:
            rel = src_path
        base_dir = Path("outputs") / rel.parent / src_path.stem
    else:
        base_dir = Path(str(raw_out_path))
    base_dir.mkdir(parents=True, exist_ok=True)
    return base_dir


def _symmetry_rows(game: Game, shapley: dict[int, float]) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for i, j in interchangeable_pairs(game):
        if i not in shapley or j not in shapley:
            continue
        satisfied = math.isclose(shapley[i], shapley[j], rel_tol=1e-9, abs_tol=1e-9)
        if not satisfied:
            logger.warning(
                "Game (%s, %s): interchangeable players %s and %s differ (%s vs %s)",
                game.scenario_id,
                game.game_id,
                i,
                j,
                shapley[i],
                shapley[j],
            )
        rows.append(
            {
                "scenario_id": game.scenario_id,
                "game_id": game.game_id,
                "player_i": i,
                "player_j": j,
                "shapley_i": shapley[i],
                "shapley_j": shapley[j],
                "satisfied": satisfied,
            }
        )
    return rows
