from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from sparse_shapley.io.readers import read_worth_table
from sparse_shapley.io.validators import validate_worth_table
from sparse_shapley.io.writers import write_table
from sparse_shapley.model.coalition import Coalition
from sparse_shapley.model.transforms import build_games_from_table


def test_read_worth_table_csv(tmp_path: Path) -> None:
    csv_content = "scenario_id,game_id,coalition,value\n1,1,\"{1,2}\",3.0\n1,1,\"{}\",0.0\n"
    path = tmp_path / "game.csv"
    path.write_text(csv_content, encoding="utf-8")

    df = read_worth_table(path)
    assert len(df) == 2
    c = df.loc[0, "coalition"]
    assert isinstance(c, Coalition)
    assert c == Coalition([1, 2])
    assert df.loc[1, "coalition"] == Coalition()


def test_read_worth_table_custom_columns_and_missing_values(tmp_path: Path) -> None:
    path = tmp_path / "game.csv"
    path.write_text(
        "members,worth\n\"{1}\",2.5\n\"{2}\",\n",
        encoding="utf-8",
    )
    df = read_worth_table(path, coalition_column="members", value_column="worth")
    assert list(df["coalition"]) == [Coalition([1])]
    assert list(df["value"]) == [2.5]


def test_read_worth_table_errors(tmp_path: Path) -> None:
    path = tmp_path / "game.txt"
    path.write_text("coalition,value\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported format"):
        read_worth_table(path)

    csv = tmp_path / "game.csv"
    csv.write_text("coalition\n\"{1}\"\n", encoding="utf-8")
    with pytest.raises(ValueError, match="'value'"):
        read_worth_table(csv)


def test_validate_worth_table() -> None:
    df = pd.DataFrame({"coalition": [Coalition([1])], "value": [1.0]})
    with pytest.raises(ValueError, match="Missing required columns"):
        validate_worth_table(df)

    df["scenario_id"] = 0
    df["game_id"] = 0
    validate_worth_table(df)

    df["value"] = ["x"]
    with pytest.raises(ValueError, match="numeric"):
        validate_worth_table(df)


def test_build_games_from_table() -> None:
    df = pd.DataFrame(
        {
            "scenario_id": [0, 0, 0, 1],
            "game_id": [0, 0, 0, 0],
            "coalition": [Coalition([2]), Coalition([1]), Coalition([1, 2]), Coalition([5])],
            "value": [2.0, 1.0, 4.0, 7.0],
        }
    )
    games = build_games_from_table(df)
    assert len(games) == 2
    first, second = games
    assert first.players == [1, 2]
    assert first.value([2, 1]) == 4.0
    assert first.is_fully_specified()
    assert (second.scenario_id, second.game_id) == (1, 0)
    assert second.players == [5]

    overridden = build_games_from_table(df, players_override=[1, 2, 3])
    assert overridden[0].players == [1, 2, 3]


def test_write_table_stringifies_coalitions(tmp_path: Path) -> None:
    df = pd.DataFrame({"coalition": [Coalition([2, 1]), Coalition()], "size": [2, 0]})
    out = tmp_path / "nested" / "missing.csv"
    write_table(df, out)

    written = pd.read_csv(out)
    assert list(written["coalition"]) == ["{1,2}", "{}"]

    with pytest.raises(ValueError, match="Unsupported output format"):
        write_table(df, tmp_path / "out.xlsx")


def test_read_worth_table_multi_digit_ids_are_players(tmp_path: Path) -> None:
    path = tmp_path / "game.csv"
    path.write_text(
        "coalition,value\n\"{}\",0.0\n\"10\",5.0\n\"11\",6.0\n\"{10,11}\",12.0\n",
        encoding="utf-8",
    )
    df = read_worth_table(path)
    assert list(df["coalition"]) == [
        Coalition(),
        Coalition([10]),
        Coalition([11]),
        Coalition([10, 11]),
    ]


def test_read_worth_table_integer_column_names_single_players(tmp_path: Path) -> None:
    path = tmp_path / "game.csv"
    path.write_text("coalition,value\n1,10.0\n2,20.0\n", encoding="utf-8")
    df = read_worth_table(path)
    assert list(df["coalition"]) == [Coalition([1]), Coalition([2])]


def test_read_worth_table_parquet_integer_column(tmp_path: Path) -> None:
    pytest.importorskip("pyarrow")
    path = tmp_path / "game.parquet"
    pd.DataFrame({"coalition": [1, 2], "value": [10.0, 20.0]}).to_parquet(path)
    df = read_worth_table(path)
    assert list(df["coalition"]) == [Coalition([1]), Coalition([2])]
