from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import combinations
from typing import Mapping

from ..model.coalition import Coalition
from ..model.game import Game


@dataclass
class EfficiencyCheck:
    total: float
    expected: float
    gap: float
    satisfied: bool


def check_efficiency(
    game: Game,
    shapley: Mapping[int, float],
    tolerance: float = 1e-9,
) -> EfficiencyCheck | None:
    """Compare sum_i phi_i with v(N) - v(empty).

    Only meaningful for fully specified games; returns None otherwise.
    """
    if not game.is_fully_specified():
        return None
    grand = game.value(game.players)
    empty = game.values.get(Coalition(), 0.0)
    expected = (grand if grand is not None else 0.0) - empty
    total = math.fsum(shapley[p] for p in dict.fromkeys(game.players))
    gap = total - expected
    satisfied = math.isclose(total, expected, rel_tol=tolerance, abs_tol=tolerance)
    return EfficiencyCheck(total=total, expected=expected, gap=gap, satisfied=satisfied)


def interchangeable(game: Game, i: int, j: int) -> bool:
    """True if swapping ``i`` and ``j`` leaves every supplied worth unchanged."""
    for coalition, value in game.values.items():
        if (i in coalition) == (j in coalition):
            continue
        swapped = Coalition(
            j if p == i else i if p == j else p for p in coalition
        )
        other = game.values.get(swapped)
        if other is None or other != value:
            return False
    return True


def interchangeable_pairs(game: Game) -> list[tuple[int, int]]:
    players = sorted(set(game.players))
    return [(i, j) for i, j in combinations(players, 2) if interchangeable(game, i, j)]


def symmetry_violations(
    game: Game,
    shapley: Mapping[int, float],
    tolerance: float = 1e-9,
) -> list[tuple[int, int]]:
    """Pairs of interchangeable players whose values differ."""
    violations: list[tuple[int, int]] = []
    for i, j in interchangeable_pairs(game):
        if i not in shapley or j not in shapley:
            continue
        if not math.isclose(shapley[i], shapley[j], rel_tol=tolerance, abs_tol=tolerance):
            violations.append((i, j))
    return violations
