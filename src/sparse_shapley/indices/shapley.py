from __future__ import annotations

import math
import sys
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Sequence

from ..model.coalition import Coalition
from ..model.errors import InsufficientData, MissingCoalitionData
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)

EMPTY = Coalition()

# Total weights at or below this are treated as "no data".
_ZERO_WEIGHT = sys.float_info.min


class ShapleyEngine:
    """Shapley values over a partially specified cooperative game.

    Only the coalitions present in ``coalition_worth`` are used. Each supplied
    coalition S containing player i contributes the marginal contribution
    v(S) - v(S \\ {i}) with the standard Shapley weight for |S \\ {i}|, and the
    result is normalised by the sum of the weights actually used:

        phi_i = sum_S w(|S|-1) (v(S) - v(S \\ {i})) / sum_S w(|S|-1),
        w(s) = (1/n) / C(n-1, s).

    For a fully specified game the denominator is 1 and this is the exact
    Shapley value.

    ``players`` must contain at least one player. Construction never fails;
    incomplete data is reported when a value is queried (or eagerly through
    :meth:`validate`).
    """

    def __init__(
        self,
        players: Sequence[int],
        coalition_worth: Mapping[Iterable[int], float],
    ) -> None:
        self._players: tuple[int, ...] = tuple(dict.fromkeys(int(p) for p in players))
        n = len(self._players)

        worth: dict[Coalition, float] = {}
        for key, value in coalition_worth.items():
            coalition = key if isinstance(key, Coalition) else Coalition(key)
            if coalition in worth:
                logger.warning(
                    "Duplicate worth for coalition %s; keeping the last value",
                    coalition,
                )
            worth[coalition] = float(value)
        # The empty coalition has no resources.
        worth.setdefault(EMPTY, 0.0)

        self._worth: Mapping[Coalition, float] = MappingProxyType(worth)
        self._order: tuple[Coalition, ...] = tuple(
            sorted(worth, key=lambda c: (c.size(), c.members))
        )
        self._weights: tuple[float, ...] = tuple(
            (1.0 / n) / math.comb(n - 1, s) for s in range(n)
        )

        logger.debug(
            "ShapleyEngine built with %d players and %d coalitions",
            n,
            len(worth),
        )

    @property
    def players(self) -> tuple[int, ...]:
        return self._players

    @property
    def n_players(self) -> int:
        return len(self._players)

    @property
    def coalition_worth(self) -> Mapping[Coalition, float]:
        return self._worth

    @property
    def weights(self) -> tuple[float, ...]:
        """Weight per coalition size s, for 0 <= s < n."""
        return self._weights

    def worth(self, coalition: Iterable[int]) -> Optional[float]:
        key = coalition if isinstance(coalition, Coalition) else Coalition(coalition)
        return self._worth.get(key)

    def shapley_value(self, player: int) -> float:
        """Return the Shapley value of ``player``.

        Raises:
            MissingCoalitionData: a coalition containing ``player`` is present
                but the same coalition without ``player`` is not.
            InsufficientData: no supplied coalition contains ``player``.
        """
        total_contribution = 0.0
        total_weight = 0.0

        for coalition in self._order:
            if not coalition.contains(player):
                continue
            with_player = self._worth[coalition]
            without = coalition.subtract(player)
            without_player = self._worth.get(without)
            if without_player is None:
                raise MissingCoalitionData(coalition=without, player=player)

            s = without.size()
            if s >= len(self._weights):
                logger.debug(
                    "Skipping coalition %s: larger than the %d declared players",
                    coalition,
                    len(self._players),
                )
                continue
            weight = self._weights[s]
            total_contribution += weight * (with_player - without_player)
            total_weight += weight

        logger.debug(
            "Player %s: contribution=%s weight=%s",
            player,
            total_contribution,
            total_weight,
        )
        if total_weight <= _ZERO_WEIGHT:
            raise InsufficientData(player=player)
        return total_contribution / total_weight

    def shapley_values(self) -> Dict[int, float]:
        return {p: self.shapley_value(p) for p in self._players}

    def missing_coalitions(self) -> list[Coalition]:
        """Coalitions S \\ {i} that are needed but absent, in canonical order."""
        missing: set[Coalition] = set()
        for coalition in self._order:
            for player in coalition:
                without = coalition.subtract(player)
                if without not in self._worth:
                    missing.add(without)
        return sorted(missing, key=lambda c: (c.size(), c.members))

    def validate(self) -> None:
        """Check up front that every declared player can be valued."""
        for coalition in self._order:
            for player in coalition:
                without = coalition.subtract(player)
                if without not in self._worth:
                    raise MissingCoalitionData(coalition=without, player=player)

        mentioned: set[int] = set()
        for coalition in self._order:
            mentioned.update(coalition)
        for player in self._players:
            if player not in mentioned:
                raise InsufficientData(player=player)
