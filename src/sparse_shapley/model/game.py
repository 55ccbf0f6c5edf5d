from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional

from .coalition import Coalition


@dataclass
class Game:
    """One worth table: the declared players and the supplied coalition worths."""

    players: list[int]
    values: Dict[Coalition, float] = field(default_factory=dict)
    scenario_id: Any = 0
    game_id: Any = 0

    def value(self, coalition: Iterable[int]) -> Optional[float]:
        return self.values.get(Coalition(coalition))

    def grand_coalition(self) -> Coalition:
        return Coalition(self.players)

    def is_fully_specified(self) -> bool:
        """True when every subset of the players (empty set aside) has a worth."""
        grand = set(self.players)
        known = {c for c in self.values if c and grand.issuperset(c)}
        return len(known) == 2 ** len(grand) - 1

    @classmethod
    def from_mapping(
        cls,
        players: Iterable[int],
        values: Mapping[Any, float],
        scenario_id: Any = 0,
        game_id: Any = 0,
    ) -> "Game":
        return cls(
            players=list(players),
            values={
                (c if isinstance(c, Coalition) else Coalition(c)): float(v)
                for c, v in values.items()
            },
            scenario_id=scenario_id,
            game_id=game_id,
        )
