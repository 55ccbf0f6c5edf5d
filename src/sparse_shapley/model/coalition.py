from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple


@dataclass(frozen=True, order=True, init=False)
class Coalition:
    """A set of players in canonical form.

    Members are kept as a sorted tuple of distinct ids, so two coalitions built
    from the same players in any order (with or without duplicates) compare and
    hash equal.
    """

    members: Tuple[int, ...] = ()

    def __init__(self, members: Iterable[int] = ()) -> None:
        canonical = tuple(sorted({int(p) for p in members}))
        if canonical and canonical[0] < 0:
            msg = f"Player ids must be non-negative, got {canonical[0]}."
            raise ValueError(msg)
        object.__setattr__(self, "members", canonical)

    def size(self) -> int:
        return len(self.members)

    def contains(self, player: int) -> bool:
        return player in self.members

    def subtract(self, player: int) -> "Coalition":
        if player not in self.members:
            return self
        return Coalition(p for p in self.members if p != player)

    def __len__(self) -> int:
        return len(self.members)

    def __contains__(self, player: object) -> bool:
        return player in self.members

    def __iter__(self) -> Iterator[int]:
        return iter(self.members)

    def __str__(self) -> str:
        return "{" + ",".join(str(p) for p in self.members) + "}"
