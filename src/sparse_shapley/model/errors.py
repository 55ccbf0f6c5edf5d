from __future__ import annotations

from .coalition import Coalition


class ShapleyError(ValueError):
    """Base class for errors raised while computing Shapley values."""


class MissingCoalitionData(ShapleyError):
    """A coalition needed for a marginal contribution has no worth."""

    def __init__(self, coalition: Coalition, player: int) -> None:
        self.coalition = coalition
        self.player = player
        super().__init__(
            f"Missing worth for coalition {coalition}: needed for the marginal "
            f"contribution of player {player}."
        )


class InsufficientData(ShapleyError):
    """No supplied coalition lets the player's value be estimated."""

    def __init__(self, player: int) -> None:
        self.player = player
        super().__init__(f"No coalition data available for player {player}.")
