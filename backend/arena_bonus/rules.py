"""
Fixed bonus policy for the tournament.

Piece values follow the tournament rules:
    pawn - 1, knight / bishop - 3, rook - 5, queen - 9
The king carries no material value.
"""
from dataclasses import dataclass, field
from typing import Dict

PIECE_VALUES = {'q': 9, 'r': 5, 'b': 3, 'n': 3, 'p': 1}

COMEBACK_THRESHOLD = 3
DRAW_BONUS = 1
WIN_BONUS = 3
DISQUALIFIED_OPPONENT_BONUS = 3

DEFAULT_INELIGIBLE_MARKER = "INELIGIBLE"


@dataclass(frozen=True)
class BonusRules:
    """How material comebacks are detected and paid out."""

    comeback_threshold: int = COMEBACK_THRESHOLD  # Deficit needed, inclusive
    draw_bonus: int = DRAW_BONUS
    win_bonus: int = WIN_BONUS
    disqualified_opponent_bonus: int = DISQUALIFIED_OPPONENT_BONUS
    piece_values: Dict[str, int] = field(default_factory=lambda: dict(PIECE_VALUES))

    def piece_value(self, symbol: str) -> int:
        """Value of a piece given its symbol ('Q', 'p', ...). Kings are worth 0."""
        return self.piece_values.get(symbol.lower(), 0)


DEFAULT_RULES = BonusRules()
