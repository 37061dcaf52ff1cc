"""
Analyzer that decides which sides qualify for a material comeback bonus.

A side becomes eligible when it ends one of its own turns at least
`comeback_threshold` points of material behind. Once eligible it stays
eligible for the rest of the game.
"""
import chess
import logging
from typing import Iterable, NamedTuple, Optional

from ..game_data import GameRecord
from ..replayer import PlySnapshot
from ..rules import BonusRules, DEFAULT_RULES

logger = logging.getLogger(__name__)


class EligibilityFlags(NamedTuple):
    """Comeback eligibility of both sides for one game."""
    white: bool = False
    black: bool = False

    @property
    def both(self) -> bool:
        return self.white and self.black

    @property
    def any(self) -> bool:
        return self.white or self.black


class ComebackEligibilityAnalyzer:
    """
    Tracks comeback eligibility while a game is replayed.
    Call start_game(), then process_ply() for each ply, then finish_game().
    """

    def __init__(self, rules: BonusRules = DEFAULT_RULES):
        self.rules = rules
        self.game: Optional[GameRecord] = None
        self.white_eligible = False
        self.black_eligible = False
        self.eligible_since = {chess.WHITE: None, chess.BLACK: None}  # First qualifying ply

    def start_game(self, game: Optional[GameRecord] = None):
        """Reset state for a new game."""
        self.game = game
        self.white_eligible = False
        self.black_eligible = False
        self.eligible_since = {chess.WHITE: None, chess.BLACK: None}

    @property
    def settled(self) -> bool:
        """True once both sides are eligible; later plies cannot change anything."""
        return self.white_eligible and self.black_eligible

    def process_ply(self, snapshot: PlySnapshot):
        """Check the side that just moved. The opponent's deficit is never checked here."""
        if snapshot.deficit_for(snapshot.mover) < self.rules.comeback_threshold:
            return

        if snapshot.mover == chess.WHITE and not self.white_eligible:
            self.white_eligible = True
            self._mark_eligible(chess.WHITE, snapshot)
        elif snapshot.mover == chess.BLACK and not self.black_eligible:
            self.black_eligible = True
            self._mark_eligible(chess.BLACK, snapshot)

    def _mark_eligible(self, color: chess.Color, snapshot: PlySnapshot):
        self.eligible_since[color] = snapshot.ply
        reference = self.game.reference if self.game is not None else "game"
        logger.debug(f"{reference}: {chess.COLOR_NAMES[color]} eligible at ply {snapshot.ply} "
                     f"(down {snapshot.deficit_for(color)})")

    def finish_game(self) -> EligibilityFlags:
        """Return the final flags for the game."""
        return EligibilityFlags(white=self.white_eligible, black=self.black_eligible)


def detect_eligibility(snapshots: Iterable[PlySnapshot],
                       rules: BonusRules = DEFAULT_RULES,
                       game: Optional[GameRecord] = None) -> EligibilityFlags:
    """Consume replay snapshots for one game and return its eligibility flags."""
    analyzer = ComebackEligibilityAnalyzer(rules)
    analyzer.start_game(game)
    for snapshot in snapshots:
        analyzer.process_ply(snapshot)
        if analyzer.settled:
            break  # Both sides eligible - no need to look further
    return analyzer.finish_game()
