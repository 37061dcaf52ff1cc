"""
Data models for tournament games and players.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

WHITE_WINS = "1-0"
BLACK_WINS = "0-1"
DRAW = "1/2-1/2"


@dataclass(frozen=True)
class PlayerIdentity:
    """A player as they appear in one game of the corpus."""
    name: str
    bonus_excluded: bool = False  # Appearance does not count towards the leaderboard

    @property
    def display_name(self) -> str:
        return self.name


@dataclass(frozen=True)
class GameMetadata:
    """Header information about a tournament game."""
    white: PlayerIdentity
    black: PlayerIdentity
    result: str  # "1-0", "0-1", "1/2-1/2"
    site: Optional[str] = None  # Game URL
    event: Optional[str] = None
    date: Optional[str] = None
    game_id: Optional[str] = None
    variant: Optional[str] = None  # Variant header, e.g. "Standard" or "Atomic"
    start_fen: Optional[str] = None  # Only set for games with a SetUp/FEN header


@dataclass(frozen=True)
class GameRecord:
    """A single game read from the input corpus. Never mutated."""
    metadata: GameMetadata
    moves: Tuple[str, ...]  # Moves in SAN notation
    pgn: str = ""  # Full PGN string
    index: int = 0  # Position in the corpus

    @property
    def reference(self) -> str:
        """Unique reference used to audit awards (normally the game URL)."""
        for value in (self.metadata.site, self.metadata.game_id):
            if value and value.strip() != "?":
                return value
        return f"game #{self.index + 1}"

    @property
    def white(self) -> PlayerIdentity:
        return self.metadata.white

    @property
    def black(self) -> PlayerIdentity:
        return self.metadata.black

    @property
    def result(self) -> str:
        return self.metadata.result
