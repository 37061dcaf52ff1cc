"""
Player ledger: the bonus awards each player has accrued across the corpus.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Tuple

from .errors import UnknownPlayerError
from .game_data import GameRecord, PlayerIdentity


@dataclass(frozen=True)
class PointAward:
    """Bonus points earned in one game."""
    points: int
    game_reference: str  # Game URL, for auditing


class PlayerLedger:
    """
    Append-only mapping from player to their awards.

    Players are seeded first (seed / register), then awards are recorded.
    Recording for a player that was never seeded is an error.
    """

    def __init__(self):
        self._entries: Dict[PlayerIdentity, List[PointAward]] = {}

    def register(self, player: PlayerIdentity):
        """Add a player with no awards. Existing entries are left alone."""
        if player not in self._entries:
            self._entries[player] = []

    def seed(self, games: Iterable[GameRecord]):
        """Register both players of every game, in corpus order."""
        for game in games:
            self.register(game.white)
            self.register(game.black)

    def record(self, player: PlayerIdentity, award: PointAward):
        """
        Append an award for a seeded player.

        Raises:
            UnknownPlayerError: if the player was never seeded
        """
        if player not in self._entries:
            raise UnknownPlayerError(player)
        self._entries[player].append(award)

    def awards_for(self, player: PlayerIdentity) -> Tuple[PointAward, ...]:
        if player not in self._entries:
            raise UnknownPlayerError(player)
        return tuple(self._entries[player])

    def total(self, player: PlayerIdentity) -> int:
        return sum(award.points for award in self.awards_for(player))

    def items(self) -> Iterator[Tuple[PlayerIdentity, Tuple[PointAward, ...]]]:
        for player, awards in self._entries.items():
            yield player, tuple(awards)

    def __contains__(self, player) -> bool:
        return player in self._entries

    def __len__(self) -> int:
        return len(self._entries)
