"""
Exceptions raised while computing bonus points.
"""
from typing import Optional


class BonusError(Exception):
    """Base class for bonus computation errors."""


class MalformedGame(BonusError):
    """A game's move list cannot be replayed as legal chess."""

    def __init__(self, game_reference: str, reason: str,
                 ply: Optional[int] = None, move: Optional[str] = None):
        self.game_reference = game_reference
        self.reason = reason
        self.ply = ply
        self.move = move
        if ply is not None:
            message = f"{game_reference}: ply {ply} ({move}): {reason}"
        else:
            message = f"{game_reference}: {reason}"
        super().__init__(message)


class UnknownPlayerError(BonusError, KeyError):
    """An award was computed for a player that was never seeded into the ledger."""

    def __init__(self, player):
        self.player = player
        super().__init__(f"Player not in ledger: {player.name!r}")

    def __str__(self):
        return self.args[0]


class CorpusMismatchError(BonusError):
    """The PGN corpus and its structured companion disagree on the number of games."""

    def __init__(self, pgn_count: int, json_count: int):
        self.pgn_count = pgn_count
        self.json_count = json_count
        super().__init__(
            f"PGN corpus has {pgn_count} games but the JSON companion has {json_count}"
        )
