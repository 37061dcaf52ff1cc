"""
Leaderboard of total bonus points per player.
"""
from dataclasses import dataclass
from typing import List, Tuple

from .game_data import PlayerIdentity
from .ledger import PlayerLedger, PointAward


@dataclass(frozen=True)
class LeaderboardEntry:
    player: PlayerIdentity
    total: int
    awards: Tuple[PointAward, ...] = ()

    @property
    def username(self) -> str:
        return self.player.display_name


def build_leaderboard(ledger: PlayerLedger) -> List[LeaderboardEntry]:
    """
    Sum each player's awards and rank by total, highest first.

    Appearances marked as bonus-excluded are left out. Ties keep the order
    in which players were first seen.
    """
    entries = []
    for player, awards in ledger.items():
        if player.bonus_excluded:
            continue
        entries.append(LeaderboardEntry(player=player, total=ledger.total(player), awards=awards))

    # sort() is stable
    entries.sort(key=lambda entry: entry.total, reverse=True)
    return entries


def format_leaderboard(entries: List[LeaderboardEntry], show_awards: bool = False) -> List[str]:
    """Render entries as '@username total' lines, optionally with each award below."""
    lines = []
    for entry in entries:
        lines.append(f"@{entry.username} {entry.total}")
        if show_awards:
            for award in entry.awards:
                lines.append(f"    +{award.points} {award.game_reference}")
    return lines
