"""
Runs the whole bonus computation over a corpus of games.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from .adjudicator import adjudicate_game
from .analyzers.comeback_eligibility import EligibilityFlags, detect_eligibility
from .errors import MalformedGame
from .game_data import GameRecord
from .leaderboard import LeaderboardEntry, build_leaderboard
from .ledger import PlayerLedger
from .replayer import replay_game
from .rules import BonusRules, DEFAULT_RULES

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 100


@dataclass
class BonusRun:
    """Everything produced by one pass over the corpus."""
    ledger: PlayerLedger
    leaderboard: List[LeaderboardEntry]
    malformed: List[MalformedGame] = field(default_factory=list)
    games_processed: int = 0


def evaluate_game(game: GameRecord, rules: BonusRules = DEFAULT_RULES) -> EligibilityFlags:
    """Replay one game and detect comeback eligibility. Raises MalformedGame."""
    return detect_eligibility(replay_game(game, rules), rules, game)


def compute_bonuses(games: Sequence[GameRecord],
                    disqualified: Iterable[str] = (),
                    rules: BonusRules = DEFAULT_RULES) -> BonusRun:
    """
    Compute bonus awards for every game and rank the players.

    Games are processed one at a time in corpus order. A game that cannot be
    replayed is logged and reported in BonusRun.malformed; it contributes no
    awards but does not stop the run.

    Args:
        games: Game records in corpus order
        disqualified: Usernames of players removed for fair-play violations
        rules: Bonus policy

    Returns:
        BonusRun with the ledger, leaderboard and malformed games
    """
    games = list(games)
    disqualified_names = {name.lower() for name in disqualified}

    # Phase 1: every player who appears in the corpus gets an entry
    ledger = PlayerLedger()
    ledger.seed(games)

    # Phase 2: replay, detect and adjudicate each game
    malformed = []
    for i, game in enumerate(games):
        if (i + 1) % PROGRESS_EVERY == 0:
            print(f"Processed {i + 1}/{len(games)} games...")

        try:
            flags = evaluate_game(game, rules)
        except MalformedGame as e:
            logger.warning(f"Skipping game that cannot be replayed: {e}")
            malformed.append(e)
            continue

        black_disqualified = game.black.name.lower() in disqualified_names
        for player, award in adjudicate_game(game, flags, black_disqualified, rules):
            ledger.record(player, award)

    if malformed:
        logger.warning(f"{len(malformed)} of {len(games)} games could not be replayed and earned no bonus")

    return BonusRun(
        ledger=ledger,
        leaderboard=build_leaderboard(ledger),
        malformed=malformed,
        games_processed=len(games) - len(malformed),
    )
