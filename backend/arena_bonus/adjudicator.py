"""
Turns a game's comeback eligibility and result into bonus point awards.
"""
import logging
from typing import List, Tuple

from .analyzers.comeback_eligibility import EligibilityFlags
from .game_data import BLACK_WINS, DRAW, WHITE_WINS, GameRecord, PlayerIdentity
from .ledger import PointAward
from .rules import BonusRules, DEFAULT_RULES

logger = logging.getLogger(__name__)


def _standard_award(eligible: bool, result: str, winning_result: str, rules: BonusRules) -> int:
    """Points for one side under the standard rule: draw = 1, win = 3, loss = 0."""
    if not eligible:
        return 0
    if result == DRAW:
        return rules.draw_bonus
    if result == winning_result:
        return rules.win_bonus
    return 0


def adjudicate_game(game: GameRecord, flags: EligibilityFlags,
                    black_disqualified: bool = False,
                    rules: BonusRules = DEFAULT_RULES) -> List[Tuple[PlayerIdentity, PointAward]]:
    """
    Decide the bonus awards for one game.

    Each side is judged on its own, so a game can pay out zero, one or two
    awards. When Black is the disqualified player the recorded result is
    ignored: an eligible White gets the disqualified-opponent bonus, and so
    does an eligible Black.

    Args:
        game: The game being adjudicated
        flags: Comeback eligibility for both sides
        black_disqualified: Whether Black was removed from the event for cheating
        rules: Award sizes

    Returns:
        List of (player, award) pairs, White first
    """
    result = game.result
    reference = game.reference
    awards = []

    if black_disqualified:
        white_points = rules.disqualified_opponent_bonus if flags.white else 0
        black_points = rules.disqualified_opponent_bonus if flags.black else 0
    else:
        white_points = _standard_award(flags.white, result, WHITE_WINS, rules)
        black_points = _standard_award(flags.black, result, BLACK_WINS, rules)

    if white_points:
        awards.append((game.white, PointAward(white_points, reference)))
    if black_points:
        awards.append((game.black, PointAward(black_points, reference)))

    if flags.any and not awards:
        logger.debug(f"{reference}: eligible side(s) lost ({result}), no bonus")

    return awards
