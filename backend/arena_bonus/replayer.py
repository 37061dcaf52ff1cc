"""
Replays a game move-by-move and reports the material on the board after every ply.
"""
import chess
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import MalformedGame
from .game_data import GameRecord
from .rules import BonusRules, DEFAULT_RULES

STANDARD_START_FEN = chess.STARTING_FEN
STANDARD_VARIANTS = {"standard", "from position"}


class PlySnapshot:
    """Material on the board right after one ply."""

    __slots__ = ("ply", "mover", "white_material", "black_material")

    def __init__(self, ply: int, mover: chess.Color, white_material: int, black_material: int):
        self.ply = ply  # 1-based
        self.mover = mover  # Side that just moved
        self.white_material = white_material
        self.black_material = black_material

    def deficit_for(self, color: chess.Color) -> int:
        """How many points `color` is behind its opponent (negative when ahead)."""
        if color == chess.WHITE:
            return self.black_material - self.white_material
        return self.white_material - self.black_material

    def __eq__(self, other):
        if not isinstance(other, PlySnapshot):
            return NotImplemented
        return (self.ply, self.mover, self.white_material, self.black_material) == \
            (other.ply, other.mover, other.white_material, other.black_material)

    def __repr__(self):
        side = chess.COLOR_NAMES[self.mover]
        return (f"PlySnapshot(ply={self.ply}, mover={side}, "
                f"white={self.white_material}, black={self.black_material})")


def material_totals(board: chess.Board, rules: BonusRules = DEFAULT_RULES) -> Tuple[int, int]:
    """
    Count material for white and black by walking every square of the board.

    Recomputed from scratch each time so captures, promotions and en passant
    need no special handling.
    """
    white_material = 0
    black_material = 0

    for rank in range(8):
        for file in range(8):
            piece = board.piece_at(chess.square(file, rank))
            if piece is None:
                continue

            value = rules.piece_value(piece.symbol())
            if piece.color == chess.WHITE:
                white_material += value
            else:
                black_material += value

    return white_material, black_material


def parse_moves(moves: Iterable[str], game_reference: str = "game") -> List[chess.Move]:
    """
    Turn a SAN move list into legal moves from the standard starting position.

    Raises:
        MalformedGame: if any move is illegal, ambiguous or unreadable
    """
    board = chess.Board()
    parsed = []
    for ply, san in enumerate(moves, start=1):
        try:
            move = board.parse_san(san)
        except ValueError as e:
            raise MalformedGame(game_reference, str(e) or type(e).__name__, ply=ply, move=san) from e
        board.push(move)
        parsed.append(move)
    return parsed


def replay_material(moves: Iterable[str], game_reference: str = "game",
                    rules: BonusRules = DEFAULT_RULES,
                    start_fen: Optional[str] = None,
                    variant: Optional[str] = None) -> Iterator[PlySnapshot]:
    """
    Replay a game and yield a PlySnapshot after each ply.

    The whole move list is validated before anything is yielded, so a
    consumer that stops early still knows the game was legal.

    Args:
        moves: SAN moves in game order
        game_reference: Used in error messages
        rules: Piece values to count material with
        start_fen: FEN from the game's SetUp header, if any
        variant: The game's Variant header, if any

    Raises:
        MalformedGame: if the game is a variant, does not start from the
            standard position, or a move cannot be played
    """
    if variant and variant.strip().lower() not in STANDARD_VARIANTS:
        raise MalformedGame(game_reference, f"unsupported variant ({variant})")
    if start_fen and start_fen != STANDARD_START_FEN:
        raise MalformedGame(game_reference, f"game does not start from the standard position ({start_fen})")

    legal_moves = parse_moves(moves, game_reference)

    def _snapshots() -> Iterator[PlySnapshot]:
        board = chess.Board()
        for ply, move in enumerate(legal_moves, start=1):
            mover = board.turn
            board.push(move)
            white_material, black_material = material_totals(board, rules)
            yield PlySnapshot(ply, mover, white_material, black_material)

    return _snapshots()


def replay_game(game: GameRecord, rules: BonusRules = DEFAULT_RULES) -> Iterator[PlySnapshot]:
    """Replay a GameRecord. See replay_material."""
    return replay_material(game.moves, game.reference, rules,
                           game.metadata.start_fen, game.metadata.variant)
