"""
PGN parsing utilities - lightweight version.

Headers and moves are pulled out with regexes; move legality is left to the
replayer so a bad game is reported there instead of being dropped here.
"""
import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .errors import CorpusMismatchError
from .game_data import GameMetadata, GameRecord, PlayerIdentity
from .rules import DEFAULT_INELIGIBLE_MARKER

logger = logging.getLogger(__name__)

HEADER_RE = re.compile(r'\[(\w+)\s+"([^"]*)"\]')
MOVE_NUMBER_RE = re.compile(r'\b\d+\.+')
RESULT_TOKENS = {'1-0', '0-1', '1/2-1/2', '*'}
GAME_BOUNDARY_RE = re.compile(r'\n\s*\n(?=\[)')


def split_pgn_corpus(corpus: str) -> List[str]:
    """Split a multi-game PGN export into one string per game."""
    corpus = corpus.replace('\r\n', '\n').strip()
    if not corpus:
        return []
    return [chunk.strip() for chunk in GAME_BOUNDARY_RE.split(corpus) if chunk.strip()]


def parse_player(name: str, ineligible_marker: Optional[str] = DEFAULT_INELIGIBLE_MARKER) -> PlayerIdentity:
    """Build a PlayerIdentity, turning a trailing ' <marker>' into bonus_excluded."""
    name = name.strip()
    if ineligible_marker:
        suffix = f" {ineligible_marker}"
        if name.endswith(suffix):
            return PlayerIdentity(name[:-len(suffix)].strip(), bonus_excluded=True)
    return PlayerIdentity(name)


def extract_moves(pgn_string: str) -> List[str]:
    """
    Pull SAN moves out of a PGN's movetext.

    Move numbers, results, comments, NAGs and variations are removed; every
    other token is kept as a move, so anything unreadable reaches the
    replayer and is reported there.
    """
    move_text = re.sub(r'\[[^\]]*\]', '', pgn_string)  # Remove headers
    move_text = re.sub(r'\{[^}]*\}', '', move_text)    # Remove comments
    move_text = re.sub(r';[^\n]*', '', move_text)      # Remove rest-of-line comments
    move_text = re.sub(r'\$\d+', '', move_text)        # Remove NAGs

    # Remove variations, innermost first
    previous = None
    while previous != move_text:
        previous = move_text
        move_text = re.sub(r'\([^()]*\)', '', move_text)

    move_text = MOVE_NUMBER_RE.sub(' ', move_text)

    moves = []
    for token in move_text.split():
        if token in RESULT_TOKENS:
            continue
        token = token.rstrip('!?')  # Move annotations like "e4!?"
        if token:
            moves.append(token)
    return moves


def _known(value: Optional[str]) -> Optional[str]:
    """Header value, or None for an empty or "?" placeholder."""
    if value is None or value.strip() in ("", "?"):
        return None
    return value


def parse_pgn(pgn_string: str, index: int = 0,
              ineligible_marker: Optional[str] = DEFAULT_INELIGIBLE_MARKER) -> GameRecord:
    """
    Parse a single game's PGN into a GameRecord.

    Args:
        pgn_string: PGN for one game
        index: Position of the game in the corpus
        ineligible_marker: Name suffix marking a bonus-ineligible appearance
    """
    headers = {}
    for match in HEADER_RE.finditer(pgn_string):
        headers[match.group(1)] = match.group(2)

    start_fen = None
    if headers.get('SetUp') == '1' or 'FEN' in headers:
        start_fen = headers.get('FEN') or None

    metadata = GameMetadata(
        white=parse_player(headers.get('White', 'Unknown'), ineligible_marker),
        black=parse_player(headers.get('Black', 'Unknown'), ineligible_marker),
        result=headers.get('Result', '*'),
        site=_known(headers.get('Site')) or _known(headers.get('Link')),
        event=_known(headers.get('Event')),
        date=_known(headers.get('UTCDate')) or _known(headers.get('Date')),
        game_id=_known(headers.get('GameId')),
        variant=_known(headers.get('Variant')),
        start_fen=start_fen,
    )

    return GameRecord(
        metadata=metadata,
        moves=tuple(extract_moves(pgn_string)),
        pgn=pgn_string,
        index=index,
    )


def parse_pgns(pgn_strings: List[str],
               ineligible_marker: Optional[str] = DEFAULT_INELIGIBLE_MARKER) -> List[GameRecord]:
    """Parse multiple PGN strings. Every string yields a record, in order."""
    games = []
    for i, pgn in enumerate(pgn_strings):
        if (i + 1) % 500 == 0:
            print(f"Parsed {i + 1}/{len(pgn_strings)} games...")
        games.append(parse_pgn(pgn, index=i, ineligible_marker=ineligible_marker))
    return games


def load_games_json(source: Union[str, Path, List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """
    Load the structured (JSON) version of the corpus.

    Accepts a path to a JSON file holding an array of game objects
    (each with a "headers" mapping), or an already-loaded list.
    """
    if isinstance(source, list):
        return source
    with open(source, encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of games in {source}")
    return data


def verify_game_count(games: List[GameRecord], games_json: List[Dict[str, Any]]):
    """
    Cross-check the parsed corpus against its structured version.

    Raises:
        CorpusMismatchError: if the game counts differ
    """
    if len(games) != len(games_json):
        raise CorpusMismatchError(len(games), len(games_json))

    for game, game_json in zip(games, games_json):
        site = (game_json.get('headers') or {}).get('Site')
        if site and game.metadata.site and site != game.metadata.site:
            logger.warning(f"Game {game.index + 1}: PGN site {game.metadata.site} differs from JSON site {site}")


def load_corpus(pgn_path: Union[str, Path],
                json_path: Optional[Union[str, Path]] = None,
                ineligible_marker: Optional[str] = DEFAULT_INELIGIBLE_MARKER) -> List[GameRecord]:
    """
    Read a PGN export from disk and parse every game in it.

    If json_path is given the game count must match the JSON companion.

    Raises:
        CorpusMismatchError: if the counts differ
    """
    corpus = Path(pgn_path).read_text(encoding='utf-8')
    games = parse_pgns(split_pgn_corpus(corpus), ineligible_marker=ineligible_marker)

    if json_path is not None:
        verify_game_count(games, load_games_json(json_path))

    logger.info(f"Loaded {len(games)} games from {pgn_path}")
    return games
