#!/usr/bin/env python3
"""
Print the material comeback bonus leaderboard for an arena tournament.

Usage:
  python report_bonuses.py oobs_10_prepped.pgn --json oobs_10_prepped.pgn.json --disqualified masnug_carlsen
  python report_bonuses.py --tournament s85bimdN --disqualified masnug_carlsen
"""

import argparse
import logging
import sys

from arena_bonus.errors import CorpusMismatchError
from arena_bonus.leaderboard import format_leaderboard
from arena_bonus.lichess_client import LichessClient
from arena_bonus.pgn_parser import load_corpus, parse_pgns
from arena_bonus.pipeline import compute_bonuses
from arena_bonus.rules import DEFAULT_INELIGIBLE_MARKER


def load_games(args):
    """Read games from a PGN file or download them from Lichess."""
    if args.tournament:
        pgn_strings = LichessClient().fetch_tournament_games(args.tournament)
        if pgn_strings is None:
            print(f"Could not fetch games for tournament {args.tournament}", file=sys.stderr)
            sys.exit(1)
        return parse_pgns(pgn_strings, ineligible_marker=args.ineligible_marker)

    return load_corpus(args.pgn, json_path=args.json, ineligible_marker=args.ineligible_marker)


def report_bonuses(args) -> int:
    try:
        games = load_games(args)
    except CorpusMismatchError as e:
        print(f"Corpus mismatch: {e}", file=sys.stderr)
        return 1

    print(f"Loaded {len(games)} games")
    run = compute_bonuses(games, disqualified=args.disqualified)

    for line in format_leaderboard(run.leaderboard, show_awards=args.show_awards):
        print(line)

    if run.malformed:
        print(f"\n{len(run.malformed)} games could not be replayed and earned no bonus:")
        for error in run.malformed:
            print(f"  {error}")

    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="Rank players by material comeback bonus points")
    parser.add_argument("pgn", nargs="?",
                        help="PGN export with all tournament games")
    parser.add_argument("--json",
                        help="JSON version of the same export, used to cross-check the game count")
    parser.add_argument("--tournament",
                        help="Lichess arena id to download instead of reading a PGN file")
    parser.add_argument("--disqualified", action="append", default=[],
                        help="Username disqualified for fair-play violations (repeatable)")
    parser.add_argument("--ineligible-marker", default=DEFAULT_INELIGIBLE_MARKER,
                        help=f"Name suffix marking an appearance as bonus-ineligible (default: {DEFAULT_INELIGIBLE_MARKER})")
    parser.add_argument("--show-awards", action="store_true",
                        help="List each award under its player")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Debug logging")
    args = parser.parse_args(argv)

    if not args.pgn and not args.tournament:
        parser.error("either a PGN file or --tournament is required")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return report_bonuses(args)


if __name__ == "__main__":
    sys.exit(main())
