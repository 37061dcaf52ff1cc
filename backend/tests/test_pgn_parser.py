"""
Tests for reading games out of PGN exports.
"""

import json
import os
import tempfile
import unittest
from dataclasses import replace

from arena_bonus.errors import CorpusMismatchError
from arena_bonus.game_data import PlayerIdentity
from arena_bonus.pgn_parser import (
    extract_moves,
    load_corpus,
    parse_pgn,
    parse_player,
    split_pgn_corpus,
    verify_game_count,
)
from tests.sample_games import (
    BLACK_DOWN_BISHOP,
    NO_DEFICIT,
    WHITE_DOWN_THEN_CASTLES,
    make_corpus,
    make_game,
    make_pgn,
)

LICHESS_PGN = """[Event "Out of Book Swiss Arena"]
[Site "https://lichess.org/7NuIBDmi"]
[Date "2023.01.15"]
[White "trizuliano"]
[Black "masnug_carlsen"]
[Result "0-1"]
[UTCDate "2023.01.15"]
[WhiteElo "1850"]
[BlackElo "2010"]
[Variant "Standard"]
[TimeControl "180+0"]

1. e4 { [%clk 0:03:00] } 1... d5 { [%clk 0:03:00] } 2. Bb5+ $2 (2. exd5 Qxd5 (2... Nf6)) 2... c6 3. h4 cxb5 ; resigns soon
4. Rh3 Bxh3 5. a3 0-1"""


class ExtractMovesTests(unittest.TestCase):

    def test_plain_movetext(self):
        self.assertEqual(extract_moves(NO_DEFICIT), ["e4", "e5", "Nf3", "Nc6", "Bb5", "a6", "Bxc6", "dxc6", "Nxe5"])

    def test_strips_comments_nags_and_nested_variations(self):
        self.assertEqual(
            extract_moves(LICHESS_PGN),
            ["e4", "d5", "Bb5+", "c6", "h4", "cxb5", "Rh3", "Bxh3", "a3"],
        )

    def test_castling_and_promotion(self):
        self.assertEqual(
            extract_moves("10. O-O O-O-O+ 11. exd8=Q+ Kxd8 12. a8=N#"),
            ["O-O", "O-O-O+", "exd8=Q+", "Kxd8", "a8=N#"],
        )

    def test_zero_castling_is_kept(self):
        self.assertEqual(extract_moves(WHITE_DOWN_THEN_CASTLES)[-1], "0-0")

    def test_unknown_tokens_are_kept_for_the_replayer(self):
        """Nothing is dropped just because it does not look like a move."""
        self.assertEqual(extract_moves("1. e4 e5 2. Nf3 zz9 Nc6 1-0"), ["e4", "e5", "Nf3", "zz9", "Nc6"])

    def test_attached_move_numbers_and_annotations(self):
        self.assertEqual(extract_moves("1.e4 e5!? 2.Nf3?! 2...Nc6 *"), ["e4", "e5", "Nf3", "Nc6"])


class ParsePlayerTests(unittest.TestCase):

    def test_plain_name(self):
        self.assertEqual(parse_player("greennight"), PlayerIdentity("greennight"))

    def test_marker_becomes_flag(self):
        self.assertEqual(parse_player("greennight INELIGIBLE"), PlayerIdentity("greennight", bonus_excluded=True))

    def test_custom_marker(self):
        self.assertEqual(parse_player("greennight NOBONUS", "NOBONUS"), PlayerIdentity("greennight", bonus_excluded=True))
        self.assertEqual(parse_player("greennight INELIGIBLE", "NOBONUS"), PlayerIdentity("greennight INELIGIBLE"))

    def test_marker_must_be_a_separate_word(self):
        self.assertEqual(parse_player("xINELIGIBLE"), PlayerIdentity("xINELIGIBLE"))


class ParsePgnTests(unittest.TestCase):

    def test_headers(self):
        game = parse_pgn(LICHESS_PGN, index=4)

        self.assertEqual(game.white, PlayerIdentity("trizuliano"))
        self.assertEqual(game.black, PlayerIdentity("masnug_carlsen"))
        self.assertEqual(game.result, "0-1")
        self.assertEqual(game.reference, "https://lichess.org/7NuIBDmi")
        self.assertEqual(game.metadata.event, "Out of Book Swiss Arena")
        self.assertIsNone(game.metadata.start_fen)
        self.assertEqual(game.index, 4)
        self.assertEqual(len(game.moves), 9)

    def test_reference_falls_back_to_position(self):
        game = parse_pgn('[White "a"]\n[Black "b"]\n[Result "1-0"]\n\n1. e4 1-0', index=2)
        self.assertEqual(game.reference, "game #3")

    def test_fen_header(self):
        pgn = '[White "a"]\n[Black "b"]\n[SetUp "1"]\n[FEN "8/8/8/8/8/8/8/K6k w - - 0 1"]\n\n1. Kb1 *'
        self.assertEqual(parse_pgn(pgn).metadata.start_fen, "8/8/8/8/8/8/8/K6k w - - 0 1")

    def test_variant_header(self):
        game = parse_pgn(make_pgn("1. e4 e5", variant="Atomic"))
        self.assertEqual(game.metadata.variant, "Atomic")

    def test_placeholder_site_falls_back_to_link(self):
        pgn = '[Site "?"]\n[Link "https://example.com/game/42"]\n[White "a"]\n[Black "b"]\n\n1. e4 *'
        self.assertEqual(parse_pgn(pgn).reference, "https://example.com/game/42")

    def test_placeholder_site_uses_position(self):
        games = [parse_pgn('[Site "?"]\n[White "a"]\n[Black "b"]\n\n1. e4 *', index=i) for i in range(2)]
        self.assertEqual([g.reference for g in games], ["game #1", "game #2"])

    def test_placeholder_site_on_record_falls_back_to_game_id(self):
        game = make_game("1. e4", site="?", index=4)
        self.assertEqual(game.reference, "game #5")

        game = replace(game, metadata=replace(game.metadata, game_id="7NuIBDmi"))
        self.assertEqual(game.reference, "7NuIBDmi")

    def test_game_without_moves_is_kept(self):
        game = parse_pgn('[White "a"]\n[Black "b"]\n[Result "1-0"]\n\n1-0')
        self.assertEqual(game.moves, ())


class CorpusTests(unittest.TestCase):

    def setUp(self):
        self.corpus = make_corpus(
            make_pgn(NO_DEFICIT, site="https://lichess.org/aaaa0001"),
            make_pgn(BLACK_DOWN_BISHOP, white="carol", black="dave INELIGIBLE",
                     result="1-0", site="https://lichess.org/aaaa0002"),
        )

    def test_split(self):
        chunks = split_pgn_corpus(self.corpus)
        self.assertEqual(len(chunks), 2)
        self.assertTrue(all(chunk.startswith("[Event") for chunk in chunks))

    def test_split_single_blank_line_and_crlf(self):
        corpus = (make_pgn(NO_DEFICIT) + "\n\n" + make_pgn(BLACK_DOWN_BISHOP)).replace("\n", "\r\n")
        self.assertEqual(len(split_pgn_corpus(corpus)), 2)

    def test_split_empty(self):
        self.assertEqual(split_pgn_corpus("\n\n"), [])

    def test_load_corpus_with_matching_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            pgn_path = os.path.join(tmp, "arena.pgn")
            json_path = os.path.join(tmp, "arena.pgn.json")
            with open(pgn_path, "w", encoding="utf-8") as f:
                f.write(self.corpus)
            with open(json_path, "w", encoding="utf-8") as f:
                json.dump([
                    {"headers": {"Site": "https://lichess.org/aaaa0001"}},
                    {"headers": {"Site": "https://lichess.org/aaaa0002"}},
                ], f)

            games = load_corpus(pgn_path, json_path)

        self.assertEqual([g.index for g in games], [0, 1])
        self.assertEqual(games[1].black, PlayerIdentity("dave", bonus_excluded=True))

    def test_load_corpus_count_mismatch(self):
        with tempfile.TemporaryDirectory() as tmp:
            pgn_path = os.path.join(tmp, "arena.pgn")
            json_path = os.path.join(tmp, "arena.pgn.json")
            with open(pgn_path, "w", encoding="utf-8") as f:
                f.write(self.corpus)
            with open(json_path, "w", encoding="utf-8") as f:
                json.dump([{"headers": {}}], f)

            with self.assertRaises(CorpusMismatchError) as ctx:
                load_corpus(pgn_path, json_path)

        self.assertEqual((ctx.exception.pgn_count, ctx.exception.json_count), (2, 1))

    def test_verify_game_count_accepts_loaded_list(self):
        games = [parse_pgn(chunk) for chunk in split_pgn_corpus(self.corpus)]
        verify_game_count(games, [{"headers": {}}, {"headers": {}}])
        with self.assertRaises(CorpusMismatchError):
            verify_game_count(games, [])


if __name__ == "__main__":
    unittest.main()
