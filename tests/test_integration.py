"""
Integration test suite for the aichess engine.

Tests components working together end-to-end:
- Full game simulations (engine vs engine for every algorithm)
- Terminal driver sessions (scripted human input, retry on bad input)
- Board printer and result strings
- TOML configuration feeding the engine
- Search logging
"""

import io
import logging

import chess
import pytest

from aichess.config import Algorithm, Config, MAX_VAL
from aichess.main import Engine
from interface.cli import GameLoop, build_parser, main, parse_move
from interface.printer import BOARD_HEADER, board_to_string, result_to_string


# ════════════════════════════════════════════════════════════════════════════
#  ENGINE VS ENGINE — FULL GAME SIMULATIONS
# ════════════════════════════════════════════════════════════════════════════


class TestSelfPlay:
    """The engine plays against itself without producing an illegal move."""

    @pytest.mark.parametrize("algorithm", ["minimax", "ab", "bestfirst", "bstar"])
    def test_self_play_from_start(self, algorithm):
        engine = Engine(depth=1, algorithm=algorithm)
        for _ in range(6):
            if engine.board.is_game_over():
                break
            move = engine.propose_move()
            assert move is not None
            assert move in engine.board.board.legal_moves
            engine.commit_move(move)
        assert len(engine.history) > 0

    def test_self_play_endgame_until_over_or_limit(self):
        engine = Engine(fen="4k3/8/8/3n4/4R3/8/8/4K3 w - - 0 1", depth=2, algorithm="ab")
        for _ in range(10):
            move = engine.propose_move()
            if move is None:
                assert engine.board.is_game_over()
                break
            engine.commit_move(move)
        assert engine.board.fen != "4k3/8/8/3n4/4R3/8/8/4K3 w - - 0 1"

    def test_all_algorithms_agree_on_mate(self):
        fen = "6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1"
        for algorithm in Algorithm:
            result = Engine(fen=fen, depth=2, algorithm=algorithm).analyse()
            assert result.best_move == chess.Move.from_uci("a1a8")
            assert result.score == MAX_VAL

    def test_repeated_searches_are_deterministic(self):
        engine = Engine(depth=2, algorithm="bestfirst")
        engine.commit_move(chess.Move.from_uci("e2e4"))
        first = engine.analyse()
        second = engine.analyse()
        assert (first.best_move, first.score) == (second.best_move, second.score)


# ════════════════════════════════════════════════════════════════════════════
#  TERMINAL DRIVER
# ════════════════════════════════════════════════════════════════════════════


class TestParseMove:
    def test_san(self):
        assert parse_move(chess.Board(), "Nf3") == chess.Move.from_uci("g1f3")

    def test_uci(self):
        assert parse_move(chess.Board(), "g1f3\n") == chess.Move.from_uci("g1f3")

    @pytest.mark.parametrize("text", ["", "   ", "zz", "e5", "e2e5", "Qh5", "--", "0000", "Z0", "@@@@"])
    def test_invalid(self, text):
        assert parse_move(chess.Board(), text) is None


class TestGameLoop:
    def test_two_humans_play_fools_mate(self):
        out = io.StringIO()
        engine = Engine(depth=1)
        outcome = GameLoop(engine, None, stdin=io.StringIO("f3\ne5\ng4\nQh4\n"), stdout=out).start()
        assert outcome.winner == chess.BLACK
        assert "Black wins by checkmate" in out.getvalue()
        assert len(engine.history) == 4

    def test_invalid_input_is_retried(self):
        out = io.StringIO()
        engine = Engine(depth=1)
        GameLoop(engine, None, stdin=io.StringIO("zz\ne4\n"), stdout=out).start()
        text = out.getvalue()
        assert text.count("Given invalid move") == 1
        assert engine.history == [chess.Move.from_uci("e2e4")]

    def test_pass_notation_is_not_a_move(self):
        out = io.StringIO()
        engine = Engine(depth=1)
        GameLoop(engine, None, stdin=io.StringIO("--\n0000\n"), stdout=out).start()
        assert out.getvalue().count("Given invalid move") == 2
        assert engine.history == []
        assert engine.board.fen == chess.STARTING_FEN

    def test_engine_replies_to_human(self):
        out = io.StringIO()
        engine = Engine(depth=1, algorithm="ab")
        outcome = GameLoop(engine, chess.BLACK, stdin=io.StringIO("e4\n"), stdout=out).start()
        assert outcome is None  # input closed
        assert "Engine made the move:" in out.getvalue()
        assert len(engine.history) == 2
        assert engine.board.turn == chess.WHITE

    def test_engine_delivers_mate(self):
        out = io.StringIO()
        engine = Engine(fen="6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1", depth=1)
        outcome = GameLoop(engine, chess.WHITE, stdin=io.StringIO(""), stdout=out).start()
        assert outcome.winner == chess.WHITE
        text = out.getvalue()
        assert "Engine made the move: Ra8#" in text
        assert text.rstrip().endswith("White wins by checkmate")

    def test_game_already_over(self):
        out = io.StringIO()
        engine = Engine(fen="5k2/5P2/5K2/8/8/8/8/8 b - - 0 1", depth=1)
        outcome = GameLoop(engine, chess.BLACK, stdin=io.StringIO(""), stdout=out).start()
        assert outcome.termination == chess.Termination.STALEMATE
        assert "The game is drawn by stalemate" in out.getvalue()


class TestCli:
    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        assert args.engine_color == "black"
        assert args.fen is None

    def test_main_scripted_session(self):
        out = io.StringIO()
        code = main(["--depth", "1", "--algorithm", "bstar", "--engine-color", "black"],
                    stdin=io.StringIO("d4\n"), stdout=out)
        assert code == 0
        text = out.getvalue()
        assert "Please enter your next move in algebraic notation" in text
        assert "Engine made the move:" in text

    def test_main_unknown_algorithm_still_plays(self):
        out = io.StringIO()
        main(["--depth", "1", "--algorithm", "xyz", "--engine-color", "white"],
             stdin=io.StringIO(""), stdout=out)
        assert "Engine made the move:" in out.getvalue()

    def test_main_rejects_bad_fen(self):
        with pytest.raises(SystemExit):
            main(["--fen", "not a fen"], stdin=io.StringIO(""), stdout=io.StringIO())

    def test_main_rejects_unknown_log_level(self):
        with pytest.raises(SystemExit):
            main(["--log-level", "loud"], stdin=io.StringIO(""), stdout=io.StringIO())

    def test_log_level_is_case_insensitive(self):
        assert build_parser().parse_args(["--log-level", "debug"]).log_level == "DEBUG"

    def test_main_rejects_negative_depth(self):
        with pytest.raises(SystemExit):
            main(["--depth", "-1"], stdin=io.StringIO(""), stdout=io.StringIO())


# ════════════════════════════════════════════════════════════════════════════
#  BOARD PRINTER
# ════════════════════════════════════════════════════════════════════════════


class TestPrinter:
    def test_white_perspective(self):
        lines = board_to_string(chess.Board(), chess.WHITE).split("\n")
        assert lines[0] == BOARD_HEADER
        assert lines[1] == ""
        assert lines[2] == "8   R* N* B* Q* K* B* N* R*"
        assert lines[3] == "7   P* P* P* P* P* P* P* P*"
        assert lines[5] == "5   _  _  _  _  _  _  _  _ "
        assert lines[9] == "1   R  N  B  Q  K  B  N  R "

    def test_black_perspective(self):
        lines = board_to_string(chess.Board(), chess.BLACK).split("\n")
        assert lines[0] == "    H  G  F  E  D  C  B  A    "
        assert lines[2] == "1   R  N  B  K  Q  B  N  R "
        assert lines[9] == "8   R* N* B* K* Q* B* N* R*"

    def test_ends_with_newline(self):
        assert board_to_string(chess.Board()).endswith("\n")

    def test_result_strings(self):
        assert result_to_string(chess.Outcome(chess.Termination.CHECKMATE, chess.WHITE)) == \
            "White wins by checkmate"
        assert result_to_string(chess.Outcome(chess.Termination.CHECKMATE, chess.BLACK)) == \
            "Black wins by checkmate"
        assert result_to_string(chess.Outcome(chess.Termination.STALEMATE, None)) == \
            "The game is drawn by stalemate"
        assert result_to_string(chess.Outcome(chess.Termination.INSUFFICIENT_MATERIAL, None)) == \
            "The game is drawn"
        assert result_to_string(None) == "The game is still in progress"


# ════════════════════════════════════════════════════════════════════════════
#  CONFIG + LOGGING
# ════════════════════════════════════════════════════════════════════════════


class TestConfigIntegration:
    def test_toml_config_drives_engine(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[search]\ndepth = 1\nalgorithm = "minimax"\n')
        cfg = Config.load_from_toml(str(path))
        engine = Engine.from_config(cfg.search, fen="6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
        result = engine.analyse()
        assert result.algorithm is Algorithm.MINIMAX
        assert result.depth == 1
        assert result.best_move == chess.Move.from_uci("a1a8")

    def test_search_is_logged(self, caplog):
        caplog.set_level(logging.INFO, logger="aichess.main")
        Engine(depth=1, algorithm="bf").propose_move()
        messages = [r.getMessage() for r in caplog.records if r.name == "aichess.main"]
        assert len(messages) == 1
        assert messages[0].startswith("info algorithm bestfirst depth 1")
        assert "bestmove" in messages[0]
