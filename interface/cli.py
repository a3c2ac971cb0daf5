"""Terminal game loop: a human plays against the engine (or another human)."""

import argparse
import logging
import sys
from typing import Optional, TextIO

import chess

from aichess.config import CONFIG
from aichess.main import Engine
from interface.printer import board_to_string, result_to_string

_log = logging.getLogger(__name__)

_COLORS = {"white": chess.WHITE, "black": chess.BLACK, "none": None}


def parse_move(board: chess.Board, text: str) -> Optional[chess.Move]:
    """SAN first (e.g. 'Nf3'), then UCI (e.g. 'g1f3'). None when neither is legal."""
    text = text.strip()
    if not text:
        return None
    try:
        move = board.parse_san(text)
    except ValueError:
        pass
    else:
        # parse_san turns "--" and "0000" into a null move
        return move if move and move in board.legal_moves else None
    try:
        move = chess.Move.from_uci(text)
    except ValueError:
        return None
    return move if move and move in board.legal_moves else None


class GameLoop:
    def __init__(self, engine: Engine, engine_color: Optional[chess.Color] = chess.BLACK,
                 stdin: TextIO = None, stdout: TextIO = None):
        self.engine = engine
        self.engine_color = engine_color
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def _write(self, text: str):
        self.stdout.write(text)
        self.stdout.flush()

    def start(self) -> Optional[chess.Outcome]:
        board = self.engine.board
        while not board.is_game_over():
            to_move = board.turn
            self._write(board_to_string(board.board, to_move))

            if self.engine_color == to_move:
                move = self.engine.propose_move()
                if move is None:
                    break
                san = board.board.san(move)
                self.engine.commit_move(move)
                self._write(f"Engine made the move: {san}\n")
                continue

            self._write("Please enter your next move in algebraic notation\n")
            line = self.stdin.readline()
            if not line:
                _log.info("Input closed, leaving the game unfinished")
                return None
            move = parse_move(board.board, line)
            if move is None:
                self._write("Given invalid move\n")
                continue
            self.engine.commit_move(move)

        self._write(board_to_string(board.board, board.turn))
        outcome = board.outcome()
        self._write(result_to_string(outcome) + "\n")
        return outcome


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="aichess", description="Play chess against a fixed-depth search engine.")
    parser.add_argument("--fen", default=None, help="starting position (default: standard initial position)")
    parser.add_argument("--depth", type=int, default=CONFIG.search.depth, help="search depth in plies")
    parser.add_argument("--algorithm", default=CONFIG.search.algorithm.value,
                        help="minimax, ab, bestfirst or bstar (unknown names use ab)")
    parser.add_argument("--engine-color", choices=sorted(_COLORS), default="black")
    parser.add_argument("--log-level", default=CONFIG.log_level.upper(), type=str.upper,
                        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"])
    return parser


def main(argv=None, stdin: TextIO = None, stdout: TextIO = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level)

    try:
        engine = Engine(fen=args.fen, depth=args.depth, algorithm=args.algorithm)
    except ValueError as e:
        parser.error(str(e))

    GameLoop(engine, _COLORS[args.engine_color], stdin=stdin, stdout=stdout).start()
    return 0


if __name__ == "__main__":
    sys.exit(main())
