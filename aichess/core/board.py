"""Rules-engine adapter over python-chess plus the engine's tracked game state.

Positions are treated as values: ``apply`` and ``null_move`` always return a
fresh board, so the search never needs push/pop bookkeeping.
"""

from enum import Enum
from typing import List, Optional

import chess


class Status(Enum):
    ONGOING = "ongoing"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW = "draw"


def status(position: chess.Board) -> Status:
    """Terminal status of a position (repetition only counts within its own move stack)."""
    outcome = position.outcome()
    if outcome is None:
        return Status.ONGOING
    if outcome.termination == chess.Termination.CHECKMATE:
        return Status.CHECKMATE
    if outcome.termination == chess.Termination.STALEMATE:
        return Status.STALEMATE
    return Status.DRAW


def legal_moves(position: chess.Board) -> List[chess.Move]:
    return list(position.legal_moves)


def apply(position: chess.Board, move: chess.Move) -> chess.Board:
    child = position.copy(stack=False)
    child.push(move)
    return child


def null_move(position: chess.Board) -> Optional[chess.Board]:
    """Pass the turn. Unavailable while in check or once the game is over."""
    if position.is_check() or status(position) is not Status.ONGOING:
        return None
    return apply(position, chess.Move.null())


def side_to_move(position: chess.Board) -> chess.Color:
    return position.turn


def piece_at(position: chess.Board, square: chess.Square) -> Optional[chess.Piece]:
    return position.piece_at(square)


class ChessBoard:
    def __init__(self, fen: str = None):
        """Initialize from FEN or the standard starting position."""
        self.board = chess.Board(fen) if fen else chess.Board()
        self.move_history: List[chess.Move] = []

    @property
    def position(self) -> chess.Board:
        """A copy of the current position, safe to hand to the search."""
        return self.board.copy()

    @property
    def fen(self) -> str:
        return self.board.fen()

    def push(self, move: chess.Move):
        """Advance the game by one move. Legality is enforced by python-chess only."""
        self.board.push(move)
        self.move_history.append(move)

    def get_legal_moves(self) -> List[chess.Move]:
        return legal_moves(self.board)

    def is_game_over(self) -> bool:
        return self.board.is_game_over()

    def outcome(self) -> Optional[chess.Outcome]:
        return self.board.outcome()

    @property
    def turn(self) -> chess.Color:
        return self.board.turn
