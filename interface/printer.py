"""Plain-text board rendering for the terminal driver."""

from typing import Optional

import chess

EMPTY_SQUARE = " _ "
BLACK_MARKER = "*"
BOARD_HEADER = "    A  B  C  D  E  F  G  H    "

_PIECE_LETTERS = {
    chess.KING: " K",
    chess.QUEEN: " Q",
    chess.ROOK: " R",
    chess.BISHOP: " B",
    chess.KNIGHT: " N",
    chess.PAWN: " P",
}


def piece_to_string(piece: chess.Piece) -> str:
    marker = BLACK_MARKER if piece.color == chess.BLACK else " "
    return _PIECE_LETTERS[piece.piece_type] + marker


def board_to_string(board: chess.Board, perspective: chess.Color = chess.WHITE) -> str:
    """Rank 8 on top for White; rank 1 on top and files mirrored for Black."""
    if perspective == chess.WHITE:
        ranks = range(7, -1, -1)
        files = range(8)
        header = BOARD_HEADER
    else:
        ranks = range(8)
        files = range(7, -1, -1)
        header = BOARD_HEADER[::-1]

    lines = [header, ""]
    for rank in ranks:
        cells = []
        for file in files:
            piece = board.piece_at(chess.square(file, rank))
            cells.append(piece_to_string(piece) if piece else EMPTY_SQUARE)
        lines.append(f"{rank + 1}  " + "".join(cells))
    return "\n".join(lines) + "\n"


def result_to_string(outcome: Optional[chess.Outcome]) -> str:
    if outcome is None:
        return "The game is still in progress"
    if outcome.termination == chess.Termination.CHECKMATE:
        return "White wins by checkmate" if outcome.winner == chess.WHITE else "Black wins by checkmate"
    if outcome.termination == chess.Termination.STALEMATE:
        return "The game is drawn by stalemate"
    return "The game is drawn"
