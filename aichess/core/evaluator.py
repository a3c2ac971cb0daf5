import chess

from aichess.config import MAX_VAL, MIN_VAL, PIECE_WEIGHTS
from aichess.core.board import Status, piece_at, side_to_move, status


class Evaluator:
    """
    Static material evaluator.

    Any replacement must keep the same contract: ``evaluate(board)`` is a pure
    function returning an int in [MIN_VAL, MAX_VAL], where the bounds are only
    produced for checkmate.

    Sign convention: material on a White square counts negative, on a Black
    square positive. Checkmate is MIN_VAL when White is the side mated and
    MAX_VAL when Black is.
    """

    def __init__(self, piece_weights=PIECE_WEIGHTS):
        self.piece_weights = piece_weights

    def evaluate(self, board: chess.Board) -> int:
        state = status(board)
        if state is Status.CHECKMATE:
            return MIN_VAL if side_to_move(board) == chess.WHITE else MAX_VAL
        if state is not Status.ONGOING:
            return 0
        return self.material(board)

    def material(self, board: chess.Board) -> int:
        score = 0
        for sq in chess.SQUARES:
            piece = piece_at(board, sq)
            if piece is None:
                continue
            weight = self.piece_weights[piece.piece_type]
            score += -weight if piece.color == chess.WHITE else weight
        return score
