import chess
from typing import Callable, List, Optional

from aichess.config import Algorithm, MAX_VAL, MIN_VAL
from aichess.core.board import Status, apply, legal_moves, null_move, status
from aichess.core.evaluator import Evaluator

MoveOrder = Callable[[chess.Board], List[chess.Move]]


class TreeSearch:
    """
    Fixed-depth game-tree search over immutable positions.

    ``maximizing`` follows the evaluator's sign convention and flips on every
    ply. All variants share the same base case: depth exhausted or the
    position is terminal, in which case the static evaluation is returned.
    """

    def __init__(self, evaluator: Optional[Evaluator] = None):
        self.evaluator = evaluator or Evaluator()
        self.nodes = 0
        self.leaves = 0
        self.probes = 0

    def reset(self):
        self.nodes = 0
        self.leaves = 0
        self.probes = 0

    def search(self, algorithm: Algorithm, position: chess.Board, depth: int,
               maximizing: bool = True) -> int:
        if algorithm is Algorithm.MINIMAX:
            return self.minimax(position, depth, maximizing)
        if algorithm is Algorithm.ALPHA_BETA:
            return self.alpha_beta(position, depth, MIN_VAL, MAX_VAL, maximizing)
        if algorithm is Algorithm.BEST_FIRST:
            return self.best_first(position, depth, MIN_VAL, MAX_VAL, maximizing)
        if algorithm is Algorithm.BSTAR:
            return self.bstar(position, depth, MIN_VAL, MAX_VAL, maximizing)
        raise ValueError(f"unsupported algorithm {algorithm!r}")

    # -------------------------
    # Variants
    # -------------------------
    def minimax(self, position: chess.Board, depth: int, maximizing: bool) -> int:
        self.nodes += 1
        if self._is_leaf(position, depth):
            return self._leaf(position)

        if maximizing:
            value = MIN_VAL
            for move in legal_moves(position):
                value = max(value, self.minimax(apply(position, move), depth - 1, False))
            return value

        value = MAX_VAL
        for move in legal_moves(position):
            value = min(value, self.minimax(apply(position, move), depth - 1, True))
        return value

    def alpha_beta(self, position: chess.Board, depth: int, alpha: int, beta: int,
                   maximizing: bool) -> int:
        return self._windowed(position, depth, alpha, beta, maximizing, legal_moves)

    def best_first(self, position: chess.Board, depth: int, alpha: int, beta: int,
                   maximizing: bool) -> int:
        """
        Alpha-beta with children visited in ascending order of their static
        evaluation. The result is the windowed alpha-beta value for that move
        order, not a guaranteed exhaustive minimax value.
        """
        return self._windowed(position, depth, alpha, beta, maximizing, self._order_by_static)

    def bstar(self, position: chess.Board, depth: int, alpha: int, beta: int,
              maximizing: bool) -> int:
        """
        Alpha-beta with children ordered by a null-move probe: after each move
        the turn is passed back and the best static score over the replies in
        that position is used as the ordering key (0 when no probe is possible).
        """
        return self._windowed(position, depth, alpha, beta, maximizing, self._order_by_null_reply)

    # -------------------------
    # Windowed recursion
    # -------------------------
    def _windowed(self, position: chess.Board, depth: int, alpha: int, beta: int,
                  maximizing: bool, order: MoveOrder) -> int:
        self.nodes += 1
        if self._is_leaf(position, depth):
            return self._leaf(position)

        if maximizing:
            value = MIN_VAL
            for move in order(position):
                child = apply(position, move)
                value = max(value, self._windowed(child, depth - 1, alpha, beta, False, order))
                alpha = max(alpha, value)
                if alpha >= beta:
                    break  # beta cutoff
            return value

        value = MAX_VAL
        for move in order(position):
            child = apply(position, move)
            value = min(value, self._windowed(child, depth - 1, alpha, beta, True, order))
            beta = min(beta, value)
            if beta <= alpha:
                break  # alpha cutoff
        return value

    # -------------------------
    # Move ordering helpers
    # -------------------------
    def _order_by_static(self, position: chess.Board) -> List[chess.Move]:
        moves = legal_moves(position)
        scores = [self._probe(apply(position, move)) for move in moves]
        # sorted() is stable: equal scores keep generation order
        return [m for _, m in sorted(zip(scores, moves), key=lambda x: x[0])]

    def _order_by_null_reply(self, position: chess.Board) -> List[chess.Move]:
        moves = legal_moves(position)
        scores = [self._null_reply_score(apply(position, move)) for move in moves]
        return [m for _, m in sorted(zip(scores, moves), key=lambda x: x[0])]

    def _null_reply_score(self, child: chess.Board) -> int:
        passed = null_move(child)
        if passed is None:
            return 0
        replies = legal_moves(passed)
        if not replies:
            return 0
        return max(self._probe(apply(passed, reply)) for reply in replies)

    def _probe(self, position: chess.Board) -> int:
        self.probes += 1
        return self.evaluator.evaluate(position)

    def _leaf(self, position: chess.Board) -> int:
        self.leaves += 1
        return self.evaluator.evaluate(position)

    @staticmethod
    def _is_leaf(position: chess.Board, depth: int) -> bool:
        return depth <= 0 or status(position) is not Status.ONGOING
