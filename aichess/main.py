import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Union

import chess

from aichess.config import Algorithm, SearchConfig
from aichess.core.board import ChessBoard, apply, legal_moves
from aichess.core.evaluator import Evaluator
from aichess.core.search import TreeSearch
from aichess.core.utils import format_info

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one root search."""

    best_move: Optional[chess.Move]
    score: Optional[int]
    depth: int
    algorithm: Algorithm
    nodes: int
    leaves: int
    elapsed_ms: float


class Engine:
    """
    Holds the game being played and the search configuration.

    ``propose_move`` reads the current position, ``commit_move`` is the only
    way the tracked position changes.
    """

    def __init__(self, fen: Optional[str] = None, depth: int = 3,
                 algorithm: Union[str, Algorithm, None] = "ab",
                 evaluator: Optional[Evaluator] = None):
        if isinstance(algorithm, Algorithm):
            self._config = SearchConfig(depth=depth, algorithm=algorithm)
        else:
            self._config = SearchConfig.create(depth=depth, algorithm=algorithm)
        self._board = ChessBoard(fen)
        self._search = TreeSearch(evaluator)

    @classmethod
    def from_config(cls, config: SearchConfig, fen: Optional[str] = None) -> "Engine":
        return cls(fen=fen, depth=config.depth, algorithm=config.algorithm)

    @property
    def config(self) -> SearchConfig:
        return self._config

    @property
    def board(self) -> ChessBoard:
        return self._board

    @property
    def history(self) -> List[chess.Move]:
        return list(self._board.move_history)

    def analyse(self) -> SearchResult:
        """Score every legal root move and keep the first strictly-best one."""
        root = self._board.position
        depth = self._config.depth
        algorithm = self._config.algorithm
        self._search.reset()
        start_time = time.time()

        best_move = None
        best_score = None
        for move in legal_moves(root):
            # always searched as the maximizing side, whoever is to move
            score = self._search.search(algorithm, apply(root, move), depth, True)
            if best_score is None or score > best_score:
                best_move, best_score = move, score

        elapsed_ms = (time.time() - start_time) * 1000
        result = SearchResult(best_move, best_score, depth, algorithm,
                              self._search.nodes, self._search.leaves, elapsed_ms)
        _log.info(format_info(algorithm, depth, best_move, best_score,
                              result.nodes, result.leaves, elapsed_ms))
        return result

    def propose_move(self) -> Optional[chess.Move]:
        return self.analyse().best_move

    def commit_move(self, move: chess.Move):
        self._board.push(move)
