"""Core engine components: rules adapter, evaluator, and tree search."""

from .board import ChessBoard, Status
from .evaluator import Evaluator
from .search import TreeSearch
