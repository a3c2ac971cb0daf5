"""Fixed-depth chess move search: minimax, alpha-beta and ordered alpha-beta variants."""

from aichess.config import Algorithm, SearchConfig, MIN_VAL, MAX_VAL
from aichess.main import Engine, SearchResult
