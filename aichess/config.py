# aichess/config.py
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Optional
import logging
import os
import tomllib  # python >=3.11

import chess

_log = logging.getLogger(__name__)

# Score bounds. Reserved for checkmate and for the initial alpha/beta window;
# material scoring must stay strictly inside them.
MIN_VAL = -1001
MAX_VAL = 1001

# Material weights (pawns)
PIECE_WEIGHTS = MappingProxyType({
    chess.KING: 0,
    chess.QUEEN: 9,
    chess.ROOK: 5,
    chess.BISHOP: 3,
    chess.KNIGHT: 3,
    chess.PAWN: 1,
})


class Algorithm(Enum):
    MINIMAX = "minimax"
    ALPHA_BETA = "alphabeta"
    BEST_FIRST = "bestfirst"
    BSTAR = "bstar"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "Algorithm":
        """Resolve a free-text algorithm name. Unknown names fall back to alpha-beta."""
        key = str(name or "").strip().lower()
        algorithm = _ALIASES.get(key)
        if algorithm is None:
            _log.debug("Unknown algorithm %r, using %s", name, cls.ALPHA_BETA.value)
            return cls.ALPHA_BETA
        return algorithm


_ALIASES = {
    "minimax": Algorithm.MINIMAX,
    "mm": Algorithm.MINIMAX,
    "alphabeta": Algorithm.ALPHA_BETA,
    "alpha-beta": Algorithm.ALPHA_BETA,
    "ab": Algorithm.ALPHA_BETA,
    "bestfirst": Algorithm.BEST_FIRST,
    "best-first": Algorithm.BEST_FIRST,
    "bf": Algorithm.BEST_FIRST,
    "bstar": Algorithm.BSTAR,
    "b*": Algorithm.BSTAR,
}


@dataclass(frozen=True)
class SearchConfig:
    depth: int = 3
    algorithm: Algorithm = Algorithm.ALPHA_BETA

    def __post_init__(self):
        if isinstance(self.depth, bool) or not isinstance(self.depth, int):
            raise ValueError(f"search depth must be an integer, got {self.depth!r}")
        if self.depth < 0:
            raise ValueError(f"search depth must not be negative, got {self.depth}")
        if not isinstance(self.algorithm, Algorithm):
            # accept names from TOML / CLI
            object.__setattr__(self, "algorithm", Algorithm.from_name(self.algorithm))

    @staticmethod
    def create(depth: int = 3, algorithm: Optional[str] = None) -> "SearchConfig":
        return SearchConfig(depth=depth, algorithm=Algorithm.from_name(algorithm))


@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        if "search" in raw:
            known = {k: v for k, v in raw["search"].items()
                     if k in SearchConfig.__dataclass_fields__}
            cfg.search = SearchConfig(**known)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"]).upper()
        return cfg

    def with_overrides(self, env=None) -> "Config":
        """Apply AICHESS_SEARCH_DEPTH / AICHESS_ALGORITHM from the environment."""
        env = os.environ if env is None else env
        depth = self.search.depth
        algorithm = self.search.algorithm
        override_depth = env.get("AICHESS_SEARCH_DEPTH")
        if override_depth:
            try:
                depth = int(override_depth)
            except ValueError:
                _log.warning("Ignoring AICHESS_SEARCH_DEPTH=%r: not an integer", override_depth)
        override_algorithm = env.get("AICHESS_ALGORITHM")
        if override_algorithm:
            algorithm = Algorithm.from_name(override_algorithm)
        try:
            self.search = SearchConfig(depth=depth, algorithm=algorithm)
        except ValueError as e:
            _log.warning("Ignoring environment search overrides: %s", e)
        return self


def _load_default_config() -> Config:
    path = os.environ.get("AICHESS_CONFIG_TOML", "config.toml")
    try:
        cfg = Config.load_from_toml(path)
    except (ValueError, TypeError) as e:  # tomllib.TOMLDecodeError is a ValueError
        _log.warning("Ignoring %s: %s", path, e)
        cfg = Config()
    return cfg.with_overrides()


# single globally importable config instance
CONFIG = _load_default_config()
