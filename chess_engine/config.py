# chess_engine/config.py
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Optional

import tomllib

_log = logging.getLogger(__name__)

# Defaults (centipawns)
PIECE_VALUES = {
    "PAWN": 100,
    "KNIGHT": 320,
    "BISHOP": 330,
    "ROOK": 500,
    "QUEEN": 900,
    "KING": 20000,
}

@dataclass
class SearchConfig:
    medium_depth: int = 2
    hard_depth: int = 4
    mate_score: int = 100000
    seed: Optional[int] = None  # None means nondeterministic easy-mode picks

@dataclass
class EvalConfig:
    piece_values: Dict[str, int] = field(default_factory=lambda: PIECE_VALUES.copy())
    use_positional: bool = True  # hard mode adds piece-square tables

@dataclass
class PGNConfig:
    event: str = "Casual Game"
    site: str = "?"
    round: str = "-"
    white: str = "White"
    black: str = "Black"

@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    pgn: PGNConfig = field(default_factory=PGNConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "eval", "pgn"):
            target = getattr(cfg, section)
            for k, v in raw.get(section, {}).items():
                if hasattr(target, k):
                    setattr(target, k, v)
                else:
                    _log.warning("Ignoring unknown config key %s.%s", section, k)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"])
        return cfg

# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("CHESS_ENGINE_CONFIG_TOML", "config.toml"))
# allow env override of the hard-mode depth for quick debugging
override_depth = os.environ.get("CHESS_ENGINE_SEARCH_DEPTH")
if override_depth:
    try:
        CONFIG.search.hard_depth = int(override_depth)
    except ValueError:
        _log.warning("Ignoring non-integer CHESS_ENGINE_SEARCH_DEPTH=%r", override_depth)
