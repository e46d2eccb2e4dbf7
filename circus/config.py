# circus/config.py
from dataclasses import dataclass, field
from typing import Dict, Optional
import os
import tomllib  # python >=3.11

# Defaults (score points)
HOUSE_BONUS = 1000

# Penalty for my own un-housed piece; the opponent's un-housed piece scores the negation.
PRESENCE_WEIGHTS = {
    "CLOWN": -5,
    "STRONGMAN": -8,
    "ACROBAT": -10,
    "MAGICIAN": -12,
    "TRAINER": -6,
}

# Added when my piece sits inside the active enemy trainer's zone (negated for enemy pieces).
BLOCKED_WEIGHTS = {
    "CLOWN": -10,
    "STRONGMAN": -20,
    "ACROBAT": -30,
    "MAGICIAN": -60,
    "TRAINER": -15,
}

@dataclass
class GameConfig:
    max_steps: int = 300
    houses_count: int = 13

@dataclass
class SearchConfig:
    node_budget: int = 200  # depth = floor(log(node_budget) / log(branching))
    beam_margin: int = 50
    min_depth: int = 1
    use_shortcuts: bool = True
    shortcut_distance: int = 2

@dataclass
class EvalConfig:
    house_bonus: int = HOUSE_BONUS
    presence_weights: Dict[str, int] = field(default_factory=lambda: PRESENCE_WEIGHTS.copy())
    blocked_weights: Dict[str, int] = field(default_factory=lambda: BLOCKED_WEIGHTS.copy())
    progress_weight: int = 2  # per column of horizontal progress
    house_distance_weight: int = 5  # per Manhattan step to the nearest free house

@dataclass
class Config:
    game: GameConfig = field(default_factory=GameConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    log_level: str = "INFO"  # "OFF" disables logging entirely
    log_file: Optional[str] = None  # stderr when unset; stdout is reserved for the protocol

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("game", "search", "eval"):
            if section in raw:
                target = getattr(cfg, section)
                for k, v in raw[section].items():
                    if hasattr(target, k):
                        setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"])
        if "log_file" in raw:
            cfg.log_file = raw["log_file"]
        return cfg

# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("CIRCUS_CONFIG_TOML", "config.toml"))
# allow env override of the log level for quick debugging
if os.environ.get("CIRCUS_LOG_LEVEL"):
    CONFIG.log_level = os.environ["CIRCUS_LOG_LEVEL"].upper()
