"""
Configuration for the ranked ladder season simulator.
Adjust these values to tune the progression model and the simulated population.

Every value can be overridden through the environment (or a .env file) using
the LADDER_ prefix, e.g. LADDER_SEASONS=4 or LADDER_SKILL_MODE=growth.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

# ==============================
# Model Switches
# ==============================

# Allows players to de-rank on losses. Disabled in the live game, but part of older ranking systems.
DERANK = False

# Demote everyone by SEASON_RANK_DECAY_STEP ranks at each season boundary
SEASON_RANK_DECAY = True

# Skill curve: "flat" (no learning), "growth" (players learn), "decay" (players lose skill per game)
SKILL_MODE = "flat"

# ==============================
# Skill Curve Tuning
# ==============================

# Alters slope of the sigmoid by the same rate for all players
LEARN_FACTOR = 1.0

# Lets some players learn faster than others. Must be > 0
LEARN_SCALE = 2.0

# Games we expect the average player needs to learn most of the game
SKILL_OFFSET_SCALE = 100

# 0.0: a player wins a/(a+b) of the time. 1.0: the higher skilled player always wins
SKILL_WIN_WEIGHT = 0.0

# ==============================
# Population
# ==============================

# New players added each season
PLAYERS_PER_SEASON = 1000

# Number of seasons to simulate
SEASONS = 12

# Max games per season per player (average will be half this)
GAMES_PER_SEASON = 360

# Range of per-player season variance, applied as [-SV/2, SV/2]
SEASONAL_VARIANCE = 360

# ==============================
# Procedure
# ==============================

# Matchmaking failures before a player ragequits the season
FAILED_MATCHMAKING = 10

# Number of pro players kept by skill before the rest are subject to decay
PRO_TIER_SIZE = 500

# Verify matchmaking index consistency after every step (very slow)
DEBUG = False

# ==============================
# Ladder Shape
# ==============================

TOP_RANK = 0
BOTTOM_RANK = 30
RANK_COUNT = BOTTOM_RANK + 1

MAX_PIECES = 5

SEASON_RANK_DECAY_STEP = 3

# Wins in a row before a win is worth double pieces
STREAK_BONUS_MIN = 3

# Ranks above this number (lower tiers) earn the streak bonus
STREAK_BONUS_RANK = 7

# Losses above this rank never cost pieces
NEWCOMER_RANK = 25

# Losses at or above this rank (numerically below) always cost pieces
PRESSURE_RANK = 14

# ==============================
# Output
# ==============================

OUTPUT_DIR = "output"

# Any of "csv", "json", "console"
OUTPUT_FORMATS = ("csv", "console")

VALID_SKILL_MODES = ("flat", "growth", "decay")
VALID_OUTPUT_FORMATS = ("csv", "json", "console")

ENV_PREFIX = "LADDER_"


def _env(name: str, default):
    return os.getenv(ENV_PREFIX + name, str(default)).strip()


def _env_bool(name: str, default: bool) -> bool:
    return _env(name, default).lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable run parameters, built once at startup and passed to every component."""

    derank: bool = DERANK
    season_rank_decay: bool = SEASON_RANK_DECAY
    skill_mode: str = SKILL_MODE

    learn_factor: float = LEARN_FACTOR
    learn_scale: float = LEARN_SCALE
    skill_offset_scale: int = SKILL_OFFSET_SCALE
    skill_win_weight: float = SKILL_WIN_WEIGHT

    players_per_season: int = PLAYERS_PER_SEASON
    seasons: int = SEASONS
    games_per_season: int = GAMES_PER_SEASON
    seasonal_variance: int = SEASONAL_VARIANCE

    failed_matchmaking: int = FAILED_MATCHMAKING
    pro_tier_size: int = PRO_TIER_SIZE
    debug: bool = DEBUG

    seed: Optional[int] = None
    output_dir: str = OUTPUT_DIR
    output_formats: Tuple[str, ...] = OUTPUT_FORMATS

    def __post_init__(self):
        if self.skill_mode not in VALID_SKILL_MODES:
            raise ValueError(f"skill_mode must be one of {VALID_SKILL_MODES}, got {self.skill_mode!r}")
        # Each of these feeds the curve rate, which must stay strictly positive
        if self.learn_factor <= 0:
            raise ValueError(f"learn_factor must be > 0, got {self.learn_factor}")
        if self.learn_scale <= 0:
            raise ValueError(f"learn_scale must be > 0, got {self.learn_scale}")
        if self.skill_offset_scale <= 0:
            raise ValueError(f"skill_offset_scale must be > 0, got {self.skill_offset_scale}")
        if not 0.0 <= self.skill_win_weight <= 1.0:
            raise ValueError(f"skill_win_weight must be within [0, 1], got {self.skill_win_weight}")
        if self.players_per_season <= 0:
            raise ValueError(f"players_per_season must be > 0, got {self.players_per_season}")
        if self.seasons <= 0:
            raise ValueError(f"seasons must be > 0, got {self.seasons}")
        if self.games_per_season < 0:
            raise ValueError(f"games_per_season must be >= 0, got {self.games_per_season}")
        if self.seasonal_variance < 0:
            raise ValueError(f"seasonal_variance must be >= 0, got {self.seasonal_variance}")
        if self.failed_matchmaking < 0:
            raise ValueError(f"failed_matchmaking must be >= 0, got {self.failed_matchmaking}")
        if self.pro_tier_size <= 0:
            raise ValueError(f"pro_tier_size must be > 0, got {self.pro_tier_size}")
        for fmt in self.output_formats:
            if fmt not in VALID_OUTPUT_FORMATS:
                raise ValueError(f"Unknown output format {fmt!r}, expected one of {VALID_OUTPUT_FORMATS}")

    @property
    def run_label(self) -> str:
        """File name stem describing the model switches, e.g. NoDerankNoLearn."""
        label = "Derank" if self.derank else "NoDerank"
        label += "NoLearn" if self.skill_mode == "flat" else "Learn"
        return label

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "SimulationConfig":
        """Build the configuration from constants, overridden by LADDER_* environment variables."""
        load_dotenv(env_file)

        seed = os.getenv(ENV_PREFIX + "SEED", "").strip()
        formats = _env("OUTPUT_FORMATS", ",".join(OUTPUT_FORMATS))

        return cls(
            derank=_env_bool("DERANK", DERANK),
            season_rank_decay=_env_bool("SEASON_RANK_DECAY", SEASON_RANK_DECAY),
            skill_mode=_env("SKILL_MODE", SKILL_MODE).lower(),
            learn_factor=float(_env("LEARN_FACTOR", LEARN_FACTOR)),
            learn_scale=float(_env("LEARN_SCALE", LEARN_SCALE)),
            skill_offset_scale=int(_env("SKILL_OFFSET_SCALE", SKILL_OFFSET_SCALE)),
            skill_win_weight=float(_env("SKILL_WIN_WEIGHT", SKILL_WIN_WEIGHT)),
            players_per_season=int(_env("PLAYERS_PER_SEASON", PLAYERS_PER_SEASON)),
            seasons=int(_env("SEASONS", SEASONS)),
            games_per_season=int(_env("GAMES_PER_SEASON", GAMES_PER_SEASON)),
            seasonal_variance=int(_env("SEASONAL_VARIANCE", SEASONAL_VARIANCE)),
            failed_matchmaking=int(_env("FAILED_MATCHMAKING", FAILED_MATCHMAKING)),
            pro_tier_size=int(_env("PRO_TIER_SIZE", PRO_TIER_SIZE)),
            debug=_env_bool("DEBUG", DEBUG),
            seed=int(seed) if seed else None,
            output_dir=_env("OUTPUT_DIR", OUTPUT_DIR),
            output_formats=tuple(f.strip().lower() for f in formats.split(",") if f.strip()),
        )
