"""
Skill curve utilities.
Maps a player's lifetime games played to their current skill value.
"""

import math
import random
from dataclasses import dataclass
from enum import Enum

from ladder_sim.config import SimulationConfig


class SkillMode(Enum):
    FLAT = "flat"
    GROWTH = "growth"
    DECAY = "decay"


@dataclass(frozen=True)
class Skill:
    """Per-player skill parameters. max_skill is the asymptotic ceiling in [0, 1)."""

    max_skill: float
    offset: int
    rate: float
    mode: SkillMode = SkillMode.FLAT

    def __post_init__(self):
        if self.rate <= 0:
            raise ValueError(f"Skill rate must be > 0, got {self.rate}")


def evaluate(skill: Skill, games_played: int) -> float:
    """Current skill after games_played games."""
    if skill.mode is SkillMode.FLAT:
        return skill.max_skill

    curve = math.atan((games_played + skill.offset) / skill.rate) / math.pi
    if skill.mode is SkillMode.GROWTH:
        return skill.max_skill * (0.5 + curve)
    return skill.max_skill * (0.5 - curve)


def roll_skill(rng: random.Random, config: SimulationConfig) -> Skill:
    """Draw a new player's skill curve.

    The offset is spread symmetrically around zero by SKILL_OFFSET_SCALE and the
    rate is pinned to the same scale, so slower learners also start later.
    """
    max_skill = rng.random()
    offset = int((rng.random() - 0.5) * config.skill_offset_scale)
    rate = config.skill_offset_scale * config.learn_factor / (1.0 + rng.random() * (config.learn_scale - 1.0))
    return Skill(max_skill=max_skill, offset=offset, rate=rate, mode=SkillMode(config.skill_mode))
