"""
Pytest configuration and shared fixtures for simulator tests.
"""

import random

import pytest

from ladder_sim.config import SimulationConfig
from ladder_sim.player_pool import Player, RankProgression
from ladder_sim.skill_utils import Skill, SkillMode


@pytest.fixture
def config():
    """Small, fast configuration with a fixed seed"""
    return SimulationConfig(
        players_per_season=100,
        seasons=1,
        games_per_season=60,
        seasonal_variance=20,
        seed=1234,
        output_formats=(),
    )


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def make_player():
    """Factory for players with a fixed flat skill"""
    def _make(player_id=0, rank=30, pieces=0, streak=0, games_left=10, games_played=0,
              skill=0.5, mode=SkillMode.FLAT):
        progression = [RankProgression(r, 0) for r in range(30, rank - 1, -1)]
        return Player(
            id=player_id,
            skill=Skill(max_skill=skill, offset=0, rate=100.0, mode=mode),
            games_per_season=games_left,
            seasonal_variance=0,
            rank=rank,
            streak=streak,
            pieces=pieces,
            games_left=games_left,
            games_played=games_played,
            rank_progression=progression,
        )
    return _make
