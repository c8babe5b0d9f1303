"""
Ranked ladder season simulator.
Models skill growth, rank-bucketed matchmaking and rank promotion/demotion over repeated seasons.
"""

from ladder_sim.config import SimulationConfig
from ladder_sim.season import SeasonSimulator

__all__ = ["SimulationConfig", "SeasonSimulator"]
