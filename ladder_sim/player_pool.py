"""
Player population management.
Spawns a cohort every season, replenishes season quotas and finds the pro tier skill cutoff.

Players are kept in an arena: a player's id is also its index in PlayerPool.players,
so the matchmaking index can address players by handle without lookups.
"""

import random
from dataclasses import dataclass, field
from typing import List, NamedTuple

from ladder_sim.config import BOTTOM_RANK, SEASON_RANK_DECAY_STEP, TOP_RANK, SimulationConfig
from ladder_sim.skill_utils import Skill, evaluate, roll_skill


class RankProgression(NamedTuple):
    rank: int
    games_played: int


@dataclass
class Player:
    id: int
    skill: Skill
    games_per_season: int
    seasonal_variance: int
    rank: int = BOTTOM_RANK
    streak: int = 0
    pieces: int = 0
    games_left: int = 0
    games_played: int = 0
    failed_matchmaking: int = 0
    rank_progression: List[RankProgression] = field(
        default_factory=lambda: [RankProgression(BOTTOM_RANK, 0)]
    )

    @property
    def current_skill(self) -> float:
        return evaluate(self.skill, self.games_played)

    @property
    def best_rank(self) -> int:
        return self.rank_progression[-1].rank

    def __repr__(self):
        return f"Player(id={self.id}, rank={self.rank}, pieces={self.pieces}, games_left={self.games_left})"


class PlayerPool:
    """Owns every player created during the run."""

    def __init__(self, config: SimulationConfig, rng: random.Random):
        self.config = config
        self.rng = rng
        self.players: List[Player] = []

    def __len__(self):
        return len(self.players)

    def __iter__(self):
        return iter(self.players)

    def __getitem__(self, handle: int) -> Player:
        return self.players[handle]

    def spawn_cohort(self, count: int, avg_quota: int, seasonal_variance: int) -> List[Player]:
        """Create count new players at the bottom rank with a freshly rolled quota."""
        cohort = []
        for _ in range(count):
            player = Player(
                id=len(self.players),
                skill=roll_skill(self.rng, self.config),
                games_per_season=int(self.rng.random() * avg_quota),
                seasonal_variance=int(self.rng.random() * seasonal_variance),
            )
            self.reset_for_season(player, reset_rank=False)
            self.players.append(player)
            cohort.append(player)
        return cohort

    def reset_for_season(self, player: Player, reset_rank: bool):
        """Replenish a player's quota and, with season decay enabled, drop their rank."""
        if reset_rank and self.config.season_rank_decay:
            player.rank = min(BOTTOM_RANK, player.rank + SEASON_RANK_DECAY_STEP)

        variance = int((self.rng.random() - 0.5) * player.seasonal_variance)
        player.games_left = max(0, player.games_per_season + variance)

    def fast_forward(self, player: Player):
        """Grant a pro player a full season without simulating their matches."""
        self.reset_for_season(player, reset_rank=False)
        player.games_played += player.games_left
        player.games_left = 0

    def compute_pro_cutoff(self) -> float:
        """Skill of the last pro inside the PRO_TIER_SIZE best. This isn't MMR, but gets the top skilled."""
        pro_skills = [p.current_skill for p in self.players if p.rank == TOP_RANK]
        if len(pro_skills) <= self.config.pro_tier_size:
            return 0.0

        pro_skills.sort(reverse=True)
        return pro_skills[self.config.pro_tier_size - 1]

    def prepare_season(self, season: int) -> int:
        """Reset every player for a new season. Returns the number of players sitting out."""
        pro_cutoff = self.compute_pro_cutoff()
        if self.config.debug:
            print(f"ProRank skill cutoff: {pro_cutoff}")

        sitting_out = 0
        for player in self.players:
            if season != 0:
                # Pros above the cutoff keep their rank and are simply granted their games
                if player.rank == TOP_RANK and pro_cutoff < player.current_skill:
                    self.fast_forward(player)
                else:
                    self.reset_for_season(player, reset_rank=True)
            if player.games_left <= 0:
                sitting_out += 1

        if self.config.debug:
            print(f"{sitting_out} players are sitting out this season.")
        return sitting_out
