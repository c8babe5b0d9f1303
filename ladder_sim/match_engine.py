"""
Match resolution and ladder progression rules.

A match draws an outcome from both players' current skill, then applies the
win/loss rules to each side:
- Wins build a streak and earn pieces; more than 5 pieces promotes a rank
- Losses cost pieces once a player is past the newcomer ranks
- With DERANK enabled, a loss with no pieces left demotes a rank
"""

import random
from enum import Enum
from typing import Tuple

from ladder_sim.config import (
    MAX_PIECES, NEWCOMER_RANK, PRESSURE_RANK, STREAK_BONUS_MIN, STREAK_BONUS_RANK, TOP_RANK,
    SimulationConfig,
)
from ladder_sim.player_pool import Player, RankProgression


class RankChange(Enum):
    NONE = 0
    PROMOTED = 1
    DEMOTED = -1


class MatchEngine:
    """Plays single matches between two players."""

    def __init__(self, config: SimulationConfig, rng: random.Random):
        self.config = config
        self.rng = rng

    def draw_outcome(self, a: Player, b: Player) -> int:
        """-1 if a wins, 1 if b wins, 0 if neither does."""
        weight = self.config.skill_win_weight
        a_skill = a.current_skill
        sample = weight * 0.5 + (1.0 - weight) * self.rng.random() * (a_skill + b.current_skill)

        # Only a's skill is compared against the sample
        if sample < a_skill:
            return -1
        if sample > a_skill:
            return 1
        return 0

    def resolve_match(self, a: Player, b: Player) -> Tuple[RankChange, RankChange]:
        """Play a against b and apply progression to both."""
        outcome = self.draw_outcome(a, b)

        if outcome < 0:
            return self.add_win(a), self.add_loss(b)
        if outcome > 0:
            return self.add_loss(a), self.add_win(b)
        return self.add_loss(a), self.add_loss(b)

    def add_win(self, player: Player) -> RankChange:
        _consume_game(player)
        player.streak = 1 if player.streak < 0 else player.streak + 1

        if player.streak >= STREAK_BONUS_MIN and player.rank > STREAK_BONUS_RANK:
            player.pieces += 2
        else:
            player.pieces += 1

        if player.pieces <= MAX_PIECES:
            return RankChange.NONE

        if player.rank == TOP_RANK:
            player.pieces = MAX_PIECES
            return RankChange.NONE

        # You need more than 5 pieces to rank up, but leftovers carry into the new rank
        player.rank -= 1
        player.pieces -= MAX_PIECES
        if player.best_rank > player.rank:
            player.rank_progression.append(RankProgression(player.rank, player.games_played))
        return RankChange.PROMOTED

    def add_loss(self, player: Player) -> RankChange:
        _consume_game(player)
        player.streak = -1 if player.streak > 0 else player.streak - 1

        if player.rank > NEWCOMER_RANK:
            player.streak = 0
            return RankChange.NONE

        if player.rank > PRESSURE_RANK and player.streak > -2:
            return RankChange.NONE

        player.streak = 0
        if player.pieces > 0:
            player.pieces -= 1
            return RankChange.NONE

        # Pros can't derank from a loss
        if self.config.derank and player.rank != TOP_RANK:
            player.rank += 1
            player.pieces = MAX_PIECES
            return RankChange.DEMOTED
        return RankChange.NONE


def _consume_game(player: Player):
    player.games_left -= 1
    player.games_played += 1
    player.failed_matchmaking = 0
