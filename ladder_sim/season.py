"""
Season simulation loop.

Each season:
1. Adds a new cohort of players
2. Resets quotas (and decays ranks) for everyone, fast-forwarding the top pros
3. Plays random matches until at most one player still has games left
4. Hands the per-rank statistics to every report sink
"""

import random
from typing import List, Optional, Sequence

from ladder_sim.config import TOP_RANK, SimulationConfig
from ladder_sim.match_engine import MatchEngine, RankChange
from ladder_sim.matchmaking import MatchmakingIndex
from ladder_sim.player_pool import Player, PlayerPool
from ladder_sim.season_stats import RankReport, compute_season_stats


class SeasonSimulator:
    """Runs consecutive seasons over one growing player population."""

    def __init__(self, config: SimulationConfig, rng: Optional[random.Random] = None,
                 sinks: Sequence = ()):
        self.config = config
        self.rng = rng or random.Random(config.seed)
        self.pool = PlayerPool(config, self.rng)
        self.engine = MatchEngine(config, self.rng)
        self.sinks = list(sinks)
        self.matches_played = 0
        self.ragequits = 0

    def run(self) -> List[RankReport]:
        """Play every configured season. Returns the last season's report rows."""
        rows: List[RankReport] = []
        for season in range(self.config.seasons):
            rows = self.run_season(season)
        return rows

    def run_season(self, season: int) -> List[RankReport]:
        self.pool.spawn_cohort(
            self.config.players_per_season,
            self.config.games_per_season,
            self.config.seasonal_variance,
        )
        self.pool.prepare_season(season)

        index = MatchmakingIndex.build(self.pool, self.rng, self.config.failed_matchmaking)
        self.play_season(index)

        rows = compute_season_stats(self.pool.players)
        for sink in self.sinks:
            sink.write_season_report(season, rows)
        return rows

    def play_season(self, index: MatchmakingIndex):
        """Match players until at most one is left with games to play."""
        players = self.pool.players
        while len(index) > 1:
            a = players[index.random_active()]
            opponent = index.find_opponent(a.id)

            if opponent is None:
                if index.record_no_match(a):
                    self.ragequits += 1
                    if self.config.debug:
                        print(f"Player {a.id} failed matchmaking, rank {a.rank}")
            else:
                b = players[opponent]
                changes = self.engine.resolve_match(a, b)
                self.matches_played += 1
                for player, change in zip((a, b), changes):
                    self._settle(index, player, change)

            if self.config.debug:
                index.verify(players)

    def _settle(self, index: MatchmakingIndex, player: Player, change: RankChange):
        # Pros don't progress any further in this model, just grant them their games
        if change is RankChange.PROMOTED and player.rank == TOP_RANK and player.games_left > 0:
            player.games_played += player.games_left
            player.games_left = 0

        if self.config.debug and player.games_left <= 0:
            print(f"Removing {player.id} from lists")
        index.sync(player)
