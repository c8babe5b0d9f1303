"""
End of season statistics, aggregated per rank from the final population state.
"""

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence

from ladder_sim.config import RANK_COUNT
from ladder_sim.player_pool import Player

CSV_HEADER = [
    "Rank", "Player Count", "Average Games Played", "Average Skill", "Std Dev", "Average Progression Count",
]


@dataclass(frozen=True)
class RankReport:
    rank: int
    count: int
    mean_games_played: float
    mean_skill: Optional[float] = None
    std_dev_skill: Optional[float] = None
    mean_games_to_progress: Optional[float] = None

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def as_csv_row(self) -> List[str]:
        """Row for the CSV report. Missing values are left blank."""
        def fmt(value: Optional[float]) -> str:
            return "" if value is None else f"{value:f}"

        return [
            str(self.rank),
            str(self.count),
            fmt(self.mean_games_played),
            fmt(self.mean_skill),
            fmt(self.std_dev_skill),
            fmt(self.mean_games_to_progress),
        ]


def games_when_passed(player: Player, rank: int) -> int:
    """Games the player had played when they climbed past rank.

    Progression only grows when a player sets a new best rank, so position
    RANK_COUNT - rank holds the entry for rank - 1.
    """
    return player.rank_progression[RANK_COUNT - rank].games_played


def compute_season_stats(players: Sequence[Player]) -> List[RankReport]:
    """One report row per rank, top (0) to bottom (30)."""
    by_rank: List[List[Player]] = [[] for _ in range(RANK_COUNT)]
    for player in players:
        by_rank[player.rank].append(player)

    rows = []
    for rank, members in enumerate(by_rank):
        count = len(members)
        if count == 0:
            rows.append(RankReport(rank=rank, count=0, mean_games_played=0.0))
            continue

        games_played = sum(p.games_played for p in members)
        skills = [p.current_skill for p in members]
        mean_skill = sum(skills) / count
        std_dev = math.sqrt(sum((s - mean_skill) ** 2 for s in skills) / count)

        games_to_progress = None
        if rank > 0:
            passed = [p for higher in by_rank[:rank] for p in higher]
            passed_games = sum(games_when_passed(p, rank) - 1 for p in passed)
            games_to_progress = (games_played + passed_games) / (count + len(passed))

        rows.append(RankReport(
            rank=rank,
            count=count,
            mean_games_played=games_played / count,
            mean_skill=mean_skill,
            std_dev_skill=std_dev,
            mean_games_to_progress=games_to_progress,
        ))

    return rows
