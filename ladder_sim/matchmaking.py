"""
Rank bucketed matchmaking index.

Keeps one bucket of player handles per rank plus the set of players that still
have games left this season. Every membership change is O(1): each list has a
handle -> position side table, and removal swaps the last element into the gap.

Bucket order carries no meaning.
"""

import random
from typing import Dict, Iterable, List, Optional, Sequence

from ladder_sim.config import BOTTOM_RANK, FAILED_MATCHMAKING, RANK_COUNT, TOP_RANK
from ladder_sim.player_pool import Player


def _swap_remove(items: List[int], positions: Dict[int, int], handle: int):
    pos = positions.pop(handle)
    last = items.pop()
    if last != handle:
        items[pos] = last
        positions[last] = pos


class MatchmakingIndex:
    """Players looking for matches, partitioned by rank."""

    def __init__(self, rng: random.Random, failed_matchmaking: int = FAILED_MATCHMAKING):
        self.rng = rng
        self.failed_matchmaking = failed_matchmaking
        self.buckets: List[List[int]] = [[] for _ in range(RANK_COUNT)]
        self.active: List[int] = []
        self._bucket_pos: Dict[int, int] = {}
        self._bucket_rank: Dict[int, int] = {}
        self._active_pos: Dict[int, int] = {}

    @classmethod
    def build(cls, players: Iterable[Player], rng: random.Random,
              failed_matchmaking: int = FAILED_MATCHMAKING) -> "MatchmakingIndex":
        """Index every player that has games left."""
        index = cls(rng, failed_matchmaking)
        for player in players:
            if player.games_left > 0:
                index.add(player)
        return index

    def __len__(self):
        return len(self.active)

    def __contains__(self, handle: int) -> bool:
        return handle in self._active_pos

    def rank_of(self, handle: int) -> int:
        return self._bucket_rank[handle]

    # ==============================
    # Membership
    # ==============================

    def add(self, player: Player):
        if player.id in self._active_pos or player.id in self._bucket_rank:
            raise ValueError(f"Player {player.id} is already indexed")
        if player.games_left <= 0:
            raise ValueError(f"Player {player.id} has no games left")

        self.reinsert(player.id, player.rank)
        self._active_pos[player.id] = len(self.active)
        self.active.append(player.id)

    def remove(self, handle: int, rank: int, deactivate: bool = True):
        """Take a handle out of bucket[rank], and out of the active set unless deactivate is False."""
        recorded = self._bucket_rank.get(handle)
        if recorded != rank:
            raise ValueError(f"Player {handle} is not in bucket {rank} (recorded: {recorded})")

        del self._bucket_rank[handle]
        _swap_remove(self.buckets[rank], self._bucket_pos, handle)
        if deactivate and handle in self._active_pos:
            _swap_remove(self.active, self._active_pos, handle)

    def reinsert(self, handle: int, new_rank: int):
        """Append a handle to bucket[new_rank]. It must already be out of its previous bucket."""
        if handle in self._bucket_rank:
            raise ValueError(f"Player {handle} is still in bucket {self._bucket_rank[handle]}")
        if not TOP_RANK <= new_rank <= BOTTOM_RANK:
            raise ValueError(f"Rank {new_rank} is outside [{TOP_RANK}, {BOTTOM_RANK}]")

        bucket = self.buckets[new_rank]
        self._bucket_pos[handle] = len(bucket)
        self._bucket_rank[handle] = new_rank
        bucket.append(handle)

    def sync(self, player: Player):
        """Bring the index in line with a player whose quota or rank just changed."""
        rank = self._bucket_rank[player.id]
        if player.games_left <= 0:
            self.remove(player.id, rank)
        elif player.rank != rank:
            self.remove(player.id, rank, deactivate=False)
            self.reinsert(player.id, player.rank)

    def retire(self, player: Player):
        """Drop a player for the rest of the season."""
        player.games_left = 0
        self.remove(player.id, self._bucket_rank[player.id])

    # ==============================
    # Matchmaking
    # ==============================

    def random_active(self) -> int:
        return self.active[self.rng.randrange(len(self.active))]

    def find_opponent(self, seeker: int) -> Optional[int]:
        """Pick a random opponent from the seeker's rank, or from one rank either side if it's empty.

        Returns None when no candidate exists.
        """
        rank = self._bucket_rank[seeker]
        same_rank = self.buckets[rank]

        if len(same_rank) > 1:
            pick = self.rng.randrange(len(same_rank) - 1)
            # Skip over the seeker's own slot
            if pick >= self._bucket_pos[seeker]:
                pick += 1
            return same_rank[pick]

        above: Sequence[int] = self.buckets[rank - 1] if rank > TOP_RANK else ()
        below: Sequence[int] = self.buckets[rank + 1] if rank < BOTTOM_RANK else ()
        total = len(above) + len(below)
        if total == 0:
            return None

        pick = self.rng.randrange(total)
        if pick < len(above):
            return above[pick]
        return below[pick - len(above)]

    def record_no_match(self, player: Player) -> bool:
        """Ding a player that found nobody. Returns True if they ragequit the season."""
        player.failed_matchmaking += 1
        if player.failed_matchmaking > self.failed_matchmaking:
            self.retire(player)
            return True
        return False

    # ==============================
    # Consistency
    # ==============================

    def verify(self, players: Sequence[Player]):
        """Check every bucket and the active set against the players. This is very slow."""
        bucketed = set()
        for rank, bucket in enumerate(self.buckets):
            for pos, handle in enumerate(bucket):
                player = players[handle]
                if player.rank != rank:
                    raise RuntimeError(f"rank mismatch: player {handle} has rank {player.rank}, bucket {rank}")
                if self._bucket_pos.get(handle) != pos or self._bucket_rank.get(handle) != rank:
                    raise RuntimeError(f"stale bucket position for player {handle}")
                if handle in bucketed:
                    raise RuntimeError(f"player {handle} is in more than one bucket")
                bucketed.add(handle)

        for pos, handle in enumerate(self.active):
            if self._active_pos.get(handle) != pos:
                raise RuntimeError(f"stale active position for player {handle}")

        with_games = {p.id for p in players if p.games_left > 0}
        if set(self.active) != with_games or len(self.active) != len(with_games):
            raise RuntimeError("active set does not match players with games left")
        if bucketed != with_games:
            raise RuntimeError("bucketed players do not match players with games left")
