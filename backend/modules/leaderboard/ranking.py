"""
Ranking helpers.
"""

from typing import Iterable, Sequence

from .models import LeaderboardEntry, RankTier

RANK_TIERS: tuple[RankTier, ...] = (
    RankTier(name="Bronze", min_points=0, max_points=499),
    RankTier(name="Silver", min_points=500, max_points=999),
    RankTier(name="Gold", min_points=1000, max_points=1999),
    RankTier(name="Platinum", min_points=2000, max_points=2999),
    RankTier(name="Elite", min_points=3000, max_points=None),
)


def find_user_rank(leaderboard: Iterable[LeaderboardEntry], user_id: int) -> int:
    """1-based position of the user in the leaderboard, or -1 if absent."""
    for position, entry in enumerate(leaderboard, start=1):
        if entry.id == user_id:
            return position
    return -1


def rank_tier_for(points: int, tiers: Sequence[RankTier] = RANK_TIERS) -> RankTier:
    for tier in tiers:
        if points >= tier.min_points and (tier.max_points is None or points <= tier.max_points):
            return tier
    return tiers[0]


def next_rank_tier(points: int, tiers: Sequence[RankTier] = RANK_TIERS) -> RankTier:
    """The tier after the current one; the top tier is its own next tier."""
    current = rank_tier_for(points, tiers)
    index = list(tiers).index(current)
    return tiers[min(index + 1, len(tiers) - 1)]
