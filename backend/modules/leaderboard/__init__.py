"""
Leaderboard module.

Company leaderboard, rank tiers and per-user stats.
"""

from .models import LeaderboardEntry, RankTier, UserStats
from .ranking import RANK_TIERS, find_user_rank, next_rank_tier, rank_tier_for

__all__ = [
    "LeaderboardEntry",
    "RankTier",
    "UserStats",
    "RANK_TIERS",
    "find_user_rank",
    "next_rank_tier",
    "rank_tier_for",
]
