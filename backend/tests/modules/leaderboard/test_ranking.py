import pytest

from modules.leaderboard.models import LeaderboardEntry
from modules.leaderboard.ranking import find_user_rank, next_rank_tier, rank_tier_for


def entry(user_id: int, points: int) -> LeaderboardEntry:
    return LeaderboardEntry(id=user_id, name=f"User {user_id}", email=f"u{user_id}@x.com", points_total=points)


class TestFindUserRank:
    def test_one_based_position(self):
        board = [entry(5, 900), entry(1, 500), entry(7, 100)]
        assert find_user_rank(board, 1) == 2
        assert find_user_rank(board, 5) == 1

    def test_absent_user(self):
        assert find_user_rank([entry(5, 900)], 1) == -1
        assert find_user_rank([], 1) == -1


class TestRankTiers:
    @pytest.mark.parametrize(
        "points, tier",
        [(0, "Bronze"), (499, "Bronze"), (500, "Silver"), (1250, "Gold"), (2000, "Platinum"), (9000, "Elite")],
    )
    def test_rank_tier_for(self, points, tier):
        assert rank_tier_for(points).name == tier

    def test_next_tier(self):
        assert next_rank_tier(840).name == "Gold"
        assert next_rank_tier(5000).name == "Elite"
