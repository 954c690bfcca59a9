"""Tests for modules/challenges/progress.py."""

import pytest
from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

from modules.challenges.models import Challenge, ChallengeParticipant, GoalType
from modules.challenges.progress import (
    advance_challenge_progress,
    commute_contribution,
    get_challenge_progress,
    get_days_remaining,
)
from modules.commutes.models import CommuteLog, CommuteType

NOW = datetime(2024, 1, 10, 12, tzinfo=timezone.utc)


def make_challenge(**overrides) -> Challenge:
    data = {
        "id": 1,
        "title": "Bike to Work Week",
        "start_date": NOW - timedelta(days=2),
        "end_date": NOW + timedelta(days=5),
        "points_reward": 50,
        "goal_type": GoalType.DAYS,
        "goal_value": 3,
        "commute_type": CommuteType.CYCLE,
        "created_at": NOW,
    }
    data.update(overrides)
    return Challenge(**data)


def make_participant(progress=0, completed=False) -> ChallengeParticipant:
    return ChallengeParticipant(
        id=1, challenge_id=1, user_id=1, progress=progress, completed=completed, joined_at=NOW
    )


def make_log(commute_type=CommuteType.CYCLE, days=2, distance=8.0) -> CommuteLog:
    return CommuteLog(
        id=1,
        user_id=1,
        week_start=date(2024, 1, 7),
        commute_type=commute_type,
        days_logged=days,
        distance_km=distance,
        co2_saved_kg=0,
        created_at=NOW,
    )


class TestGetChallengeProgress:
    def test_caps_at_hundred(self):
        assert get_challenge_progress(SimpleNamespace(goal_value=50), 75) == 100.0

    def test_partial(self):
        assert get_challenge_progress(SimpleNamespace(goal_value=20), 5) == 25.0

    def test_zero_goal_counts_as_complete(self):
        assert get_challenge_progress(SimpleNamespace(goal_value=0), 0) == 100.0


class TestGetDaysRemaining:
    def test_rounds_partial_days_up(self):
        assert get_days_remaining(NOW + timedelta(days=2, hours=1), now=NOW) == 3

    def test_past_end_date(self):
        assert get_days_remaining(NOW - timedelta(days=1), now=NOW) == 0

    def test_exact_days(self):
        assert get_days_remaining(NOW + timedelta(days=3), now=NOW) == 3

    def test_defaults_to_current_time(self):
        end = datetime.now(timezone.utc) + timedelta(days=1, hours=1)
        assert get_days_remaining(end) == 2


class TestCommuteContribution:
    def test_typed_days_challenge(self):
        assert commute_contribution(make_challenge(), make_log(days=2)) == 2

    def test_typed_challenge_ignores_other_modes(self):
        assert commute_contribution(make_challenge(), make_log(CommuteType.WALK)) == 0

    def test_km_challenge_uses_distance_times_days(self):
        challenge = make_challenge(goal_type=GoalType.KM, goal_value=100)
        assert commute_contribution(challenge, make_log(days=3, distance=8.5)) == 26

    def test_untyped_challenge_counts_sustainable_days(self):
        challenge = make_challenge(commute_type=None, goal_value=15)
        assert commute_contribution(challenge, make_log(CommuteType.REMOTE_WORK, days=2)) == 2
        assert commute_contribution(challenge, make_log(CommuteType.GAS_VEHICLE, days=5)) == 0


class TestAdvanceChallengeProgress:
    def test_advances_progress(self):
        advanced = advance_challenge_progress(make_challenge(), make_participant(), make_log(days=2))
        assert advanced.progress == 2
        assert advanced.completed is False

    def test_reaching_goal_completes_and_caps(self):
        advanced = advance_challenge_progress(
            make_challenge(), make_participant(progress=2), make_log(days=5)
        )
        assert advanced.progress == 3
        assert advanced.completed is True

    def test_completed_participant_is_untouched(self):
        participant = make_participant(progress=3, completed=True)
        assert advance_challenge_progress(make_challenge(), participant, make_log()) is None

    def test_no_contribution(self):
        assert advance_challenge_progress(
            make_challenge(), make_participant(), make_log(CommuteType.WALK)
        ) is None
