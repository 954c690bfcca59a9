import pytest
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock

from modules.commutes.exceptions import WeekClosedError
from modules.commutes.models import CommuteType, LogCommuteRequest
from modules.commutes.repository import InMemoryCommuteRepository
from modules.commutes.service import CommuteService
from modules.users.exceptions import UserNotFoundError
from modules.users.service import UserService
from modules.users.store import InMemoryUserStore
from tests.conftest import make_user


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def request(commute_type=CommuteType.CYCLE, days=3, distance=10.0, week_start=None) -> LogCommuteRequest:
    return LogCommuteRequest(
        commute_type=commute_type,
        days_logged=days,
        distance_km=distance,
        week_start=week_start or datetime(2024, 1, 7, tzinfo=timezone.utc),
    )


class TestCommuteService:
    @pytest.fixture
    def users(self):
        return UserService(InMemoryUserStore([make_user()]))

    @pytest.fixture
    def clock(self):
        # Wednesday of the week starting Sunday 2024-01-07
        return FakeClock(datetime(2024, 1, 10, 12, tzinfo=timezone.utc))

    @pytest.fixture
    def tracker(self):
        tracker = AsyncMock()
        tracker.record_commute = AsyncMock()
        return tracker

    @pytest.fixture
    def service(self, users, clock, tracker):
        return CommuteService(InMemoryCommuteRepository(), users, tracker, clock=clock)

    @pytest.mark.asyncio
    async def test_new_log_awards_points_and_co2(self, service, users, tracker):
        log, created = await service.log_commute(1, request())

        assert created is True
        assert log.week_start == date(2024, 1, 7)
        assert log.co2_saved_kg == 6
        user = await users.get_user(1)
        assert user.points_total == 100
        assert user.streak_count == 1
        tracker.record_commute.assert_awaited_once_with(1, log)

    @pytest.mark.asyncio
    async def test_week_start_is_normalized_to_sunday(self, service):
        log, _ = await service.log_commute(
            1, request(week_start=datetime(2024, 1, 9, 18, tzinfo=timezone.utc))
        )
        assert log.week_start == date(2024, 1, 7)

    @pytest.mark.asyncio
    async def test_same_week_and_mode_updates_in_place(self, service, users, tracker):
        first, _ = await service.log_commute(1, request(days=3))
        second, created = await service.log_commute(1, request(days=5, distance=12))

        assert created is False
        assert second.id == first.id
        assert second.days_logged == 5
        assert second.distance_km == 12
        assert len(await service.get_logs(1)) == 1
        # Points and challenge progress only for the first write
        assert (await users.get_user(1)).points_total == 100
        assert tracker.record_commute.await_count == 1

    @pytest.mark.asyncio
    async def test_closed_week_cannot_be_amended(self, service, clock):
        await service.log_commute(1, request())
        clock.now = datetime(2024, 1, 15, 9, tzinfo=timezone.utc)

        with pytest.raises(WeekClosedError):
            await service.log_commute(1, request(days=5))

    @pytest.mark.asyncio
    async def test_other_mode_creates_separate_log(self, service):
        await service.log_commute(1, request(CommuteType.CYCLE))
        await service.log_commute(1, request(CommuteType.WALK))
        assert len(await service.get_logs(1)) == 2

    @pytest.mark.asyncio
    async def test_gas_vehicle_awards_nothing(self, service, users):
        log, _ = await service.log_commute(1, request(CommuteType.GAS_VEHICLE, days=5, distance=30))

        assert log.co2_saved_kg == 0
        user = await users.get_user(1)
        assert user.points_total == 0
        assert user.streak_count == 0
        assert await users.get_points_history(1) == []

    @pytest.mark.asyncio
    async def test_tracker_failure_does_not_fail_logging(self, service, tracker):
        tracker.record_commute.side_effect = RuntimeError("boom")

        log, created = await service.log_commute(1, request())

        assert created is True
        assert log.id == 1

    @pytest.mark.asyncio
    async def test_unknown_user(self, service):
        with pytest.raises(UserNotFoundError):
            await service.log_commute(99, request())

    @pytest.mark.asyncio
    async def test_streak_over_consecutive_weeks(self, service, users, clock):
        await service.log_commute(1, request(week_start=datetime(2023, 12, 31, tzinfo=timezone.utc)))
        await service.log_commute(1, request(week_start=datetime(2024, 1, 7, tzinfo=timezone.utc)))

        assert (await users.get_user(1)).streak_count == 2
        assert await service.get_streak(1) == 2

    @pytest.mark.asyncio
    async def test_current_week_logs(self, service):
        await service.log_commute(1, request(week_start=datetime(2023, 12, 31, tzinfo=timezone.utc)))
        await service.log_commute(1, request(CommuteType.WALK))

        current = await service.get_current_week_logs(1)

        assert [log.commute_type for log in current] == [CommuteType.WALK]

    @pytest.mark.asyncio
    async def test_totals_and_breakdown(self, service):
        await service.log_commute(1, request(CommuteType.CYCLE, days=3, distance=10))
        await service.log_commute(1, request(CommuteType.PUBLIC_TRANSPORT, days=1, distance=12))

        assert await service.get_total_co2_saved(1) == 6 + 2
        breakdown = await service.get_breakdown(1)
        assert breakdown.total_days == 4
        assert breakdown.breakdown[0].type == CommuteType.CYCLE

    @pytest.mark.asyncio
    async def test_works_without_tracker(self, users, clock):
        service = CommuteService(InMemoryCommuteRepository(), users, clock=clock)
        _, created = await service.log_commute(1, request())
        assert created is True
