"""Tests for client/mutations.py."""

import json
from datetime import datetime, timezone

import pytest

from client.errors import ApiRequestError
from client.mutations import LOG_COMMUTE, REDEEM_REWARD, TrakMutations, run_mutation
from client.notifications import RecordingNotifier, ToastVariant
from client.queries import COMMUTES, CURRENT_COMMUTES, USER_CHALLENGES, USER_STATS, query_key
from modules.commutes.models import CommuteType
from tests.client.conftest import FakeServer, fake_api


class TestRunMutation:
    @pytest.mark.asyncio
    async def test_invalidate_then_notify_then_callback(self, cache):
        for path in (CURRENT_COMMUTES, USER_STATS, USER_CHALLENGES):
            cache.set_data(query_key(path, 1), "cached")
        notifier = RecordingNotifier()
        seen = []

        async def request():
            return "log"

        def on_success(result):
            seen.append((
                result,
                cache.is_stale(query_key(USER_STATS, 1)),
                len(notifier.toasts),
            ))

        result = await run_mutation(LOG_COMMUTE, 1, request, cache, notifier, on_success)

        assert result == "log"
        assert seen == [("log", True, 1)]
        assert all(cache.is_stale(query_key(p, 1)) for p in (CURRENT_COMMUTES, USER_STATS, USER_CHALLENGES))
        [toast] = notifier.toasts
        assert toast.title == "Commute logged successfully!"
        assert toast.variant is ToastVariant.DEFAULT

    @pytest.mark.asyncio
    async def test_async_callback_is_awaited(self, cache):
        done = []

        async def request():
            return 1

        async def on_success(result):
            done.append(result)

        await run_mutation(LOG_COMMUTE, 1, request, cache, RecordingNotifier(), on_success)

        assert done == [1]

    @pytest.mark.asyncio
    async def test_failure_toasts_and_reraises(self, cache):
        cache.set_data(query_key(USER_STATS, 1), "cached")
        notifier = RecordingNotifier()
        called = []

        async def request():
            raise ApiRequestError(400, json.dumps({"message": "Not enough points", "pointsNeeded": 80}))

        with pytest.raises(ApiRequestError):
            await run_mutation(REDEEM_REWARD, 1, request, cache, notifier, called.append)

        assert called == []
        assert not cache.is_stale(query_key(USER_STATS, 1))
        [toast] = notifier.toasts
        assert toast.title == "Failed to redeem reward"
        assert toast.description == "You need 80 more points to redeem this reward."
        assert toast.variant is ToastVariant.DESTRUCTIVE

    @pytest.mark.asyncio
    async def test_message_from_result(self, cache):
        class Result:
            class reward:
                title = "Free Coffee Voucher"

        notifier = RecordingNotifier()

        async def request():
            return Result()

        await run_mutation(REDEEM_REWARD, 1, request, cache, notifier)

        assert notifier.toasts[0].description == "You've successfully redeemed: Free Coffee Voucher"


class TestTrakMutations:
    @pytest.mark.asyncio
    async def test_log_commute_sends_week_start_sunday(self, cache):
        log = {
            "id": 1,
            "user_id": 1,
            "week_start": "2024-01-07",
            "commute_type": "cycle",
            "days_logged": 3,
            "distance_km": 8,
            "co2_saved_kg": 5,
            "created_at": "2024-01-10T12:00:00Z",
        }
        server = FakeServer({("POST", COMMUTES): (201, log)})
        notifier = RecordingNotifier()
        mutations = TrakMutations(
            fake_api(server), cache, notifier,
            clock=lambda: datetime(2024, 1, 10, 12, tzinfo=timezone.utc),
        )

        result = await mutations.log_commute(1, CommuteType.CYCLE, 3, 8)

        assert result.id == 1
        [request] = server.calls
        body = json.loads(request.content)
        assert body["week_start"] == "2024-01-07T00:00:00Z"
        assert body["commute_type"] == "cycle"
        assert request.url.params["userId"] == "1"

    @pytest.mark.asyncio
    async def test_logging_makes_dependent_reads_stale(self, app_api, cache, stored_users):
        from client.session import Session
        from client.queries import TrakQueries

        session = Session(app_api, cache)
        user = await session.login("alex.morgan", "password123")
        queries = TrakQueries(app_api, cache)
        before = await queries.user_stats(user.id)
        await queries.current_week_commutes(user.id)

        notifier = RecordingNotifier()
        await TrakMutations(app_api, cache, notifier).log_commute(user.id, CommuteType.CYCLE, 3, 8)

        assert cache.is_stale(query_key(USER_STATS, user.id))
        assert cache.is_stale(query_key(CURRENT_COMMUTES, user.id))
        after = await queries.user_stats(user.id)
        assert after.points == before.points + 100
        assert len(await queries.current_week_commutes(user.id)) == 1
        assert notifier.toasts[0].title == "Commute logged successfully!"

    @pytest.mark.asyncio
    async def test_redeem_failure_over_http(self, app_api, cache, stored_users):
        from client.session import Session

        await Session(app_api, cache).login("alex.morgan", "password123")
        notifier = RecordingNotifier()

        with pytest.raises(ApiRequestError) as exc_info:
            await TrakMutations(app_api, cache, notifier).redeem_reward(1, 42)

        assert exc_info.value.status == 404
        assert notifier.toasts[0].description == "Reward not found"
