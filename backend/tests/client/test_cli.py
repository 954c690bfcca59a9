"""Tests for client/cli.py."""

import pytest

from client.cli import build_parser, run_command
from client.mutations import TrakMutations
from client.notifications import RecordingNotifier
from client.queries import TrakQueries
from client.session import Session, session_scope


def run_args(*argv: str):
    return build_parser().parse_args(list(argv))


class TestParser:
    def test_log_command(self):
        args = run_args("log", "cycle", "--days", "3", "--distance", "8")
        assert args.command == "log"
        assert args.mode == "cycle"
        assert args.days == 3
        assert args.distance == 8.0

    def test_rejects_unknown_mode(self):
        with pytest.raises(SystemExit):
            run_args("log", "jetpack", "--days", "3")

    def test_leaderboard_default_limit(self):
        assert run_args("leaderboard").limit == 10


class TestRunCommand:
    @pytest.fixture
    def wiring(self, app_api, cache):
        session = Session(app_api, cache)
        queries = TrakQueries(app_api, cache)
        notifier = RecordingNotifier()
        mutations = TrakMutations(app_api, cache, notifier)
        return session, queries, mutations, notifier

    @pytest.mark.asyncio
    async def test_requires_login(self, wiring):
        session, queries, mutations, _ = wiring
        with session_scope(session):
            assert await run_command(run_args("stats"), queries, mutations) == 1

    @pytest.mark.asyncio
    async def test_login_then_log_and_read(self, wiring, stored_users):
        session, queries, mutations, notifier = wiring
        with session_scope(session):
            assert await run_command(
                run_args("login", "alex.morgan", "--password", "password123"), queries, mutations
            ) == 0
            assert await run_command(
                run_args("log", "walk", "--days", "2", "--distance", "3"), queries, mutations
            ) == 0
            assert await run_command(run_args("history"), queries, mutations) == 0
            assert await run_command(run_args("leaderboard"), queries, mutations) == 0
            assert await run_command(run_args("whoami"), queries, mutations) == 0

        assert [t.title for t in notifier.toasts] == ["Commute logged successfully!"]
        assert len(await queries.commute_logs(1)) == 1

    @pytest.mark.asyncio
    async def test_logout(self, wiring, stored_users):
        session, queries, mutations, _ = wiring
        with session_scope(session):
            await session.login("alex.morgan", "password123")
            assert await run_command(run_args("logout"), queries, mutations) == 0
        assert session.user is None
