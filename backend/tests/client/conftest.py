"""
Client SDK fixtures.

`app_api` talks to a real app in-process through httpx.ASGITransport;
`FakeServer` is a scripted httpx.MockTransport handler that records calls.
"""

import httpx
import pytest

from client.api import TrakApi
from client.cache import QueryCache
from client.config import ClientSettings
from client.hints import MemoryHintStore


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeServer:
    """Answers (method, path) with canned (status, json) pairs."""

    def __init__(self, routes: dict[tuple[str, str], tuple[int, object]]):
        self.routes = routes
        self.calls: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        status, body = self.routes.get((request.method, request.url.path), (404, {"message": "Not found"}))
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    def count(self, method: str, path: str) -> int:
        return sum(1 for r in self.calls if r.method == method and r.url.path == path)


def settings() -> ClientSettings:
    return ClientSettings(api_base_url="http://testserver", stale_time_seconds=60)


def fake_api(server: FakeServer, token: str | None = "token") -> TrakApi:
    return TrakApi(settings(), MemoryHintStore(token), transport=httpx.MockTransport(server))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> QueryCache:
    return QueryCache(stale_time=60, clock=clock)


@pytest.fixture
def app_api() -> TrakApi:
    from api.app import create_app

    transport = httpx.ASGITransport(app=create_app())
    return TrakApi(settings(), MemoryHintStore(), transport=transport)


def profile_json(user_id: int = 1, username: str = "alex.morgan", points: int = 300) -> dict:
    return {
        "id": user_id,
        "username": username,
        "email": f"{username}@ecocorp.com",
        "name": "Alex Morgan",
        "role": "member",
        "company_id": 1,
        "is_new_user": False,
        "needs_password_change": False,
        "points_total": points,
        "streak_count": 0,
        "created_at": "2024-01-01T00:00:00Z",
    }
