"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
import jwt  # PyJWT

from api.dependencies import reset_container
from modules.users.models import User
from modules.users.passwords import hash_password
from shared.config import get_settings
from shared.database import reset_client_cache
from shared.models import UserRole


# Test session secret (only for testing)
TEST_SESSION_SECRET = "test-session-secret-for-testing-only"
TEST_PASSWORD = "password123"
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)


def make_user(
    user_id: int = 1,
    username: str = "alex.morgan",
    name: str = "Alex Morgan",
    role: UserRole = UserRole.MEMBER,
    company_id: int | None = 1,
    points_total: int = 0,
    streak_count: int = 0,
    **overrides,
) -> User:
    """Build a stored user record with the test password."""
    data = {
        "id": user_id,
        "username": username,
        "email": f"{username}@ecocorp.com",
        "name": name,
        "role": role,
        "company_id": company_id,
        "points_total": points_total,
        "streak_count": streak_count,
        "password": TEST_PASSWORD_HASH,
        "created_at": datetime.now(timezone.utc),
    }
    data.update(overrides)
    return User(**data)


def create_test_token(
    user_id: int = 1,
    username: str = "alex.morgan",
    role: str = "member",
    company_id: int | None = 1,
    expired: bool = False,
    secret: str = TEST_SESSION_SECRET,
) -> str:
    """
    Create a session token for authentication.

    Args:
        user_id: User ID to put in `sub`
        username: Username claim
        role: Role claim ("member" or "admin")
        company_id: Company claim
        expired: If True, creates an expired token
        secret: Signing secret

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": str(user_id),
        "username": username,
        "role": role,
        "company_id": company_id,
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture(autouse=True)
def test_environment(monkeypatch):
    """Run every test against fresh in-memory storage and the test secret."""
    monkeypatch.setenv("SESSION_SECRET", TEST_SESSION_SECRET)
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("SEED_DEMO_DATA", "false")
    get_settings.cache_clear()
    reset_container()
    reset_client_cache()
    yield
    get_settings.cache_clear()
    reset_container()


@pytest.fixture
def member() -> User:
    return make_user()


@pytest.fixture
def admin() -> User:
    return make_user(user_id=3, username="admin", name="Eco Admin", role=UserRole.ADMIN)


@pytest.fixture
def auth_token() -> str:
    """Create a valid member token for testing."""
    return create_test_token()


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid member token."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    token = create_test_token(user_id=3, username="admin", role="admin")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client():
    """Test client over a freshly built app."""
    from fastapi.testclient import TestClient
    from api.app import create_app

    return TestClient(create_app())


@pytest.fixture
def container():
    from api.dependencies import get_container

    return get_container()


@pytest.fixture
def stored_users(container) -> dict[str, User]:
    """
    Users of the in-memory store behind the API.

    Company 1: alex.morgan (1), daniel (2), admin (3). Company 2: outsider (4).
    """
    users = {
        "alex": make_user(user_id=1, username="alex.morgan", points_total=300),
        "daniel": make_user(user_id=2, username="daniel", name="Daniel", points_total=1250),
        "admin": make_user(user_id=3, username="admin", name="Eco Admin", role=UserRole.ADMIN),
        "outsider": make_user(user_id=4, username="outsider", name="Outsider", company_id=2),
    }
    for user in users.values():
        container.user_store.insert_user(user)
    return users
