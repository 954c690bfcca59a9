import pytest
import jwt
from datetime import datetime, timedelta, timezone

from modules.auth.service import AuthService
from modules.auth.exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)
from shared.config import Settings
from shared.models import UserRole
from tests.conftest import TEST_SESSION_SECRET, create_test_token, make_user


class TestAuthService:
    @pytest.fixture
    def service(self):
        return AuthService(Settings(session_secret=TEST_SESSION_SECRET, session_ttl_hours=2))

    def test_issue_and_validate_round_trip(self, service):
        """A freshly issued token should resolve to the same user."""
        user = make_user(user_id=7, username="emma", company_id=2)

        caller = service.validate_token(service.issue_token(user))

        assert caller.id == 7
        assert caller.username == "emma"
        assert caller.role == UserRole.MEMBER
        assert caller.company_id == 2

    def test_issued_token_expires_after_ttl(self, service):
        token = service.issue_token(make_user())
        payload = jwt.decode(token, TEST_SESSION_SECRET, algorithms=["HS256"])

        assert payload["sub"] == "1"
        assert payload["exp"] - payload["iat"] == 2 * 3600

    def test_validate_admin_token(self, service):
        caller = service.validate_token(create_test_token(user_id=3, username="admin", role="admin"))
        assert caller.is_admin is True

    def test_validate_expired_token(self, service):
        """Should raise ExpiredTokenError for expired token."""
        with pytest.raises(ExpiredTokenError):
            service.validate_token(create_test_token(expired=True))

    def test_validate_invalid_token(self, service):
        """Should raise InvalidTokenError for malformed token."""
        with pytest.raises(InvalidTokenError):
            service.validate_token("not-a-valid-token")

    def test_validate_token_with_wrong_secret(self, service):
        with pytest.raises(InvalidTokenError):
            service.validate_token(create_test_token(secret="another-secret"))

    def test_validate_token_with_non_numeric_subject(self, service):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {
                "sub": "user-123",
                "username": "alex.morgan",
                "exp": int((now + timedelta(hours=1)).timestamp()),
                "iat": int(now.timestamp()),
            },
            TEST_SESSION_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            service.validate_token(token)

    def test_validate_missing_token(self, service):
        """Should raise MissingTokenError for empty token."""
        with pytest.raises(MissingTokenError):
            service.validate_token("")

    def test_validate_none_token(self, service):
        """Should raise MissingTokenError for None token."""
        with pytest.raises(MissingTokenError):
            service.validate_token(None)

    def test_defaults_to_global_settings(self):
        service = AuthService()
        caller = service.validate_token(create_test_token())
        assert caller.id == 1
