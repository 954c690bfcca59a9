"""
Tests for shared models.
"""

import pytest
from pydantic import ValidationError

from shared.models import AuthenticatedUser, UserRole


class TestAuthenticatedUser:
    """Tests for the AuthenticatedUser model in shared."""

    def test_create_with_required_fields(self):
        user = AuthenticatedUser(id=1, username="alex.morgan")
        assert user.id == 1
        assert user.username == "alex.morgan"

    def test_default_values(self):
        user = AuthenticatedUser(id=1, username="alex.morgan")
        assert user.role == UserRole.MEMBER
        assert user.company_id is None
        assert user.is_admin is False

    def test_admin_role(self):
        user = AuthenticatedUser(id=3, username="admin", role="admin", company_id=1)
        assert user.role == UserRole.ADMIN
        assert user.is_admin is True

    def test_ignores_extra_claims(self):
        user = AuthenticatedUser(id=1, username="alex.morgan", exp=123, iat=100)
        assert not hasattr(user, "exp")

    def test_rejects_unknown_role(self):
        with pytest.raises(ValidationError):
            AuthenticatedUser(id=1, username="alex.morgan", role="owner")

    def test_is_frozen(self):
        user = AuthenticatedUser(id=1, username="alex.morgan")
        with pytest.raises(ValidationError):
            user.username = "someone.else"
