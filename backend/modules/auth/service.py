"""
Authentication service implementation.

Issues and validates HS256 session tokens signed with SESSION_SECRET.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt

from shared.config import Settings, get_settings
from shared.models import AuthenticatedUser
from modules.users.models import User

from .interfaces import IAuthService
from .models import SessionClaims
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)

ALGORITHM = "HS256"


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Tokens are self-contained: validating one does not touch storage.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    def issue_token(self, user: User) -> str:
        now = datetime.now(timezone.utc)
        expires = now + timedelta(hours=self._settings.session_ttl_hours)
        claims = SessionClaims(
            sub=str(user.id),
            username=user.username,
            role=user.role,
            company_id=user.company_id,
            iat=int(now.timestamp()),
            exp=int(expires.timestamp()),
        )
        return jwt.encode(
            claims.model_dump(mode="json"),
            self._settings.session_secret,
            algorithm=ALGORITHM,
        )

    def validate_token(self, token: str) -> AuthenticatedUser:
        if not token:
            raise MissingTokenError()

        try:
            payload = jwt.decode(
                token,
                self._settings.session_secret,
                algorithms=[ALGORITHM],
            )
            claims = SessionClaims(**payload)
            return AuthenticatedUser(
                id=int(claims.sub),
                username=claims.username,
                role=claims.role,
                company_id=claims.company_id,
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except (jwt.InvalidTokenError, ValueError) as e:
            raise InvalidTokenError(f"Invalid token: {e}")
