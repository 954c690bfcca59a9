"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthenticatedUser
from modules.users.models import User


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for session token operations.
    """

    def issue_token(self, user: User) -> str:
        """
        Create a signed session token for a user.

        Args:
            user: The user that just logged in or registered

        Returns:
            Encoded token, used both as cookie value and bearer token
        """
        ...

    def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a session token and return the caller.

        Raises:
            MissingTokenError: If token is empty
            ExpiredTokenError: If token has expired
            InvalidTokenError: If token is malformed or badly signed
        """
        ...
