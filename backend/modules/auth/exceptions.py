"""
Authentication module exceptions.

These exceptions are raised by the auth module and are turned into
HTTP responses by the API error handler.
"""

from shared.exceptions import AuthenticationError, AuthorizationError


class InvalidTokenError(AuthenticationError):
    """Raised when a session token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a session token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no session token is provided."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, code="MISSING_TOKEN")


class InsufficientPermissionsError(AuthorizationError):
    """Raised when user lacks required permissions."""

    def __init__(self, required_role: str, user_role: str):
        super().__init__(
            f"Insufficient permissions. Required: {required_role}, has: {user_role}",
            code="INSUFFICIENT_PERMISSIONS",
            details={"required_role": required_role, "user_role": user_role},
        )


class ForeignUserAccessError(AuthorizationError):
    """Raised when a member targets another user's data."""

    def __init__(self, user_id: int, target_user_id: int):
        super().__init__(
            "You can only access your own data",
            code="FOREIGN_USER_ACCESS",
            details={"user_id": user_id, "target_user_id": target_user_id},
        )
