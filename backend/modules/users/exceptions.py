"""
Users module exceptions.
"""

from shared.exceptions import AuthenticationError, ConflictError, NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when a user id does not resolve to a stored user."""

    def __init__(self, user_id: int):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class UsernameTakenError(ConflictError):
    """Raised when registering with a username that already exists."""

    def __init__(self, username: str):
        super().__init__(
            "Username already exists",
            code="USERNAME_TAKEN",
            details={"username": username},
        )


class EmailTakenError(ConflictError):
    """Raised when registering with an email that already exists."""

    def __init__(self, email: str):
        super().__init__(
            "Email already exists",
            code="EMAIL_TAKEN",
            details={"email": email},
        )


class InvalidCredentialsError(AuthenticationError):
    """Raised when a username/password pair does not match."""

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")
