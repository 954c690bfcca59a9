"""
Authentication module.

Issues and validates session tokens and exposes the register,
login and logout endpoints.

Public API:
- IAuthService: Interface for token operations
- SessionClaims: Decoded token payload
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService
from .models import LoginRequest, LoginResponse, LogoutResponse, SessionClaims
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InsufficientPermissionsError,
    ForeignUserAccessError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "LoginRequest",
    "LoginResponse",
    "LogoutResponse",
    "SessionClaims",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InsufficientPermissionsError",
    "ForeignUserAccessError",
]
