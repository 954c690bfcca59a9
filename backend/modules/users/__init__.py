"""
Users module.

Accounts, profile updates and the points ledger, stored through
IUserStore (in-memory or Supabase).
"""

from .exceptions import (
    EmailTakenError,
    InvalidCredentialsError,
    UserNotFoundError,
    UsernameTakenError,
)
from .interfaces import IUserStore
from .models import (
    NewUser,
    PointsTransaction,
    PublicUser,
    RegisterRequest,
    User,
    UserUpdate,
)

__all__ = [
    # Interface
    "IUserStore",
    # Models
    "NewUser",
    "PointsTransaction",
    "PublicUser",
    "RegisterRequest",
    "User",
    "UserUpdate",
    # Exceptions
    "EmailTakenError",
    "InvalidCredentialsError",
    "UserNotFoundError",
    "UsernameTakenError",
]
