"""
Users service implementation.

Account registration, credential checks, profile updates and the
points ledger. Storage goes through IUserStore, so the same service
runs against the in-memory map or the Supabase tables.
"""

import logging
from typing import Optional

from shared.models import UserRole
from .exceptions import (
    EmailTakenError,
    InvalidCredentialsError,
    UserNotFoundError,
    UsernameTakenError,
)
from .interfaces import IUserStore
from .models import NewUser, PointsTransaction, RegisterRequest, User, UserUpdate
from .passwords import hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService:
    """Business logic on top of a user store."""

    def __init__(self, store: IUserStore):
        self._store = store

    @property
    def store(self) -> IUserStore:
        return self._store

    async def register(
        self,
        request: RegisterRequest,
        role: UserRole = UserRole.MEMBER,
    ) -> User:
        """
        Create an account.

        Raises:
            UsernameTakenError: If the username is in use
            EmailTakenError: If the email is in use
        """
        if self._store.get_user_by_username(request.username):
            raise UsernameTakenError(request.username)
        if self._store.get_user_by_email(request.email):
            raise EmailTakenError(request.email)

        user = self._store.create_user(NewUser(
            username=request.username,
            email=request.email,
            name=request.name,
            password=hash_password(request.password),
            role=role,
            company_id=request.company_id,
        ))
        logger.info(f"Registered user {user.id} ({user.username})")
        return user

    async def authenticate(self, username_or_email: str, password: str) -> User:
        """
        Resolve a login attempt to a user.

        Looks up by username first, then by email when the input
        looks like one.

        Raises:
            InvalidCredentialsError: If no user matches or the password is wrong
        """
        user = self._store.get_user_by_username(username_or_email)
        if user is None and "@" in username_or_email:
            user = self._store.get_user_by_email(username_or_email)

        if user is None or not verify_password(password, user.password):
            raise InvalidCredentialsError()
        return user

    async def get_user(self, user_id: int) -> User:
        """
        Raises:
            UserNotFoundError: If no user has this id
        """
        user = self._store.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def update_user(self, user_id: int, update: UserUpdate) -> User:
        """
        Apply a sparse flag/password update.

        A provided password is hashed here, before it reaches the store,
        so both store variants persist the same value.
        """
        if update.password is not None:
            update = update.model_copy(update={"password": hash_password(update.password)})
        return self._store.update_user(user_id, update)

    async def award_points(self, user_id: int, source: str, points: int) -> PointsTransaction:
        """Record a points change (negative for spending)."""
        transaction = self._store.add_points_transaction(user_id, source, points)
        logger.debug(f"User {user_id}: {points:+d} points from {source!r}")
        return transaction

    async def get_points_history(self, user_id: int) -> list[PointsTransaction]:
        return self._store.get_points_transactions(user_id)

    async def list_users(self, company_id: Optional[int] = None, limit: int = 10) -> list[User]:
        return self._store.list_users(company_id, limit)

    async def set_streak_count(self, user_id: int, streak_count: int) -> User:
        return self._store.set_streak_count(user_id, streak_count)
