"""
User stores.

Two interchangeable implementations of IUserStore:
- InMemoryUserStore: dict keyed by user id, for development and tests
- SupabaseUserStore: the `users` and `points_transactions` tables
"""

import logging
from typing import Iterable, Optional

from shared.repository import BaseRepository, InMemoryRepository, first_row
from .exceptions import UserNotFoundError
from .models import NewUser, PointsTransaction, User, UserUpdate

logger = logging.getLogger(__name__)


class InMemoryUserStore(InMemoryRepository[User]):
    """User store backed by a dict keyed by user id."""

    def __init__(self, users: Optional[Iterable[User]] = None):
        super().__init__()
        self._users: dict[int, User] = {}
        self._transactions: dict[int, PointsTransaction] = {}
        for user in users or []:
            self.insert_user(user)

    def insert_user(self, user: User) -> User:
        """Store a fully formed user record, keeping its id."""
        self._users[user.id] = user
        self._bump_sequence("users", user.id)
        return user

    def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.username == username), None)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.email == email), None)

    def create_user(self, new_user: NewUser) -> User:
        user = User(
            id=self._next_id("users"),
            points_total=0,
            streak_count=0,
            created_at=self._now(),
            **new_user.model_dump(),
        )
        self._users[user.id] = user
        return user

    def update_user(self, user_id: int, update: UserUpdate) -> User:
        user = self._users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        updated = user.model_copy(update=update.provided_fields())
        self._users[user_id] = updated
        return updated

    def list_users(self, company_id: Optional[int] = None, limit: int = 10) -> list[User]:
        users = list(self._users.values())
        if company_id is not None:
            users = [u for u in users if u.company_id == company_id]
        users.sort(key=lambda u: u.points_total, reverse=True)
        return users[:limit]

    def set_streak_count(self, user_id: int, streak_count: int) -> User:
        user = self._users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        updated = user.model_copy(update={"streak_count": streak_count})
        self._users[user_id] = updated
        return updated

    def add_points_transaction(self, user_id: int, source: str, points: int) -> PointsTransaction:
        user = self._users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        transaction = PointsTransaction(
            id=self._next_id("points_transactions"),
            user_id=user_id,
            source=source,
            points=points,
            created_at=self._now(),
        )
        self._transactions[transaction.id] = transaction
        self._users[user_id] = user.model_copy(
            update={"points_total": user.points_total + points}
        )
        return transaction

    def get_points_transactions(self, user_id: int) -> list[PointsTransaction]:
        transactions = [t for t in self._transactions.values() if t.user_id == user_id]
        return sorted(transactions, key=lambda t: t.id, reverse=True)


class SupabaseUserStore(BaseRepository[User]):
    """
    User store backed by the `users` table.

    Updates are restricted to the fields present in the request and
    return the persisted row, so the result matches what the
    in-memory store produces for the same input.
    """

    def get_user(self, user_id: int) -> Optional[User]:
        result = self._db.table("users").select("*").eq("id", user_id).execute()
        row = first_row(result.data)
        return User.model_validate(row) if row else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        result = self._db.table("users").select("*").eq("username", username).execute()
        row = first_row(result.data)
        return User.model_validate(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        result = self._db.table("users").select("*").eq("email", email).execute()
        row = first_row(result.data)
        return User.model_validate(row) if row else None

    def create_user(self, new_user: NewUser) -> User:
        data = new_user.model_dump(mode="json")
        data.update({"points_total": 0, "streak_count": 0})
        result = self._db.table("users").insert(data).execute()
        return User.model_validate(result.data[0])

    def update_user(self, user_id: int, update: UserUpdate) -> User:
        fields = update.provided_fields()
        if not fields:
            # An empty UPDATE is not valid SQL; a no-op is a read.
            user = self.get_user(user_id)
            if user is None:
                raise UserNotFoundError(user_id)
            return user

        result = self._db.table("users").update(fields).eq("id", user_id).execute()
        row = first_row(result.data)
        if row is None:
            raise UserNotFoundError(user_id)
        return User.model_validate(row)

    def list_users(self, company_id: Optional[int] = None, limit: int = 10) -> list[User]:
        query = self._db.table("users").select("*")
        if company_id is not None:
            query = query.eq("company_id", company_id)
        result = query.order("points_total", desc=True).limit(limit).execute()
        return [User.model_validate(row) for row in result.data]

    def set_streak_count(self, user_id: int, streak_count: int) -> User:
        result = (
            self._db.table("users")
            .update({"streak_count": streak_count})
            .eq("id", user_id)
            .execute()
        )
        row = first_row(result.data)
        if row is None:
            raise UserNotFoundError(user_id)
        return User.model_validate(row)

    def add_points_transaction(self, user_id: int, source: str, points: int) -> PointsTransaction:
        user = self.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        result = self._db.table("points_transactions").insert({
            "user_id": user_id,
            "source": source,
            "points": points,
        }).execute()
        transaction = PointsTransaction.model_validate(result.data[0])

        # TODO: move the total into a Postgres function so the read-modify-write is atomic
        self._db.table("users").update(
            {"points_total": user.points_total + points}
        ).eq("id", user_id).execute()

        logger.debug(f"Recorded {points} points for user {user_id} ({source})")
        return transaction

    def get_points_transactions(self, user_id: int) -> list[PointsTransaction]:
        result = (
            self._db.table("points_transactions")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [PointsTransaction.model_validate(row) for row in result.data]
