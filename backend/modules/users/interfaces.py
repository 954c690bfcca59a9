"""
Users module interface.

Other modules should depend on IUserStore, not on a concrete backend.
The container picks the in-memory or the Supabase variant from
configuration; call sites never branch on the backend.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import NewUser, PointsTransaction, User, UserUpdate


@runtime_checkable
class IUserStore(Protocol):
    """
    Interface for user persistence.

    Both variants must return observably identical records for
    identical inputs.
    """

    def get_user(self, user_id: int) -> Optional[User]:
        """Get a user by id, or None."""
        ...

    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get a user by username, or None."""
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get a user by email, or None."""
        ...

    def create_user(self, new_user: NewUser) -> User:
        """Insert a user with zero points and no streak."""
        ...

    def update_user(self, user_id: int, update: UserUpdate) -> User:
        """
        Apply a sparse update and return the merged record.

        Only fields provided in `update` are overwritten. An empty
        update returns the stored record unchanged.

        Raises:
            UserNotFoundError: If no user has this id
        """
        ...

    def list_users(self, company_id: Optional[int] = None, limit: int = 10) -> list[User]:
        """List users ordered by points, highest first."""
        ...

    def set_streak_count(self, user_id: int, streak_count: int) -> User:
        """Store a recomputed streak.

        Raises:
            UserNotFoundError: If no user has this id
        """
        ...

    def add_points_transaction(self, user_id: int, source: str, points: int) -> PointsTransaction:
        """
        Record a points change and apply it to the user's total.

        Raises:
            UserNotFoundError: If no user has this id
        """
        ...

    def get_points_transactions(self, user_id: int) -> list[PointsTransaction]:
        """List a user's points changes, most recent first."""
        ...
