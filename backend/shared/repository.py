"""
Base repository classes for data access.

Every repository in the modules comes in two variants sharing one
interface: an in-memory variant keyed by id, and a Supabase variant
backed by a relational table. Both derive from the bases here.
"""

from datetime import datetime, timezone
from typing import TypeVar, Generic, Any

from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for Supabase-backed repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class RewardRepository(BaseRepository[Reward]):
            def get_reward(self, reward_id: int) -> Optional[Reward]:
                result = self._db.table("rewards").select("*").eq("id", reward_id).execute()
                if not result.data:
                    return None
                return Reward.model_validate(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db


class InMemoryRepository(Generic[T]):
    """
    Base class for in-memory repositories.

    Keeps one dict per table and hands out sequential integer ids
    starting at 1, the way a serial primary key would.
    """

    def __init__(self) -> None:
        self._sequences: dict[str, int] = {}

    def _next_id(self, table: str) -> int:
        next_id = self._sequences.get(table, 0) + 1
        self._sequences[table] = next_id
        return next_id

    def _bump_sequence(self, table: str, used_id: int) -> None:
        """Keep the sequence ahead of explicitly inserted ids."""
        if used_id > self._sequences.get(table, 0):
            self._sequences[table] = used_id

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)


def first_row(data: Any) -> dict[str, Any] | None:
    """Return the first row of a Supabase result payload, if any."""
    if not data:
        return None
    return data[0]
