"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its storage through an interface,
and the container picks the in-memory or the Supabase variant once,
from Settings.storage_backend.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.challenges.interfaces import IChallengeRepository
    from modules.challenges.service import ChallengeService
    from modules.commutes.interfaces import ICommuteRepository
    from modules.commutes.service import CommuteService
    from modules.leaderboard.service import LeaderboardService
    from modules.rewards.interfaces import IRewardRepository
    from modules.rewards.service import RewardService
    from modules.users.interfaces import IUserStore
    from modules.users.service import UserService


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._user_store: "IUserStore | None" = None
        self._commute_repository: "ICommuteRepository | None" = None
        self._challenge_repository: "IChallengeRepository | None" = None
        self._reward_repository: "IRewardRepository | None" = None
        self._auth_service: "IAuthService | None" = None
        self._user_service: "UserService | None" = None
        self._commute_service: "CommuteService | None" = None
        self._challenge_service: "ChallengeService | None" = None
        self._reward_service: "RewardService | None" = None
        self._leaderboard_service: "LeaderboardService | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def uses_supabase(self) -> bool:
        return self.settings.storage_backend == "supabase"

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    @property
    def user_store(self) -> "IUserStore":
        """Get the user store for the configured backend."""
        if self._user_store is None:
            if self.uses_supabase:
                from modules.users.store import SupabaseUserStore
                from shared.database import get_supabase_client
                self._user_store = SupabaseUserStore(get_supabase_client())
            else:
                from modules.users.store import InMemoryUserStore
                self._user_store = InMemoryUserStore()
        return self._user_store

    @property
    def commute_repository(self) -> "ICommuteRepository":
        if self._commute_repository is None:
            if self.uses_supabase:
                from modules.commutes.repository import SupabaseCommuteRepository
                from shared.database import get_supabase_client
                self._commute_repository = SupabaseCommuteRepository(get_supabase_client())
            else:
                from modules.commutes.repository import InMemoryCommuteRepository
                self._commute_repository = InMemoryCommuteRepository()
        return self._commute_repository

    @property
    def challenge_repository(self) -> "IChallengeRepository":
        if self._challenge_repository is None:
            if self.uses_supabase:
                from modules.challenges.repository import SupabaseChallengeRepository
                from shared.database import get_supabase_client
                self._challenge_repository = SupabaseChallengeRepository(get_supabase_client())
            else:
                from modules.challenges.repository import InMemoryChallengeRepository
                self._challenge_repository = InMemoryChallengeRepository()
        return self._challenge_repository

    @property
    def reward_repository(self) -> "IRewardRepository":
        if self._reward_repository is None:
            if self.uses_supabase:
                from modules.rewards.repository import SupabaseRewardRepository
                from shared.database import get_supabase_client
                self._reward_repository = SupabaseRewardRepository(get_supabase_client())
            else:
                from modules.rewards.repository import InMemoryRewardRepository
                self._reward_repository = InMemoryRewardRepository()
        return self._reward_repository

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(self.settings)
        return self._auth_service

    @property
    def users(self) -> "UserService":
        if self._user_service is None:
            from modules.users.service import UserService
            self._user_service = UserService(self.user_store)
        return self._user_service

    @property
    def challenges(self) -> "ChallengeService":
        if self._challenge_service is None:
            from modules.challenges.service import ChallengeService
            self._challenge_service = ChallengeService(
                repository=self.challenge_repository,
                users=self.users,
            )
        return self._challenge_service

    @property
    def commutes(self) -> "CommuteService":
        if self._commute_service is None:
            from modules.commutes.service import CommuteService
            self._commute_service = CommuteService(
                repository=self.commute_repository,
                users=self.users,
                challenges=self.challenges,
            )
        return self._commute_service

    @property
    def rewards(self) -> "RewardService":
        if self._reward_service is None:
            from modules.rewards.service import RewardService
            self._reward_service = RewardService(
                repository=self.reward_repository,
                users=self.users,
            )
        return self._reward_service

    @property
    def leaderboard(self) -> "LeaderboardService":
        if self._leaderboard_service is None:
            from modules.leaderboard.service import LeaderboardService
            self._leaderboard_service = LeaderboardService(
                users=self.users,
                commutes=self.commutes,
                challenges=self.challenges,
            )
        return self._leaderboard_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._user_store = None
        self._commute_repository = None
        self._challenge_repository = None
        self._reward_repository = None
        self._auth_service = None
        self._user_service = None
        self._commute_service = None
        self._challenge_service = None
        self._reward_service = None
        self._leaderboard_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_user_service() -> "UserService":
    """FastAPI dependency for users service."""
    return get_container().users


def get_commute_service() -> "CommuteService":
    """FastAPI dependency for commutes service."""
    return get_container().commutes


def get_challenge_service() -> "ChallengeService":
    """FastAPI dependency for challenges service."""
    return get_container().challenges


def get_reward_service() -> "RewardService":
    """FastAPI dependency for rewards service."""
    return get_container().rewards


def get_leaderboard_service() -> "LeaderboardService":
    """FastAPI dependency for leaderboard service."""
    return get_container().leaderboard
