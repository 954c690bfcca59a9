"""
Challenges service implementation.

Admins manage challenges for their own company; members join them and
advance through logged commutes.
"""

import logging
from typing import Optional

from modules.commutes.models import CommuteLog
from modules.users.service import UserService
from shared.models import AuthenticatedUser
from .exceptions import (
    AlreadyParticipatingError,
    ChallengeAccessDeniedError,
    ChallengeNotFoundError,
)
from .interfaces import IChallengeRepository
from .models import (
    Challenge,
    ChallengeParticipant,
    CreateChallengeRequest,
    UpdateChallengeRequest,
    UserChallenge,
)
from .progress import advance_challenge_progress

logger = logging.getLogger(__name__)


class ChallengeService:
    """Challenge management, participation and progress."""

    def __init__(self, repository: IChallengeRepository, users: UserService):
        self._repository = repository
        self._users = users

    async def list_challenges(self, company_id: Optional[int] = None) -> list[Challenge]:
        return self._repository.list_challenges(company_id)

    async def get_challenge(self, challenge_id: int) -> Challenge:
        challenge = self._repository.get_challenge(challenge_id)
        if challenge is None:
            raise ChallengeNotFoundError(challenge_id)
        return challenge

    async def create_challenge(
        self,
        admin: AuthenticatedUser,
        request: CreateChallengeRequest,
    ) -> Challenge:
        """Create a challenge scoped to the admin's company."""
        challenge = self._repository.create_challenge(request, admin.company_id)
        logger.info(f"Admin {admin.id} created challenge {challenge.id}: {challenge.title!r}")
        return challenge

    async def _get_owned_challenge(self, admin: AuthenticatedUser, challenge_id: int) -> Challenge:
        challenge = await self.get_challenge(challenge_id)
        if challenge.company_id != admin.company_id:
            raise ChallengeAccessDeniedError(challenge_id)
        return challenge

    async def update_challenge(
        self,
        admin: AuthenticatedUser,
        challenge_id: int,
        request: UpdateChallengeRequest,
    ) -> Challenge:
        """
        Raises:
            ChallengeNotFoundError: If the challenge does not exist
            ChallengeAccessDeniedError: If it belongs to another company
        """
        await self._get_owned_challenge(admin, challenge_id)
        return self._repository.update_challenge(challenge_id, request.provided_fields())

    async def delete_challenge(self, admin: AuthenticatedUser, challenge_id: int) -> None:
        await self._get_owned_challenge(admin, challenge_id)
        if not self._repository.delete_challenge(challenge_id):
            raise ChallengeNotFoundError(challenge_id)
        logger.info(f"Admin {admin.id} deleted challenge {challenge_id}")

    async def join_challenge(self, user_id: int, challenge_id: int) -> ChallengeParticipant:
        """
        Raises:
            ChallengeNotFoundError: If the challenge does not exist
            AlreadyParticipatingError: If the user already joined it
        """
        await self.get_challenge(challenge_id)

        joined = self._repository.get_user_challenges(user_id)
        if any(uc.challenge.id == challenge_id for uc in joined):
            raise AlreadyParticipatingError(challenge_id, user_id)

        participant = self._repository.add_participant(challenge_id, user_id)
        logger.info(f"User {user_id} joined challenge {challenge_id}")
        return participant

    async def get_user_challenges(self, user_id: int) -> list[UserChallenge]:
        return self._repository.get_user_challenges(user_id)

    async def count_completed(self, user_id: int) -> int:
        return sum(1 for uc in self._repository.get_user_challenges(user_id) if uc.participant.completed)

    async def record_commute(self, user_id: int, log: CommuteLog) -> None:
        """Advance every open participation the log contributes to."""
        for user_challenge in self._repository.get_user_challenges(user_id):
            challenge = user_challenge.challenge
            advanced = advance_challenge_progress(challenge, user_challenge.participant, log)
            if advanced is None:
                continue

            self._repository.update_participant(advanced.id, advanced.progress, advanced.completed)

            if advanced.completed:
                logger.info(f"User {user_id} completed challenge {challenge.id}")
                if challenge.points_reward > 0:
                    await self._users.award_points(
                        user_id,
                        f"Completed challenge: {challenge.title}",
                        challenge.points_reward,
                    )
