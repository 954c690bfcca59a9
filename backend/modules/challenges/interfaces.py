"""
Challenges module interfaces.
"""

from typing import Any, Protocol, Optional, runtime_checkable

from .models import Challenge, ChallengeParticipant, CreateChallengeRequest, UserChallenge


@runtime_checkable
class IChallengeRepository(Protocol):
    """Persistence for challenges and their participants."""

    def create_challenge(
        self,
        request: CreateChallengeRequest,
        company_id: Optional[int],
    ) -> Challenge:
        ...

    def get_challenge(self, challenge_id: int) -> Optional[Challenge]:
        ...

    def list_challenges(self, company_id: Optional[int] = None) -> list[Challenge]:
        """
        Challenges visible to a company: its own plus global ones.

        With no company, every challenge.
        """
        ...

    def update_challenge(self, challenge_id: int, fields: dict[str, Any]) -> Challenge:
        """
        Raises:
            ChallengeNotFoundError: If the challenge does not exist
        """
        ...

    def delete_challenge(self, challenge_id: int) -> bool:
        """Delete a challenge and its participants. False if it did not exist."""
        ...

    def add_participant(self, challenge_id: int, user_id: int) -> ChallengeParticipant:
        ...

    def get_user_challenges(self, user_id: int) -> list[UserChallenge]:
        ...

    def update_participant(
        self,
        participant_id: int,
        progress: int,
        completed: bool,
    ) -> ChallengeParticipant:
        ...
