"""
Challenge repositories.

Tables:
- challenges
- challenge_participants
"""

from typing import Any, Optional

from shared.repository import BaseRepository, InMemoryRepository, first_row
from .exceptions import ChallengeNotFoundError
from .models import Challenge, ChallengeParticipant, CreateChallengeRequest, UserChallenge


def _visible_to(challenge: Challenge, company_id: Optional[int]) -> bool:
    return company_id is None or challenge.company_id in (company_id, None)


class InMemoryChallengeRepository(InMemoryRepository[Challenge]):
    """Challenges and participants kept in dicts keyed by id."""

    def __init__(self) -> None:
        super().__init__()
        self._challenges: dict[int, Challenge] = {}
        self._participants: dict[int, ChallengeParticipant] = {}

    def create_challenge(
        self,
        request: CreateChallengeRequest,
        company_id: Optional[int],
    ) -> Challenge:
        challenge = Challenge(
            id=self._next_id("challenges"),
            company_id=company_id,
            created_at=self._now(),
            **request.model_dump(),
        )
        self._challenges[challenge.id] = challenge
        return challenge

    def get_challenge(self, challenge_id: int) -> Optional[Challenge]:
        return self._challenges.get(challenge_id)

    def list_challenges(self, company_id: Optional[int] = None) -> list[Challenge]:
        return [c for c in self._challenges.values() if _visible_to(c, company_id)]

    def update_challenge(self, challenge_id: int, fields: dict[str, Any]) -> Challenge:
        challenge = self._challenges.get(challenge_id)
        if challenge is None:
            raise ChallengeNotFoundError(challenge_id)
        updated = Challenge.model_validate({**challenge.model_dump(), **fields})
        self._challenges[challenge_id] = updated
        return updated

    def delete_challenge(self, challenge_id: int) -> bool:
        if self._challenges.pop(challenge_id, None) is None:
            return False
        self._participants = {
            pid: p for pid, p in self._participants.items()
            if p.challenge_id != challenge_id
        }
        return True

    def add_participant(self, challenge_id: int, user_id: int) -> ChallengeParticipant:
        participant = ChallengeParticipant(
            id=self._next_id("challenge_participants"),
            challenge_id=challenge_id,
            user_id=user_id,
            joined_at=self._now(),
        )
        self._participants[participant.id] = participant
        return participant

    def get_user_challenges(self, user_id: int) -> list[UserChallenge]:
        return [
            UserChallenge(challenge=self._challenges[p.challenge_id], participant=p)
            for p in self._participants.values()
            if p.user_id == user_id and p.challenge_id in self._challenges
        ]

    def update_participant(
        self,
        participant_id: int,
        progress: int,
        completed: bool,
    ) -> ChallengeParticipant:
        participant = self._participants[participant_id]
        updated = participant.model_copy(update={"progress": progress, "completed": completed})
        self._participants[participant_id] = updated
        return updated


class SupabaseChallengeRepository(BaseRepository[Challenge]):
    """Challenges in the `challenges` and `challenge_participants` tables."""

    def create_challenge(
        self,
        request: CreateChallengeRequest,
        company_id: Optional[int],
    ) -> Challenge:
        data = request.model_dump(mode="json")
        data["company_id"] = company_id
        result = self._db.table("challenges").insert(data).execute()
        return Challenge.model_validate(result.data[0])

    def get_challenge(self, challenge_id: int) -> Optional[Challenge]:
        result = self._db.table("challenges").select("*").eq("id", challenge_id).execute()
        row = first_row(result.data)
        return Challenge.model_validate(row) if row else None

    def list_challenges(self, company_id: Optional[int] = None) -> list[Challenge]:
        query = self._db.table("challenges").select("*")
        if company_id is not None:
            query = query.or_(f"company_id.eq.{company_id},company_id.is.null")
        result = query.order("start_date").execute()
        return [Challenge.model_validate(row) for row in result.data]

    def update_challenge(self, challenge_id: int, fields: dict[str, Any]) -> Challenge:
        if not fields:
            challenge = self.get_challenge(challenge_id)
            if challenge is None:
                raise ChallengeNotFoundError(challenge_id)
            return challenge

        result = self._db.table("challenges").update(fields).eq("id", challenge_id).execute()
        row = first_row(result.data)
        if row is None:
            raise ChallengeNotFoundError(challenge_id)
        return Challenge.model_validate(row)

    def delete_challenge(self, challenge_id: int) -> bool:
        self._db.table("challenge_participants").delete().eq("challenge_id", challenge_id).execute()
        result = self._db.table("challenges").delete().eq("id", challenge_id).execute()
        return bool(result.data)

    def add_participant(self, challenge_id: int, user_id: int) -> ChallengeParticipant:
        result = self._db.table("challenge_participants").insert({
            "challenge_id": challenge_id,
            "user_id": user_id,
            "progress": 0,
            "completed": False,
        }).execute()
        return ChallengeParticipant.model_validate(result.data[0])

    def get_user_challenges(self, user_id: int) -> list[UserChallenge]:
        participants = (
            self._db.table("challenge_participants")
            .select("*")
            .eq("user_id", user_id)
            .execute()
        )
        if not participants.data:
            return []

        challenge_ids = [row["challenge_id"] for row in participants.data]
        challenges = self._db.table("challenges").select("*").in_("id", challenge_ids).execute()
        by_id = {row["id"]: Challenge.model_validate(row) for row in challenges.data}

        return [
            UserChallenge(
                challenge=by_id[row["challenge_id"]],
                participant=ChallengeParticipant.model_validate(row),
            )
            for row in participants.data
            if row["challenge_id"] in by_id
        ]

    def update_participant(
        self,
        participant_id: int,
        progress: int,
        completed: bool,
    ) -> ChallengeParticipant:
        result = (
            self._db.table("challenge_participants")
            .update({"progress": progress, "completed": completed})
            .eq("id", participant_id)
            .execute()
        )
        return ChallengeParticipant.model_validate(result.data[0])
