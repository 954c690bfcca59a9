"""
Challenges module exceptions.
"""

from shared.exceptions import AuthorizationError, NotFoundError, ValidationError


class ChallengeNotFoundError(NotFoundError):
    """Raised when a challenge does not exist."""

    def __init__(self, challenge_id: int):
        super().__init__(
            "Challenge not found",
            code="CHALLENGE_NOT_FOUND",
            details={"challenge_id": challenge_id},
        )


class AlreadyParticipatingError(ValidationError):
    """Raised when a user joins a challenge twice."""

    def __init__(self, challenge_id: int, user_id: int):
        super().__init__(
            "User is already participating in this challenge",
            code="ALREADY_PARTICIPATING",
            details={"challenge_id": challenge_id, "user_id": user_id},
        )


class ChallengeAccessDeniedError(AuthorizationError):
    """Raised when an admin changes a challenge of another company."""

    def __init__(self, challenge_id: int):
        super().__init__(
            "You can only manage challenges for your company",
            code="CHALLENGE_ACCESS_DENIED",
            details={"challenge_id": challenge_id},
        )
