"""
Mutations.

Every write declares the cache keys it makes outdated and the toasts
it shows. On success the keys are invalidated first, then the success
toast is shown, then the caller's callback runs. On failure a
destructive toast carries the extracted error message and the error
is re-raised.
"""

import inspect
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional, Union

from modules.challenges.models import (
    Challenge,
    ChallengeParticipant,
    CreateChallengeRequest,
    UpdateChallengeRequest,
)
from modules.commutes.models import CommuteLog, CommuteType, LogCommuteRequest
from modules.commutes.calculator import local_now, week_start_for
from modules.rewards.models import CreateRewardRequest, RedeemResponse, Reward
from modules.users.models import PublicUser, UserUpdate

from . import queries
from .api import TrakApi
from .cache import QueryCache
from .errors import extract_error_message
from .notifications import Notifier, Toast, ToastVariant
from .queries import query_key

logger = logging.getLogger(__name__)

Message = Union[str, Callable[[Any], str]]
KeysFor = Callable[[int], tuple[str, ...]]


@dataclass(frozen=True)
class MutationSpec:
    """Declared side effects of one mutation."""
    name: str
    invalidates: KeysFor
    success_title: str
    success_message: Message
    failure_title: str


def _keys(*paths: str) -> KeysFor:
    def keys_for(user_id: int) -> tuple[str, ...]:
        return tuple(query_key(path, user_id) for path in paths)
    return keys_for


LOG_COMMUTE = MutationSpec(
    name="log_commute",
    invalidates=_keys(queries.CURRENT_COMMUTES, queries.USER_STATS, queries.USER_CHALLENGES),
    success_title="Commute logged successfully!",
    success_message="Your sustainable commute has been recorded.",
    failure_title="Failed to log commute",
)

JOIN_CHALLENGE = MutationSpec(
    name="join_challenge",
    invalidates=_keys(queries.USER_CHALLENGES),
    success_title="Challenge joined!",
    success_message="You've successfully joined the challenge. Good luck!",
    failure_title="Failed to join challenge",
)

CREATE_CHALLENGE = MutationSpec(
    name="create_challenge",
    invalidates=_keys(queries.CHALLENGES),
    success_title="Challenge created!",
    success_message="Your new challenge is now available for participants.",
    failure_title="Failed to create challenge",
)

UPDATE_CHALLENGE = MutationSpec(
    name="update_challenge",
    invalidates=_keys(queries.CHALLENGES, queries.USER_CHALLENGES),
    success_title="Challenge updated!",
    success_message="Your challenge has been successfully updated.",
    failure_title="Failed to update challenge",
)

DELETE_CHALLENGE = MutationSpec(
    name="delete_challenge",
    invalidates=_keys(queries.CHALLENGES, queries.USER_CHALLENGES),
    success_title="Challenge deleted!",
    success_message="The challenge has been successfully deleted.",
    failure_title="Failed to delete challenge",
)

REDEEM_REWARD = MutationSpec(
    name="redeem_reward",
    invalidates=_keys(queries.USER_REDEMPTIONS, queries.USER_PROFILE, queries.USER_STATS),
    success_title="Reward redeemed!",
    success_message=lambda result: f"You've successfully redeemed: {result.reward.title}",
    failure_title="Failed to redeem reward",
)

CREATE_REWARD = MutationSpec(
    name="create_reward",
    invalidates=_keys(queries.REWARDS),
    success_title="Reward created!",
    success_message="Your new reward is now available for redemption.",
    failure_title="Failed to create reward",
)

UPDATE_USER = MutationSpec(
    name="update_user",
    invalidates=_keys(queries.USER_PROFILE),
    success_title="Profile updated!",
    success_message="Your changes have been saved.",
    failure_title="Failed to update profile",
)


async def run_mutation(
    spec: MutationSpec,
    user_id: int,
    request: Callable[[], Awaitable[Any]],
    cache: QueryCache,
    notifier: Notifier,
    on_success: Optional[Callable[[Any], Any]] = None,
) -> Any:
    """Run a write with the side effects declared by `spec`."""
    try:
        result = await request()
    except Exception as e:
        logger.warning(f"Mutation {spec.name} failed: {e}")
        notifier.notify(Toast(
            title=spec.failure_title,
            description=extract_error_message(e),
            variant=ToastVariant.DESTRUCTIVE,
        ))
        raise

    for key in spec.invalidates(user_id):
        cache.invalidate(key)

    message = spec.success_message
    notifier.notify(Toast(
        title=spec.success_title,
        description=message(result) if callable(message) else message,
    ))

    if on_success is not None:
        outcome = on_success(result)
        if inspect.isawaitable(outcome):
            await outcome
    return result


class TrakMutations:
    """Writes against the Trak API, acting on behalf of `user_id`."""

    def __init__(
        self,
        api: TrakApi,
        cache: QueryCache,
        notifier: Notifier,
        clock: Callable[[], datetime] = local_now,
    ):
        self._api = api
        self._cache = cache
        self._notifier = notifier
        self._clock = clock

    async def _run(
        self,
        spec: MutationSpec,
        user_id: int,
        request: Callable[[], Awaitable[Any]],
        on_success: Optional[Callable[[Any], Any]],
    ) -> Any:
        return await run_mutation(spec, user_id, request, self._cache, self._notifier, on_success)

    async def log_commute(
        self,
        user_id: int,
        commute_type: CommuteType,
        days_logged: int,
        distance_km: float,
        on_success: Optional[Callable[[CommuteLog], Any]] = None,
    ) -> CommuteLog:
        """Log this week's commuting in one mode; the week starts on local Sunday."""
        payload = LogCommuteRequest(
            commute_type=commute_type,
            days_logged=days_logged,
            distance_km=distance_km,
            week_start=week_start_for(self._clock()),
        )

        async def request() -> CommuteLog:
            return await self._api.send(
                "POST", queries.COMMUTES, CommuteLog,
                params={"userId": user_id},
                json=payload.model_dump(mode="json"),
            )

        return await self._run(LOG_COMMUTE, user_id, request, on_success)

    async def join_challenge(
        self,
        user_id: int,
        challenge_id: int,
        on_success: Optional[Callable[[ChallengeParticipant], Any]] = None,
    ) -> ChallengeParticipant:
        async def request() -> ChallengeParticipant:
            return await self._api.send(
                "POST", f"{queries.CHALLENGES}/{challenge_id}/join", ChallengeParticipant,
                params={"userId": user_id},
            )

        return await self._run(JOIN_CHALLENGE, user_id, request, on_success)

    async def create_challenge(
        self,
        user_id: int,
        challenge: CreateChallengeRequest,
        on_success: Optional[Callable[[Challenge], Any]] = None,
    ) -> Challenge:
        async def request() -> Challenge:
            return await self._api.send(
                "POST", queries.CHALLENGES, Challenge,
                params={"userId": user_id},
                json=challenge.model_dump(mode="json"),
            )

        return await self._run(CREATE_CHALLENGE, user_id, request, on_success)

    async def update_challenge(
        self,
        user_id: int,
        challenge_id: int,
        update: UpdateChallengeRequest,
        on_success: Optional[Callable[[Challenge], Any]] = None,
    ) -> Challenge:
        async def request() -> Challenge:
            return await self._api.send(
                "PUT", f"{queries.CHALLENGES}/{challenge_id}", Challenge,
                params={"userId": user_id},
                json=update.provided_fields(),
            )

        return await self._run(UPDATE_CHALLENGE, user_id, request, on_success)

    async def delete_challenge(
        self,
        user_id: int,
        challenge_id: int,
        on_success: Optional[Callable[[None], Any]] = None,
    ) -> None:
        async def request() -> None:
            await self._api.send(
                "DELETE", f"{queries.CHALLENGES}/{challenge_id}",
                params={"userId": user_id},
            )

        return await self._run(DELETE_CHALLENGE, user_id, request, on_success)

    async def redeem_reward(
        self,
        user_id: int,
        reward_id: int,
        on_success: Optional[Callable[[RedeemResponse], Any]] = None,
    ) -> RedeemResponse:
        async def request() -> RedeemResponse:
            return await self._api.send(
                "POST", f"{queries.REWARDS}/{reward_id}/redeem", RedeemResponse,
                params={"userId": user_id},
            )

        return await self._run(REDEEM_REWARD, user_id, request, on_success)

    async def create_reward(
        self,
        user_id: int,
        reward: CreateRewardRequest,
        on_success: Optional[Callable[[Reward], Any]] = None,
    ) -> Reward:
        async def request() -> Reward:
            return await self._api.send(
                "POST", queries.REWARDS, Reward,
                params={"userId": user_id},
                json=reward.model_dump(mode="json"),
            )

        return await self._run(CREATE_REWARD, user_id, request, on_success)

    async def update_user(
        self,
        user_id: int,
        update: UserUpdate,
        on_success: Optional[Callable[[PublicUser], Any]] = None,
    ) -> PublicUser:
        async def request() -> PublicUser:
            return await self._api.send(
                "PATCH", queries.USER_PROFILE, PublicUser,
                params={"userId": user_id},
                json=update.provided_fields(),
            )

        return await self._run(UPDATE_USER, user_id, request, on_success)
