"""
Client session.

A Session owns who is logged in. Its lifecycle:
- start(): one profile fetch decides between a user and "logged out"
- login()/register(): store the returned token and user
- logout(): always resets the cache, the user and the stored hints

The session is passed explicitly or bound to the current context with
session_scope(); there is no global instance.
"""

import asyncio
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

import httpx

from modules.auth.models import LoginResponse
from modules.users.models import PublicUser, RegisterRequest

from . import queries
from .api import TrakApi
from .cache import QueryCache
from .errors import SessionContextError, TrakClientError
from .hints import FileHintStore, HintStore, MemoryHintStore

logger = logging.getLogger(__name__)

__all__ = [
    "Session",
    "session_scope",
    "current_session",
    "HintStore",
    "MemoryHintStore",
    "FileHintStore",
]

_current_session: ContextVar[Optional["Session"]] = ContextVar("trak_session", default=None)


class Session:
    """Authentication state of one client."""

    def __init__(
        self,
        api: TrakApi,
        cache: QueryCache,
        hints: Optional[HintStore] = None,
    ):
        self._api = api
        self._cache = cache
        self._hints = hints or api.hints
        self._user: Optional[PublicUser] = None
        self._is_loading = True
        self._start_task: Optional["asyncio.Task[Optional[PublicUser]]"] = None
        # Bumped whenever the user is set or cleared; older profile loads are discarded
        self._epoch = 0

        hint = self._hints.get_user()
        if hint:
            self._user = PublicUser.model_validate(hint)

    @property
    def api(self) -> TrakApi:
        return self._api

    @property
    def cache(self) -> QueryCache:
        return self._cache

    @property
    def user(self) -> Optional[PublicUser]:
        return self._user

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    async def start(self) -> Optional[PublicUser]:
        """
        Resolve the current user with a single profile fetch.

        Safe to call repeatedly or concurrently: all callers share the
        first fetch.
        """
        if self._start_task is None:
            self._start_task = asyncio.ensure_future(self._load_profile())
        return await asyncio.shield(self._start_task)

    async def _load_profile(self) -> Optional[PublicUser]:
        epoch = self._epoch
        try:
            user = await self._api.get(queries.USER_PROFILE, PublicUser)
        except (TrakClientError, httpx.HTTPError) as e:
            if epoch == self._epoch:
                logger.info(f"No active session: {e}")
                self._user = None
                self._hints.set_user(None)
        else:
            if epoch == self._epoch:
                self._remember(user)
            else:
                logger.debug("Discarding profile loaded before the session changed")
        finally:
            if epoch == self._epoch:
                self._is_loading = False
        return self._user

    async def login(self, username: str, password: str) -> PublicUser:
        """
        Raises:
            ApiRequestError: 401 for bad credentials
        """
        response = await self._api.send(
            "POST", "/api/auth/login", LoginResponse,
            json={"username": username, "password": password},
        )
        self._hints.set_token(response.auth_token)
        self.set_current_user(response.user)
        logger.info(f"Logged in as {response.user.username}")
        return response.user

    async def register(self, request: RegisterRequest) -> PublicUser:
        response = await self._api.send(
            "POST", "/api/auth/register", LoginResponse,
            json=request.model_dump(mode="json"),
        )
        self._hints.set_token(response.auth_token)
        self.set_current_user(response.user)
        logger.info(f"Registered {response.user.username}")
        return response.user

    async def logout(self) -> None:
        """
        End the session.

        The local reset happens even when the server call fails.
        """
        try:
            await self._api.send("POST", "/api/auth/logout")
        except (TrakClientError, httpx.HTTPError) as e:
            logger.warning(f"Logout request failed, clearing local session anyway: {e}")
        finally:
            self._epoch += 1
            self._cache.clear()
            self._user = None
            self._is_loading = False
            self._hints.clear()
            self._start_task = None
            logger.info("Logged out")

    def set_current_user(self, user: PublicUser) -> None:
        """Replace the current user, e.g. right after login or signup."""
        self._epoch += 1
        self._remember(user)
        self._is_loading = False
        self._cache.invalidate(queries.query_key(queries.USER_PROFILE, user.id))

    def _remember(self, user: PublicUser) -> None:
        self._user = user
        self._hints.set_user(user.model_dump(mode="json"))


@contextmanager
def session_scope(session: Session) -> Iterator[Session]:
    """Bind `session` as the current session for the enclosed code."""
    token = _current_session.set(session)
    try:
        yield session
    finally:
        _current_session.reset(token)


def current_session() -> Session:
    """
    The session bound by the innermost session_scope().

    Raises:
        SessionContextError: When called outside any scope
    """
    session = _current_session.get()
    if session is None:
        raise SessionContextError("current_session() called outside of session_scope()")
    return session
