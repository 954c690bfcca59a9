"""
HTTP transport for the Trak API.

Thin wrapper over httpx.AsyncClient that attaches the bearer token from
the hint store, raises ApiRequestError for non-2xx responses, and
validates payloads into pydantic models.
"""

import logging
from typing import Any, Optional, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from .config import ClientSettings, get_client_settings
from .errors import ApiRequestError, MalformedResponseError
from .hints import HintStore, MemoryHintStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TrakApi:
    """Async Trak API client."""

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        hints: Optional[HintStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._settings = settings or get_client_settings()
        self._hints = hints or MemoryHintStore()
        self._client = httpx.AsyncClient(
            base_url=self._settings.api_base_url,
            timeout=self._settings.request_timeout_seconds,
            transport=transport,
        )

    @property
    def hints(self) -> HintStore:
        return self._hints

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "TrakApi":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def _headers(self) -> dict[str, str]:
        token = self._hints.get_token()
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
    ) -> httpx.Response:
        """
        Send a request and return the response if it is 2xx.

        Raises:
            ApiRequestError: For any non-2xx status
            httpx.HTTPError: For transport failures
        """
        response = await self._client.request(
            method,
            path,
            params=params,
            json=json,
            headers=self._headers(),
        )
        if response.is_success:
            return response

        if response.status_code == 401 and self._hints.get_token():
            logger.info(f"Authentication failed at {path}, clearing stored token")
            self._hints.set_token(None)

        raise ApiRequestError(response.status_code, response.text or response.reason_phrase)

    async def get(self, path: str, model: Any, params: Optional[dict[str, Any]] = None) -> Any:
        response = await self.request("GET", path, params=params)
        return self.parse(path, response, model)

    async def send(
        self,
        method: str,
        path: str,
        model: Any = None,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        """Send a write request; returns the validated body, or None without a model."""
        response = await self.request(method, path, params=params, json=json)
        if model is None:
            return None
        return self.parse(path, response, model)

    @staticmethod
    def parse(path: str, response: httpx.Response, model: type[T]) -> T:
        """
        Validate a response body against a model or type.

        Raises:
            MalformedResponseError: If the body is not JSON or does not match
        """
        try:
            return TypeAdapter(model).validate_json(response.content)
        except ValidationError as e:
            raise MalformedResponseError(path, str(e)) from e
