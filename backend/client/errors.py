"""
Client SDK exceptions and error message helpers.
"""

import json
from typing import Any


class TrakClientError(Exception):
    """Base exception for the client SDK."""


class ApiRequestError(TrakClientError):
    """
    Non-2xx response from the API.

    The message is "<status>: <body>", with the reason phrase standing
    in for an empty body.
    """

    def __init__(self, status: int, body: str):
        super().__init__(f"{status}: {body}")
        self.status = status
        self.body = body

    def json(self) -> Any:
        """The body parsed as JSON, or None if it is not JSON."""
        try:
            return json.loads(self.body)
        except ValueError:
            return None


class MalformedResponseError(TrakClientError):
    """A response payload failed validation against its model."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Malformed response from {path}: {reason}")
        self.path = path
        self.reason = reason


class SessionContextError(TrakClientError):
    """current_session() was called outside a session_scope()."""


def extract_error_message(error: BaseException) -> str:
    """
    Human-readable description of a failed request.

    For API errors with a JSON body: a points shortfall wins, then the
    `message` field. Anything else falls back to the error text.
    """
    if isinstance(error, ApiRequestError):
        payload = error.json()
        if isinstance(payload, dict):
            points_needed = payload.get("pointsNeeded")
            if points_needed is not None:
                return f"You need {points_needed} more points to redeem this reward."
            if payload.get("message"):
                return str(payload["message"])
    return str(error)
