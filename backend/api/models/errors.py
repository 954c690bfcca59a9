"""
Error response models.

Standardized error responses for the API.
"""

from typing import Any
from pydantic import BaseModel, ConfigDict

from shared.exceptions import TrakError


class ErrorResponse(BaseModel):
    """
    Standard error response format.

    Exception details are flattened next to `error` and `message`,
    e.g. `{"error": "INSUFFICIENT_POINTS", "message": "...", "pointsNeeded": 80}`.
    """

    model_config = ConfigDict(extra="allow")

    error: str
    message: str


class ValidationErrorResponse(BaseModel):
    """Request validation error response format."""

    error: str = "VALIDATION_ERROR"
    message: str = "Invalid data"
    errors: list[dict[str, Any]]


def error_body(exc: TrakError) -> dict[str, Any]:
    body = {"error": exc.code, "message": exc.message}
    for key, value in exc.details.items():
        body.setdefault(key, value)
    return body
