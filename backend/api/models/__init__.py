"""API models package."""

from .errors import ErrorResponse, ValidationErrorResponse, error_body

__all__ = [
    "ErrorResponse",
    "ValidationErrorResponse",
    "error_body",
]
