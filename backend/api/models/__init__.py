"""API models package."""

from .errors import ErrorResponse, status_code_for

__all__ = [
    "ErrorResponse",
    "status_code_for",
]
