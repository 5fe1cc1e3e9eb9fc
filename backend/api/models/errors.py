"""
Error response models.

Standardized error responses for the API.
"""

from typing import Any
from pydantic import BaseModel, Field

from shared.exceptions import (
    AxysError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)


class ErrorResponse(BaseModel):
    """Standard error response format, the shape of AxysError.to_dict()."""

    error: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable message")
    details: dict[str, Any] = Field(default_factory=dict)


def status_code_for(exc: AxysError) -> int:
    """HTTP status for an application error, chosen by category."""
    # Imported here so the API models do not pull in the session module
    from modules.session.exceptions import InvalidTransitionError

    if isinstance(exc, InvalidTransitionError):
        return 409
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, AuthenticationError):
        return 401
    if isinstance(exc, AuthorizationError):
        return 403
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ExternalServiceError):
        return 502
    return 500
