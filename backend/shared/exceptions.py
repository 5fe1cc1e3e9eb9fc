"""
Error categories for the auth backend.

Module exceptions (rejected credentials, an expired OTP, a cancelled
biometric prompt, an illegal session transition) subclass one of these
categories. The API maps each category to one HTTP status, and to_dict()
is the response body the client shows or branches on via `error`.
"""

from typing import Optional, Any


class AxysError(Exception):
    """
    Root of every error the auth flows raise on purpose.

    `code` is the stable identifier the client matches on; it defaults to
    the class name. `details` carries extra fields such as the provider
    message or the reason a code was rejected.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(AxysError):
    """Requested resource does not exist."""

    pass


class ValidationError(AxysError):
    """Client input rejected (weak password, wrong or expired code)."""

    pass


class AuthenticationError(AxysError):
    """Identity could not be proven (password or biometric check)."""

    pass


class AuthorizationError(AxysError):
    """Authorization failed (operation not allowed in the current state)."""

    pass


class ExternalServiceError(AxysError):
    """
    A dependency the flows rely on failed: the identity provider, the
    email API, the OTP table or the device vault.
    """

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
