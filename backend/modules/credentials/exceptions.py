"""
Credential gateway exceptions.

Provider errors are wrapped, never re-coded: the provider's own message is
kept in ``details["provider_error"]`` for diagnostics.
"""

from typing import Optional

from shared.exceptions import AuthenticationError, ExternalServiceError


class InvalidCredentialsError(AuthenticationError):
    """Raised when an email/password pair is rejected."""

    def __init__(
        self,
        message: str = "Invalid email or password",
        provider_error: Optional[str] = None,
    ):
        super().__init__(
            message,
            code="INVALID_CREDENTIALS",
            details={"provider_error": provider_error} if provider_error else None,
        )


class AuthRejectedError(InvalidCredentialsError):
    """Raised when the session-creating login is rejected by the provider."""

    def __init__(self, provider_error: Optional[str] = None):
        super().__init__("Sign in was rejected", provider_error=provider_error)
        self.code = "AUTH_REJECTED"


class AccountCreationFailedError(AuthenticationError):
    """Raised when the provider rejects a signup."""

    def __init__(self, provider_error: Optional[str] = None):
        super().__init__(
            "Account could not be created",
            code="ACCOUNT_CREATION_FAILED",
            details={"provider_error": provider_error} if provider_error else None,
        )


class NoSessionError(AuthenticationError):
    """Raised when no valid bearer is attached to the provider client."""

    def __init__(self, message: str = "No active session"):
        super().__init__(message, code="NO_SESSION")


class ServerSignOutFailedError(ExternalServiceError):
    """Raised when revoking the provider-side session fails. Logged, never fatal."""

    def __init__(self, provider_error: str):
        super().__init__(
            "Server sign-out failed",
            service="supabase",
            code="SERVER_SIGN_OUT_FAILED",
            details={"provider_error": provider_error},
        )
