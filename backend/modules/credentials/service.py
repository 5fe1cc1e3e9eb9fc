"""
Credential gateway implementation.

Wraps Supabase Auth's email/password sign-in, sign-up, sign-out and
current-user endpoints. Any non-success response is surfaced as one
uniform, typed failure that carries the provider's message.
"""

import logging
from typing import Any, Optional

import jwt
from supabase import Client

from shared.database import get_supabase_client
from shared.models import UserIdentity

from .interfaces import ICredentialGateway
from .models import AuthResult, CredentialCheck
from .exceptions import (
    AccountCreationFailedError,
    AuthRejectedError,
    InvalidCredentialsError,
    NoSessionError,
    ServerSignOutFailedError,
)

logger = logging.getLogger(__name__)


def _to_auth_result(response: Any) -> AuthResult:
    """Map a Supabase AuthResponse onto an AuthResult."""
    user = UserIdentity.from_provider_user(response.user) if response.user else None
    session = response.session  # None while email confirmation is pending
    return AuthResult(
        user=user,
        access_token=session.access_token if session else "",
        refresh_token=session.refresh_token if session else "",
    )


class SupabaseCredentialGateway(ICredentialGateway):
    """
    Implementation of the credential gateway on top of Supabase Auth.

    The client is shared with the rest of the process, so a session created
    by login() stays attached for fetch_current_identity() and
    revoke_server_session().
    """

    def __init__(self, client: Optional[Client] = None):
        self._client = client or get_supabase_client()

    async def validate_credentials(self, email: str, password: str) -> CredentialCheck:
        """
        Check the pair by signing in and discarding the session at once.

        Supabase has no password-check endpoint, so this costs two round
        trips. The throwaway session is revoked with local scope so other
        sessions of the same user are untouched.
        """
        try:
            self._client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            raise InvalidCredentialsError(provider_error=str(e))

        try:
            self._client.auth.sign_out({"scope": "local"})
        except Exception as e:
            logger.warning(f"Failed to discard validation session: {e}")

        return CredentialCheck(valid=True)

    async def create_account(self, email: str, password: str, name: str) -> AuthResult:
        """Sign up, storing the display name in user metadata."""
        try:
            response = self._client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"data": {"name": name}},
                }
            )
        except Exception as e:
            raise AccountCreationFailedError(provider_error=str(e))

        result = _to_auth_result(response)
        if not result.has_session:
            logger.info("Account created, session pending email confirmation")
        return result

    async def login(self, email: str, password: str) -> AuthResult:
        """Sign in and keep the session attached to the client."""
        try:
            response = self._client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            raise AuthRejectedError(provider_error=str(e))

        if response.user is None or response.session is None:
            raise AuthRejectedError(provider_error="Provider returned no session")
        return _to_auth_result(response)

    async def restore_session(self, access_token: str, refresh_token: str) -> AuthResult:
        """
        Attach persisted tokens, letting the provider refresh if needed.

        Malformed access tokens are rejected locally, without a round trip.
        """
        if not access_token:
            raise NoSessionError()

        try:
            jwt.decode(
                access_token,
                options={"verify_signature": False, "verify_exp": True},
            )
        except jwt.ExpiredSignatureError:
            if not refresh_token:
                raise NoSessionError("Access token expired and no refresh token is stored")
        except jwt.InvalidTokenError:
            raise NoSessionError("Stored access token is malformed")

        try:
            response = self._client.auth.set_session(access_token, refresh_token)
        except Exception as e:
            raise NoSessionError(f"Session could not be restored: {e}")

        if response.session is None:
            raise NoSessionError()
        return _to_auth_result(response)

    async def fetch_current_identity(self) -> UserIdentity:
        """Return the user behind the attached session."""
        try:
            response = self._client.auth.get_user()
        except Exception as e:
            raise NoSessionError(f"Identity lookup failed: {e}")

        if response is None or response.user is None:
            raise NoSessionError()
        return UserIdentity.from_provider_user(response.user)

    async def revoke_server_session(self) -> None:
        """Sign out server-side. Failures are logged and swallowed."""
        try:
            self._client.auth.sign_out()
        except Exception as e:
            error = ServerSignOutFailedError(str(e))
            logger.warning(f"{error.message}: {e}")


# Module-level instance getter
_gateway_instance: Optional[SupabaseCredentialGateway] = None


def get_credential_gateway() -> SupabaseCredentialGateway:
    """Get the credential gateway singleton."""
    global _gateway_instance
    if _gateway_instance is None:
        _gateway_instance = SupabaseCredentialGateway()
    return _gateway_instance


def reset_credential_gateway() -> None:
    """Reset the credential gateway singleton (for testing)."""
    global _gateway_instance
    _gateway_instance = None
