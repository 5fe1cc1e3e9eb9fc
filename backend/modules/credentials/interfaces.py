"""
Credential gateway interface.

Other modules should depend on ICredentialGateway, not the concrete
implementation. The session state machine is tested against mocks of it.
"""

from typing import Protocol, runtime_checkable

from shared.models import UserIdentity

from .models import AuthResult, CredentialCheck


@runtime_checkable
class ICredentialGateway(Protocol):
    """
    Interface to the identity provider.

    The gateway keeps no local state beyond whatever session the provider
    client has attached.
    """

    async def validate_credentials(self, email: str, password: str) -> CredentialCheck:
        """
        Check an email/password pair without committing to a session.

        Raises:
            InvalidCredentialsError: If the pair is rejected
        """
        ...

    async def create_account(self, email: str, password: str, name: str) -> AuthResult:
        """
        Create an account.

        Returns:
            AuthResult whose tokens may be empty if email confirmation is pending

        Raises:
            AccountCreationFailedError: If the provider rejects the signup
        """
        ...

    async def login(self, email: str, password: str) -> AuthResult:
        """
        Exchange credentials for a session.

        Raises:
            AuthRejectedError: On bad credentials or provider error
        """
        ...

    async def restore_session(self, access_token: str, refresh_token: str) -> AuthResult:
        """
        Attach persisted tokens to the provider client.

        The provider refreshes an expired access token; the returned tokens
        are the ones now in force.

        Raises:
            NoSessionError: If the tokens cannot back a session
        """
        ...

    async def fetch_current_identity(self) -> UserIdentity:
        """
        Fetch the user behind the attached bearer.

        Raises:
            NoSessionError: If no valid bearer is attached
        """
        ...

    async def revoke_server_session(self) -> None:
        """
        Revoke the provider-side session.

        Best effort: failures are logged, never raised.
        """
        ...
