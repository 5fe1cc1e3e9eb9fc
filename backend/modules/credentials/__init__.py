"""
Credential gateway module.

Wraps the identity provider: password checks, account creation, login,
session restore, current identity and server-side sign-out.

Public API:
- ICredentialGateway: Interface for provider operations
- SupabaseCredentialGateway: Supabase Auth implementation
- AuthResult / CredentialCheck: Gateway results
- Credential exceptions: InvalidCredentialsError, AuthRejectedError, etc.
"""

from .interfaces import ICredentialGateway
from .models import AuthResult, CredentialCheck
from .exceptions import (
    InvalidCredentialsError,
    AuthRejectedError,
    AccountCreationFailedError,
    NoSessionError,
    ServerSignOutFailedError,
)
from .service import (
    SupabaseCredentialGateway,
    get_credential_gateway,
    reset_credential_gateway,
)

__all__ = [
    # Interface
    "ICredentialGateway",
    # Models
    "AuthResult",
    "CredentialCheck",
    # Exceptions
    "InvalidCredentialsError",
    "AuthRejectedError",
    "AccountCreationFailedError",
    "NoSessionError",
    "ServerSignOutFailedError",
    # Service
    "SupabaseCredentialGateway",
    "get_credential_gateway",
    "reset_credential_gateway",
]
