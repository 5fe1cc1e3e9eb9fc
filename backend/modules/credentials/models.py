"""
Credential gateway data models.

These models define the results the gateway hands back to the session
state machine. Tokens are opaque bearer strings issued by the provider.
"""

from typing import Optional
from pydantic import BaseModel, Field

from shared.models import UserIdentity


class CredentialCheck(BaseModel):
    """Result of a password check that did not commit to a session."""

    valid: bool = Field(default=True, description="Whether the credentials are correct")


class AuthResult(BaseModel):
    """
    Identity plus session tokens returned by login, signup and restore.

    After signup the tokens may be empty strings when the provider requires
    email confirmation before issuing a session. Callers treat that as
    "account created, not yet authenticated".
    """

    user: Optional[UserIdentity] = Field(None, description="Identity, if the provider returned one")
    access_token: str = Field(default="", description="Bearer access token")
    refresh_token: str = Field(default="", description="Refresh token")

    @property
    def has_session(self) -> bool:
        """True when both tokens were issued."""
        return bool(self.access_token and self.refresh_token)
