"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field


class UserIdentity(BaseModel):
    """
    Identity record of the signed-in user.

    Produced by the credential gateway from the identity provider's user
    object and held by the session state machine while a session exists.
    """

    id: str = Field(..., description="User ID (UUID from Supabase)")
    name: str = Field(default="", description="Display name")
    email: str = Field(..., description="User's email address")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }

    @classmethod
    def from_provider_user(cls, user: Any) -> "UserIdentity":
        """Build an identity from a Supabase user object."""
        metadata: Optional[dict] = getattr(user, "user_metadata", None) or {}
        return cls(
            id=str(user.id),
            name=metadata.get("name") or "",
            email=user.email or "",
        )
