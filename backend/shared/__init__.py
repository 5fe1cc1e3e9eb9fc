"""
Shared infrastructure for the Axys auth backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- models: Identity record shared by the gateway and the session

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    AxysError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
)
from .models import UserIdentity

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "AxysError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ExternalServiceError",
    "UserIdentity",
]
