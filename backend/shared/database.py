"""
Supabase client factory.

The auth orchestrator talks to Supabase as a client application: it signs
users in and out with the anon key and reads/writes the OTP table under the
same key. One client is shared by the process so the provider-side session
attached by a login stays with the gateway that created it.
"""

from typing import Optional
from supabase import create_client, Client

from .config import get_settings

# Module-level client cache
_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get the process-wide Supabase client (anon key).

    Returns:
        Supabase client configured with the project URL and anon key
    """
    global _client

    if _client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
            )
        _client = create_client(
            settings.supabase_url,
            settings.supabase_anon_key,
        )

    return _client


def reset_client_cache() -> None:
    """
    Reset the cached database client.

    Useful for testing or when configuration changes.
    """
    global _client
    _client = None
