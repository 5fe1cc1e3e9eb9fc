"""
Token vault implementation.
"""

from typing import Optional

from shared.config import get_settings

from .interfaces import ISecureStore, ITokenVault

AUTH_NAMESPACE = "auth"
DEVICE_NAMESPACE = "device"

ACCESS_TOKEN_KEY = "access_token"
REFRESH_TOKEN_KEY = "refresh_token"
BIOMETRIC_KEY = "biometric_enabled"  # "true" | "false"


class TokenVault(ITokenVault):
    """
    Persists session tokens and the biometric-enabled device flag.

    Tokens live in the "auth" namespace and the flag in "device", so
    clear() leaves the flag alone.
    """

    def __init__(self, store: ISecureStore):
        self._store = store

    async def save(self, access_token: str, refresh_token: str) -> None:
        self._store.set_items(
            {ACCESS_TOKEN_KEY: access_token, REFRESH_TOKEN_KEY: refresh_token},
            AUTH_NAMESPACE,
        )

    async def get_access(self) -> Optional[str]:
        return self._store.get_item(ACCESS_TOKEN_KEY, AUTH_NAMESPACE)

    async def get_refresh(self) -> Optional[str]:
        return self._store.get_item(REFRESH_TOKEN_KEY, AUTH_NAMESPACE)

    async def clear(self) -> None:
        self._store.delete_items([ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY], AUTH_NAMESPACE)

    async def set_biometric_enabled(self, enabled: bool) -> None:
        self._store.set_item(BIOMETRIC_KEY, "true" if enabled else "false", DEVICE_NAMESPACE)

    async def is_biometric_enabled(self) -> bool:
        return self._store.get_item(BIOMETRIC_KEY, DEVICE_NAMESPACE) == "true"


# Module-level instance getter
_vault_instance: Optional[TokenVault] = None


def get_token_vault() -> TokenVault:
    """Get the token vault singleton, backed by the encrypted file store."""
    global _vault_instance
    if _vault_instance is None:
        from .store import EncryptedFileSecureStore

        settings = get_settings()
        store = EncryptedFileSecureStore(
            settings.vault_dir,
            encryption_key=settings.vault_encryption_key or None,
        )
        _vault_instance = TokenVault(store)
    return _vault_instance


def reset_token_vault() -> None:
    """Reset the token vault singleton (for testing)."""
    global _vault_instance
    _vault_instance = None
