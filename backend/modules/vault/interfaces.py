"""
Token vault interfaces.

ISecureStore is the encrypted key-value store the vault sits on; each
namespace is a separate partition so clearing one never touches another.
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class ISecureStore(Protocol):
    """Encrypted key-value storage partitioned by namespace."""

    def get_item(self, key: str, namespace: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str, namespace: str) -> None:
        ...

    def delete_item(self, key: str, namespace: str) -> None:
        ...

    def set_items(self, items: dict[str, str], namespace: str) -> None:
        """Write several keys of one namespace in a single update."""
        ...

    def delete_items(self, keys: list[str], namespace: str) -> None:
        ...


@runtime_checkable
class ITokenVault(Protocol):
    """
    Interface for persisted credential material.

    Tokens and the biometric-enabled flag live in different namespaces:
    clear() forgets the tokens but the device keeps remembering that
    biometric unlock was configured.
    """

    async def save(self, access_token: str, refresh_token: str) -> None:
        ...

    async def get_access(self) -> Optional[str]:
        ...

    async def get_refresh(self) -> Optional[str]:
        ...

    async def clear(self) -> None:
        ...

    async def set_biometric_enabled(self, enabled: bool) -> None:
        ...

    async def is_biometric_enabled(self) -> bool:
        ...
