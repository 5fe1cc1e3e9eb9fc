"""
Token vault module.

Encrypted persistence for the session's access and refresh tokens and the
device's biometric-enabled flag.

Public API:
- ITokenVault / ISecureStore: Interfaces
- TokenVault: Vault over a secure store
- InMemorySecureStore / EncryptedFileSecureStore: Store backends
- VaultError: Storage failure
"""

from .interfaces import ISecureStore, ITokenVault
from .exceptions import VaultError
from .store import InMemorySecureStore, EncryptedFileSecureStore
from .service import (
    TokenVault,
    AUTH_NAMESPACE,
    DEVICE_NAMESPACE,
    ACCESS_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    BIOMETRIC_KEY,
    get_token_vault,
    reset_token_vault,
)

__all__ = [
    # Interfaces
    "ISecureStore",
    "ITokenVault",
    # Exceptions
    "VaultError",
    # Stores
    "InMemorySecureStore",
    "EncryptedFileSecureStore",
    # Vault
    "TokenVault",
    "AUTH_NAMESPACE",
    "DEVICE_NAMESPACE",
    "ACCESS_TOKEN_KEY",
    "REFRESH_TOKEN_KEY",
    "BIOMETRIC_KEY",
    "get_token_vault",
    "reset_token_vault",
]
