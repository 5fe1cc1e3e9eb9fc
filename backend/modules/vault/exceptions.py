"""
Token vault exceptions.
"""

from shared.exceptions import AxysError


class VaultError(AxysError):
    """Raised when the secure store cannot be read, decrypted or written."""

    def __init__(self, message: str, namespace: str):
        super().__init__(
            message,
            code="VAULT_ERROR",
            details={"namespace": namespace},
        )
