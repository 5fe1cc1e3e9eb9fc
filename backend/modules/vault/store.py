"""
Secure store backends.

- InMemorySecureStore: Process-local, for tests
- EncryptedFileSecureStore: One Fernet-encrypted file per namespace
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from cryptography.fernet import Fernet, InvalidToken

from .exceptions import VaultError

KEY_FILE_NAME = ".vault.key"


class InMemorySecureStore:
    """Secure store backed by a dict of namespaces."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, str]] = {}

    def get_item(self, key: str, namespace: str) -> Optional[str]:
        return self._data.get(namespace, {}).get(key)

    def set_item(self, key: str, value: str, namespace: str) -> None:
        self._data.setdefault(namespace, {})[key] = value

    def delete_item(self, key: str, namespace: str) -> None:
        self._data.get(namespace, {}).pop(key, None)

    def set_items(self, items: dict[str, str], namespace: str) -> None:
        self._data.setdefault(namespace, {}).update(items)

    def delete_items(self, keys: list[str], namespace: str) -> None:
        for key in keys:
            self.delete_item(key, namespace)


class EncryptedFileSecureStore:
    """
    Secure store writing one encrypted JSON document per namespace.

    Files and the key file are created owner-read/write only. Writes go
    through a temporary file and an atomic rename, so a crash leaves either
    the old or the new document.
    """

    def __init__(self, directory: Union[str, Path], encryption_key: Optional[str] = None):
        self._dir = Path(directory).expanduser()
        self._dir.mkdir(parents=True, exist_ok=True, mode=0o700)
        self._fernet = Fernet(encryption_key or self._load_or_create_key())

    def _load_or_create_key(self) -> bytes:
        key_path = self._dir / KEY_FILE_NAME
        if key_path.exists():
            return key_path.read_bytes().strip()

        key = Fernet.generate_key()
        fd = os.open(key_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        with os.fdopen(fd, "wb") as f:
            f.write(key)
        return key

    def _path(self, namespace: str) -> Path:
        return self._dir / f"{namespace}.vault"

    def _read(self, namespace: str) -> dict[str, str]:
        path = self._path(namespace)
        if not path.exists():
            return {}
        try:
            plain = self._fernet.decrypt(path.read_bytes())
        except InvalidToken:
            raise VaultError("Vault file could not be decrypted", namespace)
        except OSError as e:
            raise VaultError(f"Vault file could not be read: {e}", namespace)
        return json.loads(plain.decode("utf-8"))

    def _write(self, namespace: str, data: dict[str, str]) -> None:
        token = self._fernet.encrypt(json.dumps(data).encode("utf-8"))
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=self._dir, prefix=f".{namespace}.")
            with os.fdopen(fd, "wb") as f:
                f.write(token)
            os.chmod(tmp_path, 0o600)
            os.replace(tmp_path, self._path(namespace))
            tmp_path = None
        except OSError as e:
            raise VaultError(f"Vault file could not be written: {e}", namespace)
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)

    def get_item(self, key: str, namespace: str) -> Optional[str]:
        return self._read(namespace).get(key)

    def set_item(self, key: str, value: str, namespace: str) -> None:
        data = self._read(namespace)
        data[key] = value
        self._write(namespace, data)

    def delete_item(self, key: str, namespace: str) -> None:
        data = self._read(namespace)
        if key in data:
            del data[key]
            self._write(namespace, data)

    def set_items(self, items: dict[str, str], namespace: str) -> None:
        data = self._read(namespace)
        data.update(items)
        self._write(namespace, data)

    def delete_items(self, keys: list[str], namespace: str) -> None:
        data = self._read(namespace)
        remaining = {k: v for k, v in data.items() if k not in keys}
        if remaining != data:
            self._write(namespace, remaining)
