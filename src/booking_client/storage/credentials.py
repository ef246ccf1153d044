"""Key-value persistence for the access and refresh credentials.

Two slots are used, :data:`ACCESS_KEY` and :data:`REFRESH_KEY`.  Any
object with ``get``/``set``/``remove`` methods satisfies
:class:`CredentialStore`; two implementations are provided:

* :class:`MemoryCredentialStore` -- process-local, mainly for tests and
  short-lived scripts.
* :class:`FileCredentialStore` -- a JSON file in the user's config
  directory, written atomically.

Both are safe to share between concurrent request flows.  Failures are
reported as :class:`StorageError`; the request pipeline reads through
:func:`read_credential`, which treats an unavailable store as "no
credential".
"""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Protocol

from loguru import logger

from ..errors import StorageError
from .paths import CREDENTIALS_FILE, atomic_write

ACCESS_KEY = "accessToken"
REFRESH_KEY = "refreshToken"


class CredentialStore(Protocol):
    def get(self, name: str) -> str | None: ...

    def set(self, name: str, value: str) -> None: ...

    def remove(self, name: str) -> None: ...


class MemoryCredentialStore:
    """In-memory credential store."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, name: str) -> str | None:
        with self._lock:
            return self._values.get(name)

    def set(self, name: str, value: str) -> None:
        with self._lock:
            self._values[name] = value

    def remove(self, name: str) -> None:
        with self._lock:
            self._values.pop(name, None)

    def snapshot(self) -> dict[str, str]:
        """Return a copy of all stored values."""
        with self._lock:
            return dict(self._values)


class FileCredentialStore:
    """Credential store backed by a JSON file.

    The whole file is re-read on every ``get`` so that separate processes
    (for example two CLI invocations) see each other's writes.  Writes
    are read-modify-write cycles under a lock and go through
    :func:`~booking_client.storage.paths.atomic_write`.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or CREDENTIALS_FILE
        self._lock = threading.Lock()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageError(f"Cannot read credentials from {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"Credentials file {self.path} is not a JSON object")
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, values: dict[str, str]) -> None:
        try:
            atomic_write(self.path, json.dumps(values, indent=2))
        except OSError as exc:
            raise StorageError(f"Cannot write credentials to {self.path}: {exc}") from exc

    def get(self, name: str) -> str | None:
        with self._lock:
            return self._read().get(name)

    def set(self, name: str, value: str) -> None:
        with self._lock:
            values = self._read()
            values[name] = value
            self._write(values)
        logger.debug(f"Stored credential '{name}' in {self.path}")

    def remove(self, name: str) -> None:
        with self._lock:
            values = self._read()
            if name not in values:
                return
            del values[name]
            self._write(values)
        logger.debug(f"Removed credential '{name}' from {self.path}")


def read_credential(store: CredentialStore, name: str) -> str | None:
    """Return the credential stored under *name*, or ``None``.

    An unavailable store is logged and reported as an absent credential.
    Empty strings are also treated as absent.
    """
    try:
        value = store.get(name)
    except StorageError as exc:
        logger.warning(f"Credential store unavailable, treating '{name}' as absent: {exc}")
        return None
    return value or None


def clear_credentials(store: CredentialStore) -> None:
    """Remove both credentials, logging (not raising) storage failures."""
    for name in (ACCESS_KEY, REFRESH_KEY):
        try:
            store.remove(name)
        except StorageError as exc:
            logger.error(f"Failed to remove credential '{name}': {exc}")
