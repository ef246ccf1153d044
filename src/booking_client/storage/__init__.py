"""Credential persistence and settings."""

from booking_client.storage.credentials import (
    ACCESS_KEY,
    REFRESH_KEY,
    CredentialStore,
    FileCredentialStore,
    MemoryCredentialStore,
)

__all__ = [
    "ACCESS_KEY",
    "REFRESH_KEY",
    "CredentialStore",
    "FileCredentialStore",
    "MemoryCredentialStore",
]
