"""High-level async client for the booking/testing service."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import httpx

from ..models.request import PendingRequest
from ..models.tokens import TokenPair
from ..storage.config import AppSettings
from ..storage.credentials import CredentialStore, FileCredentialStore
from . import auth
from .session import AuthSession
from .transport import HttpxTransport, Transport


class BookingClient:
    """HTTP verbs over an :class:`AuthSession`.

    Paths are relative to the service base URL (see
    :mod:`booking_client.api.endpoints`).  Tokens are attached and
    refreshed transparently; a session that cannot be renewed raises
    :class:`~booking_client.errors.SessionExpiredError`.  Other HTTP
    errors are returned as responses, so callers use
    ``raise_for_status()`` as with plain httpx.

    Example::

        async with BookingClient.from_settings() as client:
            if client.is_authenticated:
                resp = await client.get(endpoints.CENTERS)
    """

    def __init__(self, store: CredentialStore, transport: Transport) -> None:
        self.session = AuthSession(store, transport)

    @classmethod
    def from_settings(
        cls,
        settings: dict[str, Any] | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> BookingClient:
        """Build a client from :class:`AppSettings` (or an explicit dict)."""
        settings = settings if settings is not None else AppSettings.load()
        credentials_file = settings.get("credentials_file")
        store = FileCredentialStore(Path(credentials_file) if credentials_file else None)
        transport = HttpxTransport(
            settings["base_url"],
            timeout=float(settings.get("timeout", 30.0)),
            transport=http_transport,
        )
        return cls(store, transport)

    @property
    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    # ------------------------------------------------------------------
    # Session management
    # ------------------------------------------------------------------

    async def login(self, username: str, password: str) -> TokenPair:
        return await auth.login(self.session, username, password)

    def logout(self) -> None:
        auth.logout(self.session)

    async def refresh(self) -> str:
        """Force a token refresh and return the new access token."""
        return await self.session.coordinator.refresh()

    # ------------------------------------------------------------------
    # HTTP verbs
    # ------------------------------------------------------------------

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send an authenticated request to ``base_url + path``."""
        pending = PendingRequest(
            method=method.upper(),
            url=path,
            headers=headers or {},
            params=params,
            json_body=json,
            content=content,
        )
        return await self.session.send(pending)

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", path, **kwargs)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        """Close the underlying transport."""
        await self.session.transport.aclose()

    async def __aenter__(self) -> BookingClient:
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()
