"""The authenticated request pipeline.

An :class:`AuthSession` owns the credential store, the transport and the
refresh coordinator.  Every request runs through three stages, fixed at
construction time::

    authenticate  ->  transport.send  ->  guard

``authenticate`` attaches the stored access token.  ``guard`` passes
any non-401 response through untouched; on a 401 it refreshes the
access token once and replays the request once with the new token.  A
second 401 for the same logical request is terminal.
"""

from __future__ import annotations

import httpx
from loguru import logger

from ..errors import RefreshFailure, SessionExpiredError
from ..models.request import PendingRequest
from ..storage.credentials import ACCESS_KEY, REFRESH_KEY, CredentialStore, read_credential
from . import endpoints
from .refresh import RefreshCoordinator
from .transport import Transport


class AuthSession:
    """Session state plus the authenticate/send/guard pipeline.

    Parameters
    ----------
    store:
        Where the access and refresh tokens live.  The session only
        reads it; the refresh coordinator writes refreshed tokens.
    transport:
        Any object implementing :class:`~booking_client.api.transport.Transport`.
    refresh_url:
        Path of the refresh endpoint, relative to the transport's base URL.
    """

    def __init__(
        self,
        store: CredentialStore,
        transport: Transport,
        refresh_url: str = endpoints.TOKEN_REFRESH,
    ) -> None:
        self.store = store
        self.transport = transport
        self.coordinator = RefreshCoordinator(store, transport, refresh_url)

    @property
    def is_authenticated(self) -> bool:
        """A session is logged in while a refresh token is stored."""
        return read_credential(self.store, REFRESH_KEY) is not None

    @property
    def access_token(self) -> str | None:
        return read_credential(self.store, ACCESS_KEY)

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------

    def authenticate(self, request: PendingRequest) -> PendingRequest:
        """Attach the stored access token; send unauthenticated if there is none."""
        token = self.access_token
        if token is None:
            return request.without_auth()
        return request.with_bearer(token)

    async def guard(self, request: PendingRequest, response: httpx.Response) -> httpx.Response:
        """Return *response*, or recover from a 401 with one refresh and one replay.

        Raises :class:`SessionExpiredError` when the replay is rejected
        too, or when the token cannot be refreshed.
        """
        if response.status_code != httpx.codes.UNAUTHORIZED:
            return response

        if request.retried:
            raise SessionExpiredError(
                f"{request.method} {request.url} was rejected after a token refresh",
                response,
            )

        try:
            token = await self.coordinator.refresh(stale_token=request.bearer_token)
        except RefreshFailure as exc:
            raise SessionExpiredError("Session expired. Please log in again.", response) from exc

        replay = request.next_attempt().with_bearer(token)
        logger.debug(f"Replaying {replay.method} {replay.url} with refreshed token")
        replay_response = await self.transport.send(replay)
        return await self.guard(replay, replay_response)

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    async def send(self, request: PendingRequest) -> httpx.Response:
        """Run *request* through the full pipeline."""
        request = self.authenticate(request)
        response = await self.transport.send(request)
        return await self.guard(request, response)
