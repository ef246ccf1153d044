"""Single-flight exchange of the refresh token for a new access token.

However many requests hit an expired access token at the same time, at
most one call to the refresh endpoint is in flight.  Requests arriving
while it runs await the same :class:`asyncio.Task` and receive the same
token or the same :class:`~booking_client.errors.RefreshFailure`.  The
slot is emptied as soon as the task finishes, so a later 401 starts a
fresh exchange.
"""

from __future__ import annotations

import asyncio

from loguru import logger

from ..errors import NetworkError, RefreshFailure, RefreshFailureReason, StorageError
from ..models.request import PendingRequest
from ..models.tokens import RefreshResult
from ..storage.credentials import (
    ACCESS_KEY,
    REFRESH_KEY,
    CredentialStore,
    clear_credentials,
    read_credential,
)
from . import endpoints
from .transport import Transport


def _consume_result(task: asyncio.Task) -> None:
    # Every waiter may have been cancelled; mark the outcome as retrieved.
    if not task.cancelled():
        task.exception()


class RefreshCoordinator:
    """Owns the refresh slot of one :class:`~booking_client.api.session.AuthSession`."""

    def __init__(
        self,
        store: CredentialStore,
        transport: Transport,
        refresh_url: str = endpoints.TOKEN_REFRESH,
    ) -> None:
        self._store = store
        self._transport = transport
        self._refresh_url = refresh_url
        self._inflight: asyncio.Task[str] | None = None

    @property
    def in_flight(self) -> bool:
        """Return ``True`` while a refresh exchange is running."""
        return self._inflight is not None

    async def refresh(self, stale_token: str | None = None) -> str:
        """Return a fresh access token, joining any exchange already running.

        *stale_token* is the access token the failed request was sent
        with.  If the store already holds a different token, another
        request completed a refresh in the meantime and that token is
        returned without contacting the backend.

        Raises :class:`RefreshFailure` if no new token can be obtained.
        Cancelling the caller does not cancel the shared exchange.
        """
        if self._inflight is None:
            if stale_token is not None:
                current = read_credential(self._store, ACCESS_KEY)
                if current and current != stale_token:
                    logger.debug("Access token was already refreshed by another request")
                    return current
            task = asyncio.ensure_future(self._run())
            task.add_done_callback(_consume_result)
            self._inflight = task
        return await asyncio.shield(self._inflight)

    async def _run(self) -> str:
        try:
            return await self._exchange()
        finally:
            self._inflight = None

    async def _exchange(self) -> str:
        refresh_token = read_credential(self._store, REFRESH_KEY)
        if not refresh_token:
            raise RefreshFailure(RefreshFailureReason.NO_CREDENTIAL, "no refresh token stored")

        request = PendingRequest(
            method="POST",
            url=self._refresh_url,
            json_body={"refresh": refresh_token},
        )
        try:
            response = await self._transport.send(request)
        except NetworkError as exc:
            raise self._fail(RefreshFailureReason.NETWORK, str(exc)) from exc

        if not response.is_success:
            raise self._fail(RefreshFailureReason.REJECTED, f"HTTP {response.status_code}")

        try:
            result = RefreshResult.model_validate(response.json())
        except ValueError as exc:
            raise self._fail(RefreshFailureReason.MALFORMED, str(exc)) from exc

        try:
            self._store.set(ACCESS_KEY, result.access)
            if result.refresh:
                self._store.set(REFRESH_KEY, result.refresh)
        except StorageError as exc:
            logger.error(f"Refreshed token could not be persisted: {exc}")

        logger.debug("Access token refreshed successfully")
        return result.access

    def _fail(self, reason: RefreshFailureReason, detail: str) -> RefreshFailure:
        """Tear the session down and build the failure to raise."""
        failure = RefreshFailure(reason, detail)
        logger.error(f"{failure}; clearing stored credentials")
        clear_credentials(self._store)
        return failure
