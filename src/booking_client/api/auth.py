"""Login and logout against the booking service.

Logging in stores the access/refresh pair returned by the login
endpoint; from then on the session's pipeline attaches and refreshes
the access token on its own.  Logging out removes both tokens.
"""

from __future__ import annotations

from loguru import logger

from ..errors import LoginError, StorageError
from ..models.request import PendingRequest
from ..models.tokens import TokenPair
from ..storage.credentials import ACCESS_KEY, REFRESH_KEY, clear_credentials
from . import endpoints
from .session import AuthSession


async def login(session: AuthSession, username: str, password: str) -> TokenPair:
    """Exchange *username* and *password* for a token pair and store it.

    Raises :class:`LoginError` on a non-2xx response or an unexpected
    body, and :class:`~booking_client.errors.NetworkError` if the
    service cannot be reached.  If the pair cannot be stored, nothing is
    left behind and the :class:`~booking_client.errors.StorageError`
    propagates.
    """
    request = PendingRequest(
        method="POST",
        url=endpoints.LOGIN,
        json_body={"username": username, "password": password},
    )
    response = await session.transport.send(request)
    if not response.is_success:
        raise LoginError(f"Login rejected (HTTP {response.status_code})")
    try:
        pair = TokenPair.model_validate(response.json())
    except ValueError as exc:
        raise LoginError(f"Unexpected login response: {exc}") from exc

    try:
        session.store.set(ACCESS_KEY, pair.access)
        session.store.set(REFRESH_KEY, pair.refresh)
    except StorageError:
        # Both tokens or neither.
        clear_credentials(session.store)
        raise
    logger.info(f"Logged in as {username}")
    return pair


def logout(session: AuthSession) -> None:
    """Forget both tokens; subsequent requests are sent unauthenticated."""
    clear_credentials(session.store)
    logger.info("Logged out")
