"""The HTTP send primitive underneath the request pipeline."""

from __future__ import annotations

from typing import Protocol

import httpx
from loguru import logger

from ..errors import NetworkError
from ..models.request import PendingRequest

DEFAULT_HEADERS = {"Content-Type": "application/json"}


class Transport(Protocol):
    async def send(self, request: PendingRequest) -> httpx.Response: ...

    async def aclose(self) -> None: ...


class HttpxTransport:
    """Send :class:`PendingRequest` values through an ``httpx.AsyncClient``.

    Relative URLs are resolved against *base_url*.  Any status code is
    returned as a response; only failures to complete the exchange
    (connection errors, timeouts, undecodable bodies, redirect loops)
    raise :class:`NetworkError`.

    Pass *transport* to substitute the network layer, e.g. an
    ``httpx.MockTransport`` in tests.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers=DEFAULT_HEADERS,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return str(self._http.base_url)

    async def send(self, request: PendingRequest) -> httpx.Response:
        try:
            return await self._http.request(
                request.method,
                request.url,
                headers=request.headers,
                params=request.params,
                json=request.json_body,
                content=request.content,
            )
        except httpx.RequestError as exc:
            logger.error(f"{request.method} {request.url} failed: {exc}")
            raise NetworkError(f"{request.method} {request.url} failed: {exc}") from exc

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()

    @property
    def is_closed(self) -> bool:
        return self._http.is_closed
