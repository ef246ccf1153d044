"""Immutable description of an outbound API request."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

AUTH_HEADER = "Authorization"
BEARER_PREFIX = "Bearer "


class PendingRequest(BaseModel):
    """An outbound request plus the number of times it has been replayed.

    Instances are frozen: the pipeline derives new values with
    :meth:`with_bearer` and :meth:`next_attempt` instead of mutating a
    shared object, so retry state can never leak between calls.
    """

    model_config = ConfigDict(frozen=True)

    method: str
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    params: dict[str, Any] | None = None
    json_body: Any = None
    content: bytes | None = None
    attempt: int = 0

    @property
    def retried(self) -> bool:
        return self.attempt > 0

    @property
    def bearer_token(self) -> str | None:
        """Return the bearer token this request carries, if any."""
        for name, value in self.headers.items():
            if name.lower() == AUTH_HEADER.lower() and value.startswith(BEARER_PREFIX):
                return value[len(BEARER_PREFIX):]
        return None

    def _headers_without_auth(self) -> dict[str, str]:
        return {k: v for k, v in self.headers.items() if k.lower() != AUTH_HEADER.lower()}

    def with_bearer(self, token: str) -> PendingRequest:
        """Return a copy carrying ``Authorization: Bearer <token>``."""
        headers = self._headers_without_auth()
        headers[AUTH_HEADER] = f"{BEARER_PREFIX}{token}"
        return self.model_copy(update={"headers": headers})

    def without_auth(self) -> PendingRequest:
        """Return a copy with any Authorization header dropped."""
        return self.model_copy(update={"headers": self._headers_without_auth()})

    def next_attempt(self) -> PendingRequest:
        """Return the replay of this request (attempt counter incremented)."""
        return self.model_copy(update={"attempt": self.attempt + 1})
