"""Exception hierarchy for booking-client."""

from __future__ import annotations

from enum import Enum

import httpx


class BookingClientError(Exception):
    """Base class for all errors raised by this package."""


class StorageError(BookingClientError):
    """Raised when the credential store cannot be read or written."""


class NetworkError(BookingClientError):
    """Raised when the transport could not complete a call."""


class AuthenticationError(BookingClientError):
    """Raised when authentication fails and cannot be automatically recovered."""


class SessionExpiredError(AuthenticationError):
    """The backend rejected the request and the session could not be renewed.

    ``response`` is the last unauthorized response received, if any.
    """

    def __init__(self, message: str, response: httpx.Response | None = None) -> None:
        super().__init__(message)
        self.response = response


class LoginError(AuthenticationError):
    """Raised when the login endpoint rejects the supplied credentials."""


class RefreshFailureReason(str, Enum):
    NO_CREDENTIAL = "no-credential"
    REJECTED = "rejected"
    NETWORK = "network"
    MALFORMED = "malformed"


class RefreshFailure(AuthenticationError):
    """The refresh credential could not be exchanged for a new access credential."""

    def __init__(self, reason: RefreshFailureReason, detail: str = "") -> None:
        message = f"Token refresh failed ({reason.value})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.reason = reason
