"""Client library for the booking/testing REST service."""

from booking_client.api.client import BookingClient
from booking_client.errors import (
    AuthenticationError,
    BookingClientError,
    LoginError,
    NetworkError,
    RefreshFailure,
    SessionExpiredError,
    StorageError,
)

__version__ = "0.1.0"

__all__ = [
    "AuthenticationError",
    "BookingClient",
    "BookingClientError",
    "LoginError",
    "NetworkError",
    "RefreshFailure",
    "SessionExpiredError",
    "StorageError",
]
