"""API layer -- re-exports the client, session and transport."""

from booking_client.api.client import BookingClient
from booking_client.api.refresh import RefreshCoordinator
from booking_client.api.session import AuthSession
from booking_client.api.transport import HttpxTransport, Transport

__all__ = [
    "AuthSession",
    "BookingClient",
    "HttpxTransport",
    "RefreshCoordinator",
    "Transport",
]
