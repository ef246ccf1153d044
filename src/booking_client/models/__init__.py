"""Re-export the request and token models."""

from booking_client.models.request import PendingRequest
from booking_client.models.tokens import RefreshResult, TokenPair

__all__ = [
    "PendingRequest",
    "RefreshResult",
    "TokenPair",
]
