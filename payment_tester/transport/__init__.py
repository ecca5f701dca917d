"""Transport module - HTTP communication."""

from .http_client import (
    DEFAULT_ENDPOINT,
    Outcome,
    PaymentApiClient,
    Responded,
    TransportFailed,
)

__all__ = [
    "DEFAULT_ENDPOINT",
    "Outcome",
    "PaymentApiClient",
    "Responded",
    "TransportFailed",
]
