"""Request pipeline: signing, transport and response decoding."""

from gdax.connectors.client import GdaxClient
from gdax.connectors.http_mixin import (
    ApiError,
    DecodeError,
    GdaxError,
    InvalidCredential,
    MalformedEntry,
    TransportError,
)

__all__ = [
    "GdaxClient",
    "GdaxError",
    "ApiError",
    "DecodeError",
    "InvalidCredential",
    "MalformedEntry",
    "TransportError",
]
