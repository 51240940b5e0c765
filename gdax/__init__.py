"""
gdax - Client for the GDAX (Coinbase Exchange) REST API.

Usage:
    from gdax import ClientConfig, Credentials, GdaxClient
    from gdax.public import get_product_order_book_level2

    config = ClientConfig.sandbox(Credentials(secret=..., key=..., passphrase=...))
    with GdaxClient(config) as client:
        book = get_product_order_book_level2(client, "BTC-USD")
"""

from gdax.config import ClientConfig, Credentials
from gdax.connectors.client import GdaxClient
from gdax.connectors.http_mixin import (
    ApiError,
    DecodeError,
    GdaxError,
    InvalidCredential,
    MalformedEntry,
    TransportError,
)
from gdax.models import (
    BookLevel,
    Candle,
    HistoricRateGranularity,
    OrderBook,
    OrderBookEntry,
    OrderBookOrder,
)
from gdax.version import __version__

__all__ = [
    "ClientConfig",
    "Credentials",
    "GdaxClient",
    "GdaxError",
    "ApiError",
    "DecodeError",
    "InvalidCredential",
    "MalformedEntry",
    "TransportError",
    "BookLevel",
    "Candle",
    "HistoricRateGranularity",
    "OrderBook",
    "OrderBookEntry",
    "OrderBookOrder",
    "__version__",
]
