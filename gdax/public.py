"""
Public market data endpoints.

Each function is a single GET through GdaxClient. None of them need
credentials, but an authenticated client works just as well.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Union

from gdax.connectors.client import GdaxClient
from gdax.connectors.decoders import (
    decode_candles,
    decode_currencies,
    decode_order_book,
    decode_product_stats,
    decode_product_ticker,
    decode_product_trades,
    decode_products,
    decode_server_time,
)
from gdax.models import (
    BookLevel,
    Candle,
    Currency,
    HistoricRateGranularity,
    OrderBook,
    Product,
    ProductStats,
    ProductTicker,
    ProductTrade,
    ServerTime,
)

logger = logging.getLogger("Gdax.Public")

ISO_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def format_iso8601(value: datetime) -> str:
    """Format a datetime as UTC ISO-8601; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(ISO_FORMAT)


def get_products(client: GdaxClient) -> List[Product]:
    return client.get("/products", decoder=decode_products)


def get_time(client: GdaxClient) -> ServerTime:
    return client.get("/time", decoder=decode_server_time)


def get_currencies(client: GdaxClient) -> List[Currency]:
    return client.get("/currencies", decoder=decode_currencies)


def get_product_24hr_stats(client: GdaxClient, product_id: str) -> ProductStats:
    return client.get(f"/products/{product_id}/stats", decoder=decode_product_stats)


def get_product_ticker(client: GdaxClient, product_id: str) -> ProductTicker:
    return client.get(f"/products/{product_id}/ticker", decoder=decode_product_ticker)


def get_product_trades(client: GdaxClient, product_id: str) -> List[ProductTrade]:
    return client.get(f"/products/{product_id}/trades", decoder=decode_product_trades)


def get_product_order_book(client: GdaxClient, product_id: str, level: Union[BookLevel, int]) -> OrderBook:
    """
    Fetch an order book snapshot at the given level.

    Args:
        client: Client to send the request with
        product_id: Product ID (e.g., "BTC-USD")
        level: 1 (best bid/ask), 2 (top 50 aggregated) or 3 (full, per order)

    Returns:
        OrderBook whose entries are OrderBookEntry (levels 1, 2) or OrderBookOrder (level 3)
    """
    book_level = BookLevel(level)
    return client.get(
        f"/products/{product_id}/book",
        params={"level": int(book_level)},
        decoder=lambda payload: decode_order_book(payload, book_level),
    )


def get_product_order_book_level1(client: GdaxClient, product_id: str) -> OrderBook:
    return get_product_order_book(client, product_id, BookLevel.BEST)


def get_product_order_book_level2(client: GdaxClient, product_id: str) -> OrderBook:
    return get_product_order_book(client, product_id, BookLevel.AGGREGATED)


def get_product_order_book_level3(client: GdaxClient, product_id: str) -> OrderBook:
    return get_product_order_book(client, product_id, BookLevel.FULL)


def get_product_historic_rates(
    client: GdaxClient,
    product_id: str,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    granularity: Union[HistoricRateGranularity, int] = HistoricRateGranularity.ONE_MINUTE,
) -> List[Candle]:
    """
    Fetch historic rates (candles) for a product.

    Args:
        client: Client to send the request with
        product_id: Product ID (e.g., "ETH-USD")
        start: Start of the range (optional)
        end: End of the range (optional)
        granularity: Candle width, as an enum member or in seconds

    Returns:
        Candles in server order (newest first)

    Raises:
        ValueError: If granularity is not a supported width
    """
    if not isinstance(granularity, HistoricRateGranularity):
        granularity = HistoricRateGranularity.from_seconds(int(granularity))

    params: Dict[str, str] = {"granularity": str(granularity.seconds)}
    if start is not None:
        params["start"] = format_iso8601(start)
    if end is not None:
        params["end"] = format_iso8601(end)

    candles = client.get(f"/products/{product_id}/candles", params=params, decoder=decode_candles)
    logger.debug(f"Fetched {len(candles)} candles for {product_id} at {granularity.seconds}s")
    return candles
