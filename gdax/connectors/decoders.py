"""
Decoders from parsed JSON to response value objects.

Order book and candle payloads are positional arrays rather than objects, so
they are decoded by position. The decoder is told which variant to expect
(book level) and fails closed with MalformedEntry on any mismatch.
"""

import json
import logging
import math
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from gdax.connectors.http_mixin import ApiError, DecodeError, MalformedEntry
from gdax.models import (
    AccountReportStatus,
    AccountTrailingVolume,
    BookLevel,
    Candle,
    Currency,
    OrderBook,
    OrderBookEntry,
    OrderBookOrder,
    Product,
    ProductStats,
    ProductTicker,
    ProductTrade,
    ServerTime,
)

logger = logging.getLogger("Gdax.Decoders")

BOOK_ENTRY_LENGTH = 3
CANDLE_ROW_LENGTH = 6

FRACTION_RE = re.compile(r"\.(\d+)")


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # json.loads accepts NaN and Infinity
    return not isinstance(value, float) or math.isfinite(value)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp ("...Z" or with offset) into an aware datetime.

    The exchange sends anywhere from 1 to 6 fractional digits; the fraction is
    padded or cut to microseconds so older fromisoformat() accepts it.
    """
    if not value:
        return None
    value = FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value, count=1)
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def decode_error(body: Union[bytes, str], status_code: Optional[int] = None) -> ApiError:
    """
    Decode a non-200 response body.

    Args:
        body: Raw response body
        status_code: HTTP status, kept on the returned error

    Returns:
        ApiError whose text is exactly the server's message

    Raises:
        DecodeError: If the body is not a ``{"message": "<text>"}`` envelope
    """
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    try:
        payload = json.loads(text)
    except ValueError as e:
        raise DecodeError(f"Error body is not valid JSON: {e}", status_code=status_code, body=text) from e

    if not isinstance(payload, dict) or not isinstance(payload.get("message"), str):
        raise DecodeError("Error body has no string 'message' field", status_code=status_code, body=text)

    return ApiError(payload["message"], status_code=status_code)


# ========== Order book ==========

def _decode_decimal_string(value: Any, name: str, index: int, side: str) -> float:
    if not isinstance(value, str):
        raise MalformedEntry(f"{name} must be a decimal string, got {type(value).__name__}", index, side)
    try:
        number = float(value)
    except ValueError:
        raise MalformedEntry(f"{name} {value!r} is not a decimal", index, side) from None
    if not math.isfinite(number):
        raise MalformedEntry(f"{name} {value!r} is not finite", index, side)
    return number


def _decode_book_entry(raw: Any, level: BookLevel, index: int, side: str):
    if not isinstance(raw, list) or len(raw) != BOOK_ENTRY_LENGTH:
        length = len(raw) if isinstance(raw, list) else type(raw).__name__
        raise MalformedEntry(f"expected a {BOOK_ENTRY_LENGTH}-element array, got {length}", index, side)

    price = _decode_decimal_string(raw[0], "price", index, side)
    size = _decode_decimal_string(raw[1], "size", index, side)
    third = raw[2]

    if level == BookLevel.FULL:
        if not isinstance(third, str):
            raise MalformedEntry(f"order id must be a string, got {type(third).__name__}", index, side)
        return OrderBookOrder(price=price, size=size, order_id=third)

    if not _is_integer(third):
        raise MalformedEntry(f"order count must be an integer, got {type(third).__name__}", index, side)
    return OrderBookEntry(price=price, size=size, num_orders=third)


def _decode_book_side(payload: Dict[str, Any], side: str, level: BookLevel) -> list:
    raw_entries = payload.get(side)
    if not isinstance(raw_entries, list):
        raise DecodeError(f"Order book '{side}' must be an array")
    return [_decode_book_entry(raw, level, i, side) for i, raw in enumerate(raw_entries)]


def decode_order_book(payload: Any, level: Union[BookLevel, int]) -> OrderBook:
    """
    Decode an order book snapshot.

    Levels 1 and 2 carry ``[price, size, num_orders]`` tuples, level 3 carries
    ``[price, size, order_id]``. The arrays look the same, so the level has to
    come from the request, not the payload.

    Args:
        payload: Parsed JSON object with ``sequence``, ``bids`` and ``asks``
        level: Book level that was requested (1, 2 or 3)

    Returns:
        OrderBook with entries in payload order

    Raises:
        ValueError: If level is not 1, 2 or 3
        DecodeError: If the top-level shape is wrong
        MalformedEntry: If any tuple has the wrong arity or element types
    """
    book_level = BookLevel(level)

    if not isinstance(payload, dict):
        raise DecodeError(f"Order book must be a JSON object, got {type(payload).__name__}")
    sequence = payload.get("sequence")
    if not _is_integer(sequence):
        raise DecodeError(f"Order book 'sequence' must be an integer, got {sequence!r}")

    book = OrderBook(
        sequence=sequence,
        bids=_decode_book_side(payload, "bids", book_level),
        asks=_decode_book_side(payload, "asks", book_level),
        level=book_level,
    )
    logger.debug(f"Decoded level {int(book_level)} book seq={sequence} bids={len(book.bids)} asks={len(book.asks)}")
    return book


# ========== Historic rates ==========

def _decode_candle_row(raw: Any, index: int) -> Candle:
    if not isinstance(raw, list) or len(raw) != CANDLE_ROW_LENGTH:
        length = len(raw) if isinstance(raw, list) else type(raw).__name__
        raise MalformedEntry(f"expected a {CANDLE_ROW_LENGTH}-element array, got {length}", index)

    for position, value in enumerate(raw):
        if not _is_number(value):
            raise MalformedEntry(f"element {position} must be numeric, got {type(value).__name__}", index)

    epoch = raw[0]
    if isinstance(epoch, float) and not epoch.is_integer():
        raise MalformedEntry(f"time {epoch!r} is not whole seconds", index)
    try:
        time = datetime.fromtimestamp(int(epoch), tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise MalformedEntry(f"time {epoch!r} out of range: {e}", index) from e

    low, high, open_, close, volume = (float(v) for v in raw[1:])
    return Candle(time=time, low=low, high=high, open=open_, close=close, volume=volume)


def decode_candles(payload: Any) -> List[Candle]:
    """
    Decode historic rates: ``[[time, low, high, open, close, volume], ...]``.

    Row order from the server (normally newest first) is kept.

    Raises:
        DecodeError: If the payload is not an array
        MalformedEntry: If a row is not six numbers
    """
    if not isinstance(payload, list):
        raise DecodeError(f"Historic rates must be a JSON array, got {type(payload).__name__}")
    return [_decode_candle_row(raw, i) for i, raw in enumerate(payload)]


# ========== Flat responses ==========

def decode_products(payload: List[Dict[str, Any]]) -> List[Product]:
    return [
        Product(
            id=item["id"],
            base_currency=item["base_currency"],
            quote_currency=item["quote_currency"],
            base_min_size=item["base_min_size"],
            base_max_size=item["base_max_size"],
            quote_increment=item["quote_increment"],
        )
        for item in payload
    ]


def decode_currencies(payload: List[Dict[str, Any]]) -> List[Currency]:
    return [
        Currency(id=item["id"], name=item["name"], min_size=float(item["min_size"]))
        for item in payload
    ]


def decode_server_time(payload: Dict[str, Any]) -> ServerTime:
    return ServerTime(iso=parse_timestamp(payload["iso"]), epoch=float(payload["epoch"]))


def decode_product_stats(payload: Dict[str, Any]) -> ProductStats:
    return ProductStats(
        open=float(payload["open"]),
        high=float(payload["high"]),
        low=float(payload["low"]),
        volume=float(payload["volume"]),
        last=float(payload["last"]),
        volume_30day=float(payload["volume_30day"]),
    )


def decode_product_ticker(payload: Dict[str, Any]) -> ProductTicker:
    return ProductTicker(
        trade_id=int(payload["trade_id"]),
        price=float(payload["price"]),
        size=float(payload["size"]),
        bid=float(payload["bid"]),
        ask=float(payload["ask"]),
        volume=float(payload["volume"]),
        time=parse_timestamp(payload["time"]),
    )


def decode_product_trades(payload: List[Dict[str, Any]]) -> List[ProductTrade]:
    return [
        ProductTrade(
            time=parse_timestamp(item["time"]),
            trade_id=int(item["trade_id"]),
            price=float(item["price"]),
            size=float(item["size"]),
            side=item["side"],
        )
        for item in payload
    ]


def decode_account_report_status(payload: Dict[str, Any]) -> AccountReportStatus:
    return AccountReportStatus(
        id=payload["id"],
        type=payload["type"],
        status=payload["status"],
        created_at=parse_timestamp(payload.get("created_at")),
        completed_at=parse_timestamp(payload.get("completed_at")),
        expires_at=parse_timestamp(payload.get("expires_at")),
        file_url=payload.get("file_url") or "",
        params=dict(payload.get("params") or {}),
    )


def decode_account_trailing_volume(payload: List[Dict[str, Any]]) -> List[AccountTrailingVolume]:
    return [
        AccountTrailingVolume(
            product_id=item["product_id"],
            exchange_volume=float(item["exchange_volume"]),
            volume=float(item["volume"]),
            recorded_at=parse_timestamp(item["recorded_at"]),
        )
        for item in payload
    ]
