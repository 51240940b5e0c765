"""
Response data structures.

Every decoded response is an immutable value object, built fresh per call.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Union


class BookLevel(IntEnum):
    """Order book depth."""
    BEST = 1        # best bid and ask only
    AGGREGATED = 2  # top 50 aggregated price levels
    FULL = 3        # every open order, with order ids


class HistoricRateGranularity(Enum):
    """Supported candle widths, in seconds."""
    ONE_MINUTE = 60
    FIVE_MINUTE = 300
    FIFTEEN_MINUTE = 900
    ONE_HOUR = 3600
    SIX_HOUR = 21600
    ONE_DAY = 86400

    @property
    def seconds(self) -> int:
        return self.value

    @classmethod
    def from_seconds(cls, seconds: int) -> "HistoricRateGranularity":
        """Look up a granularity by its width in seconds."""
        for granularity in cls:
            if granularity.value == seconds:
                return granularity
        supported = ", ".join(str(g.value) for g in cls)
        raise ValueError(f"Unsupported granularity {seconds}s (supported: {supported})")


@dataclass(frozen=True)
class OrderBookEntry:
    """Aggregated price level (book levels 1 and 2)."""
    price: float
    size: float
    num_orders: int


@dataclass(frozen=True)
class OrderBookOrder:
    """Single open order (book level 3)."""
    price: float
    size: float
    order_id: str


BookEntry = Union[OrderBookEntry, OrderBookOrder]


@dataclass(frozen=True)
class OrderBook:
    """Order book snapshot. Bids and asks keep the order the server sent."""
    sequence: int
    bids: List[BookEntry] = field(default_factory=list)
    asks: List[BookEntry] = field(default_factory=list)
    level: BookLevel = BookLevel.BEST

    @property
    def best_bid(self) -> Optional[BookEntry]:
        return self.bids[0] if self.bids else None

    @property
    def best_ask(self) -> Optional[BookEntry]:
        return self.asks[0] if self.asks else None

    @property
    def spread(self) -> Optional[float]:
        """Best ask minus best bid, or None when either side is empty."""
        if not self.bids or not self.asks:
            return None
        return self.asks[0].price - self.bids[0].price


@dataclass(frozen=True)
class Candle:
    """Immutable OHLCV bucket."""
    time: datetime  # bucket start, UTC
    low: float
    high: float
    open: float
    close: float
    volume: float

    @property
    def epoch(self) -> int:
        """Bucket start as UNIX seconds."""
        return int(self.time.timestamp())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "time": self.epoch,
            "low": self.low,
            "high": self.high,
            "open": self.open,
            "close": self.close,
            "volume": self.volume,
        }


@dataclass(frozen=True)
class Product:
    """Tradable pair. Size limits are kept as the server's decimal strings."""
    id: str
    base_currency: str
    quote_currency: str
    base_min_size: str
    base_max_size: str
    quote_increment: str


@dataclass(frozen=True)
class Currency:
    id: str
    name: str
    min_size: float


@dataclass(frozen=True)
class ServerTime:
    iso: datetime
    epoch: float


@dataclass(frozen=True)
class ProductStats:
    """24 hour statistics for a product."""
    open: float
    high: float
    low: float
    volume: float
    last: float
    volume_30day: float


@dataclass(frozen=True)
class ProductTicker:
    trade_id: int
    price: float
    size: float
    bid: float
    ask: float
    volume: float
    time: datetime


@dataclass(frozen=True)
class ProductTrade:
    time: datetime
    trade_id: int
    price: float
    size: float
    side: str  # "buy" or "sell"


@dataclass(frozen=True)
class AccountReportStatus:
    """Status of a requested account report."""
    id: str
    type: str
    status: str
    created_at: Optional[datetime]
    completed_at: Optional[datetime]
    expires_at: Optional[datetime]
    file_url: str = ""
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AccountTrailingVolume:
    """30-day trailing volume for one product."""
    product_id: str
    exchange_volume: float
    volume: float
    recorded_at: datetime
