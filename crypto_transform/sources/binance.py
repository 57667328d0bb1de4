"""Binance kline payload adapter.

Binance answers a ``klines`` request with a response whose ``result`` holds
kline rows::

    [open_time, open, high, low, close, volume, close_time,
     quote_volume, trades, taker_base_volume, taker_quote_volume, ignore]

Prices and volumes arrive as quoted decimals, times and trade counts as
numbers.
"""

from datetime import datetime, timezone
from typing import Callable, List, Optional

from pydantic import BaseModel

from ..models.candle import CryptoCandle
from .base import Exchange, PayloadAdapter, first_row
from .coercion import NumericField, coerce_float

DEFAULT_SYMBOL = "BNBBTC"
KLINE_FIELDS = 6

TIMESTAMP_FROM_KLINE = "kline"
TIMESTAMP_FROM_RECEIVED = "received"
TIMESTAMP_SOURCES = (TIMESTAMP_FROM_KLINE, TIMESTAMP_FROM_RECEIVED)


def utc_now_ms() -> float:
    """Current wall-clock time in epoch milliseconds."""
    return datetime.now(timezone.utc).timestamp() * 1000


class BinanceMessage(BaseModel):
    """Binance ``klines`` response (only the fields we read)."""

    result: List[List[NumericField]]


class BinanceAdapter(PayloadAdapter):
    """Binance kline adapter.

    The request does not echo the symbol back, so every candle carries the
    configured ``symbol``.
    """

    exchange = Exchange.BINANCE
    message_model = BinanceMessage

    def __init__(
        self,
        symbol: str = DEFAULT_SYMBOL,
        timestamp_source: str = TIMESTAMP_FROM_KLINE,
        clock: Optional[Callable[[], float]] = None,
    ):
        """Initialize Binance adapter.

        Args:
            symbol: Symbol written into every candle
            timestamp_source: "kline" uses the kline open time, "received"
                uses the wall clock at conversion time
            clock: Optional epoch-millisecond clock for testing
        """
        if timestamp_source not in TIMESTAMP_SOURCES:
            raise ValueError(
                f"Unknown Binance timestamp source: {timestamp_source}. "
                f"Expected one of {TIMESTAMP_SOURCES}"
            )
        self.symbol = symbol
        self.timestamp_source = timestamp_source
        self.clock = clock or utc_now_ms

    def convert(self, message: BinanceMessage) -> CryptoCandle:
        row = first_row(message.result, KLINE_FIELDS)

        if self.timestamp_source == TIMESTAMP_FROM_RECEIVED:
            timestamp = self.clock()
        else:
            timestamp = coerce_float(row[0])

        return CryptoCandle(
            open=coerce_float(row[1]),
            high=coerce_float(row[2]),
            low=coerce_float(row[3]),
            close=coerce_float(row[4]),
            volume=coerce_float(row[5]),
            timestamp=timestamp,
            source=self.exchange.value,
            symbol=self.symbol,
        )
