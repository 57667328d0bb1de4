"""Coinbase Exchange ticker payload adapter."""

import logging
from datetime import timezone
from typing import Any

from dateutil import parser
from pydantic import BaseModel, StrictStr

from ..models.candle import CryptoCandle
from .base import Exchange, PayloadAdapter
from .coercion import coerce_float

logger = logging.getLogger(__name__)

TIMESTAMP_FROM_PRICE = "price"
TIMESTAMP_FROM_TIME = "time"
TIMESTAMP_SOURCES = (TIMESTAMP_FROM_PRICE, TIMESTAMP_FROM_TIME)


class CoinbaseMessage(BaseModel):
    """Coinbase ``ticker`` channel message (only the fields we read).

    Example::

        {"type": "ticker", "product_id": "ETH-USD", "price": "3659.37",
         "open_24h": "3395.8", "volume_24h": "94855.97317284",
         "low_24h": "3369.06", "high_24h": "3671.07",
         "time": "2024-04-08T16:58:47.908116Z", ...}
    """

    price: StrictStr
    open_24h: StrictStr
    volume_24h: StrictStr
    low_24h: StrictStr
    high_24h: StrictStr
    # Only read when timestamps come from the ticker time; never required.
    time: Any = None


def parse_exchange_time(value: Any) -> float:
    """Parse an ISO-8601 ticker time into epoch milliseconds, 0.0 on failure.

    Times without a zone are read as UTC.
    """
    if not value or not isinstance(value, str):
        return 0.0
    try:
        parsed = parser.isoparse(value)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.timestamp() * 1000
    except (ValueError, OverflowError) as e:
        logger.debug(f"Unparseable Coinbase ticker time {value!r}: {e}")
        return 0.0


class CoinbaseAdapter(PayloadAdapter):
    """Coinbase ticker adapter.

    Tickers carry 24h statistics rather than a candle, so ``close`` is always
    0.0. By default the ticker ``price`` is written into ``timestamp``, which
    is what downstream consumers of the candle topic have always received;
    set ``timestamp_source="time"`` to use the ticker's own time instead.
    """

    exchange = Exchange.COINBASE
    message_model = CoinbaseMessage

    def __init__(self, timestamp_source: str = TIMESTAMP_FROM_PRICE):
        """Initialize Coinbase adapter.

        Args:
            timestamp_source: "price" or "time"
        """
        if timestamp_source not in TIMESTAMP_SOURCES:
            raise ValueError(
                f"Unknown Coinbase timestamp source: {timestamp_source}. "
                f"Expected one of {TIMESTAMP_SOURCES}"
            )
        self.timestamp_source = timestamp_source

    def convert(self, message: CoinbaseMessage) -> CryptoCandle:
        if self.timestamp_source == TIMESTAMP_FROM_TIME:
            timestamp = parse_exchange_time(message.time)
        else:
            timestamp = coerce_float(message.price)

        return CryptoCandle(
            open=coerce_float(message.open_24h),
            high=coerce_float(message.high_24h),
            low=coerce_float(message.low_24h),
            close=0.0,
            volume=coerce_float(message.volume_24h),
            timestamp=timestamp,
            source=self.exchange.value,
        )
