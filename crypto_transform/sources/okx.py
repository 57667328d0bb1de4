"""OKX mark-price candle payload adapter."""

from typing import List

from pydantic import BaseModel, StrictStr

from ..models.candle import CryptoCandle
from .base import Exchange, PayloadAdapter, first_row
from .coercion import coerce_float

CANDLE_FIELDS = 5


class OkxMessage(BaseModel):
    """OKX ``mark-price-candle*`` push.

    Example::

        {"arg": {"channel": "mark-price-candle1m", "instId": "BTC-USD-SWAP"},
         "data": [["1712597400000", "71338.4", "71338.8", "71338.1", "71338.8", "0"]]}

    Rows are ``[ts, o, h, l, c, confirm]``, all strings.
    """

    data: List[List[StrictStr]]


class OkxAdapter(PayloadAdapter):
    """OKX adapter. Mark-price candles have no volume, so it is always 0.0."""

    exchange = Exchange.OKX
    message_model = OkxMessage

    def convert(self, message: OkxMessage) -> CryptoCandle:
        row = first_row(message.data, CANDLE_FIELDS)

        return CryptoCandle(
            open=coerce_float(row[1]),
            high=coerce_float(row[2]),
            low=coerce_float(row[3]),
            close=coerce_float(row[4]),
            volume=0.0,
            timestamp=coerce_float(row[0]),
            source=self.exchange.value,
        )
