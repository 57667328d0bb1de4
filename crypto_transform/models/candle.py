"""Canonical candle model."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_core import PydanticSerializationError


class CandleEncodingError(Exception):
    """Raised when a candle cannot be encoded for the output topic."""

    pass


class CryptoCandle(BaseModel):
    """Normalized OHLCV candle emitted for every accepted exchange message."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    open: float = Field(..., description="Open price")
    high: float = Field(..., description="High price")
    low: float = Field(..., description="Low price")
    close: float = Field(..., description="Close price")
    volume: float = Field(..., description="Traded volume")
    timestamp: float = Field(..., description="Epoch milliseconds (see adapter notes)")
    source: str = Field(..., description="Originating exchange (e.g., Binance)")
    symbol: Optional[str] = Field(default=None, description="Instrument identifier, if known")

    def record_key(self) -> bytes:
        """Key used for the outbound record."""
        return self.source.encode("utf-8")

    def to_json(self) -> bytes:
        """Encode the candle as compact JSON.

        ``symbol`` is left out when the adapter could not derive one.

        Raises:
            CandleEncodingError: If the candle cannot be serialized
        """
        try:
            return self.model_dump_json(exclude_none=True).encode("utf-8")
        except (PydanticSerializationError, ValueError) as e:
            raise CandleEncodingError(f"Failed to encode {self.source} candle: {e}") from e
