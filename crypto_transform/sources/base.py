"""Base classes for exchange payload adapters."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar, List, Sequence, Type, TypeVar

from pydantic import BaseModel

from ..models.candle import CryptoCandle

T = TypeVar("T")


class ConversionError(Exception):
    """Base exception for payloads that decode but cannot become a candle."""

    pass


class MissingDataError(ConversionError):
    """The payload's candle rows are empty or too short."""

    pass


class Exchange(str, Enum):
    """Exchanges whose payloads can be normalized.

    Values are the ``source`` written into each candle.
    """

    BINANCE = "Binance"
    COINBASE = "Coinbase"
    OKX = "Okx"


def first_row(rows: List[List[T]], min_width: int) -> List[T]:
    """Return the first candle row, enforcing the non-empty-data invariant.

    Args:
        rows: Outer list of candle rows from the payload
        min_width: Number of positions the adapter reads from the row

    Returns:
        The first row

    Raises:
        MissingDataError: If there are no rows, or the first row is empty
            or shorter than ``min_width``
    """
    if not rows or not rows[0]:
        raise MissingDataError("missing data")
    row = rows[0]
    if len(row) < min_width:
        raise MissingDataError(
            f"missing data: expected at least {min_width} fields, got {len(row)}"
        )
    return row


class PayloadAdapter(ABC):
    """Decoder and mapper for one exchange's wire format."""

    exchange: ClassVar[Exchange]
    message_model: ClassVar[Type[BaseModel]]

    def decode(self, raw: bytes) -> BaseModel:
        """Decode raw bytes against this exchange's schema.

        Raises:
            pydantic.ValidationError: If the bytes are not JSON or do not have
                the schema's required fields
        """
        return self.message_model.model_validate_json(raw)

    @abstractmethod
    def convert(self, message: BaseModel) -> CryptoCandle:
        """Map a decoded message onto the canonical candle.

        Raises:
            MissingDataError: If the message carries no usable candle row
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def adapter_names(adapters: Sequence[PayloadAdapter]) -> List[str]:
    """Exchange names for a sequence of adapters, in order."""
    return [adapter.exchange.value for adapter in adapters]
