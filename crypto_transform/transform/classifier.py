"""Exchange payload classification."""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from pydantic import BaseModel, ValidationError

from ..sources.base import PayloadAdapter, adapter_names
from ..sources.binance import BinanceAdapter
from ..sources.coinbase import CoinbaseAdapter
from ..sources.okx import OkxAdapter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Classification:
    """A payload matched to the adapter that decoded it."""

    adapter: PayloadAdapter
    message: BaseModel


def default_adapters() -> Tuple[PayloadAdapter, ...]:
    """Adapters in priority order: Binance, Coinbase, OKX."""
    return (BinanceAdapter(), CoinbaseAdapter(), OkxAdapter())


class FormatClassifier:
    """Decides which exchange adapter owns a raw payload.

    Adapters are tried in order and the first structural match wins. A
    payload that happens to satisfy several schemas always goes to the
    earliest one.
    """

    def __init__(
        self,
        adapters: Optional[Sequence[PayloadAdapter]] = None,
        diagnostics: Optional[logging.Logger] = None,
    ):
        """Initialize classifier.

        Args:
            adapters: Adapters in priority order (default: Binance, Coinbase, OKX)
            diagnostics: Logger that receives classification failures
        """
        self.adapters: Tuple[PayloadAdapter, ...] = (
            tuple(adapters) if adapters is not None else default_adapters()
        )
        if not self.adapters:
            raise ValueError("FormatClassifier needs at least one adapter")
        self.diagnostics = diagnostics or logger

    def classify(self, raw: bytes) -> Optional[Classification]:
        """Decode ``raw`` with the first adapter whose schema it matches.

        Args:
            raw: Raw message bytes

        Returns:
            Classification, or None if no adapter could decode the payload
        """
        errors = []
        for adapter in self.adapters:
            try:
                message = adapter.decode(raw)
            except ValidationError as e:
                errors.append(f"{adapter.exchange.value}: {e.error_count()} error(s): {e}")
                continue
            return Classification(adapter=adapter, message=message)

        self.diagnostics.warning(
            f"Payload matched none of {adapter_names(self.adapters)}, ignoring it\n"
            + "\n".join(errors)
        )
        return None
