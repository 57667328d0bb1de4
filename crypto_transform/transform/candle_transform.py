"""Per-message transform from raw exchange payloads to candle records."""

import logging
from typing import Callable, List, Optional, Protocol

from ..config import TransformConfig
from ..models.candle import CandleEncodingError, CryptoCandle
from ..models.record import Record
from ..models.results import TransformResult
from ..sources.base import ConversionError
from ..sources.binance import BinanceAdapter
from ..sources.coinbase import CoinbaseAdapter
from ..sources.okx import OkxAdapter
from .classifier import FormatClassifier

logger = logging.getLogger(__name__)


class RecordWriter(Protocol):
    """Destination for outbound records."""

    def write(self, record: Record) -> None: ...


class ListWriter:
    """RecordWriter that keeps records in memory."""

    def __init__(self):
        self.records: List[Record] = []

    def write(self, record: Record) -> None:
        self.records.append(record)


def build_classifier(
    config: TransformConfig,
    diagnostics: Optional[logging.Logger] = None,
    clock: Optional[Callable[[], float]] = None,
) -> FormatClassifier:
    """Build the default Binance, Coinbase, OKX classifier from configuration."""
    adapters = (
        BinanceAdapter(
            symbol=config.binance_symbol,
            timestamp_source=config.binance_timestamp_source,
            clock=clock,
        ),
        CoinbaseAdapter(timestamp_source=config.coinbase_timestamp_source),
        OkxAdapter(),
    )
    return FormatClassifier(adapters, diagnostics=diagnostics)


class CandleTransform:
    """Turns each raw exchange message into at most one candle record.

    Messages that match no known exchange, or that match but carry no candle
    data, are dropped without error so one bad upstream message never stops
    the stream. Only a candle that cannot be encoded raises.
    """

    def __init__(
        self,
        config: Optional[TransformConfig] = None,
        classifier: Optional[FormatClassifier] = None,
        diagnostics: Optional[logging.Logger] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """Initialize the transform.

        Args:
            config: Adapter configuration (default: TransformConfig())
            classifier: Pre-built classifier; overrides ``config`` and ``clock``
            diagnostics: Logger for drop diagnostics (default: module logger)
            clock: Epoch-millisecond clock for Binance "received" timestamps
        """
        self.config = config or TransformConfig()
        self.config.validate()
        self.diagnostics = diagnostics or logger
        self.classifier = classifier or build_classifier(
            self.config, diagnostics=self.diagnostics, clock=clock
        )

    def process(self, raw: Optional[bytes], writer: RecordWriter) -> TransformResult:
        """Transform one inbound message.

        Args:
            raw: Raw message value
            writer: Receives the candle record if the message is accepted

        Returns:
            TransformResult describing whether a record was written

        Raises:
            CandleEncodingError: If an accepted candle cannot be serialized
        """
        classification = self.classifier.classify(raw or b"")
        if classification is None:
            return TransformResult(status="dropped", records_written=0, reason="unclassified")

        source = classification.adapter.exchange.value
        try:
            candle = classification.adapter.convert(classification.message)
        except ConversionError as e:
            self.diagnostics.warning(f"Dropping {source} message: {e}")
            return TransformResult(
                status="dropped", records_written=0, source=source, reason="missing_data"
            )

        try:
            record = self._to_record(candle)
        except CandleEncodingError as e:
            self.diagnostics.error(str(e))
            raise

        writer.write(record)
        self.diagnostics.debug(
            f"{source} candle: {candle.timestamp} O:{candle.open} H:{candle.high} "
            f"L:{candle.low} C:{candle.close} V:{candle.volume}"
        )
        return TransformResult(
            status="accepted", records_written=1, source=source, candle=candle
        )

    def transform(self, raw: Optional[bytes]) -> List[Record]:
        """Transform one message and return the records it produced (zero or one)."""
        writer = ListWriter()
        self.process(raw, writer)
        return writer.records

    def _to_record(self, candle: CryptoCandle) -> Record:
        return Record(key=candle.record_key(), value=candle.to_json())
