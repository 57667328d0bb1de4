"""Result models for transform operations."""

from dataclasses import dataclass
from typing import Optional

from .candle import CryptoCandle


@dataclass
class TransformResult:
    """Outcome of transforming one inbound message."""

    status: str  # "accepted", "dropped"
    records_written: int
    source: Optional[str] = None
    reason: Optional[str] = None  # "unclassified", "missing_data"
    candle: Optional[CryptoCandle] = None

    @property
    def accepted(self) -> bool:
        return self.status == "accepted"


@dataclass
class ReplayResult:
    """Result of replaying a batch of raw messages."""

    messages_read: int
    records_written: int
    dropped: int
    execution_time_ms: int
