"""Outbound record model."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Record:
    """Key/value record handed to the output topic."""

    key: Optional[bytes]
    value: Optional[bytes]
