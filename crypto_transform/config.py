"""Configuration management."""

import os
from dataclasses import dataclass

from .sources import binance, coinbase


@dataclass
class TransformConfig:
    """Adapter behavior for the candle transform."""

    binance_timestamp_source: str = binance.TIMESTAMP_FROM_KLINE
    binance_symbol: str = binance.DEFAULT_SYMBOL
    coinbase_timestamp_source: str = coinbase.TIMESTAMP_FROM_PRICE

    @classmethod
    def from_env(cls) -> "TransformConfig":
        """Load transform configuration from environment variables.

        - BINANCE_TIMESTAMP_SOURCE: "kline" (default) or "received"
        - BINANCE_SYMBOL: symbol stamped on Binance candles (default: BNBBTC)
        - COINBASE_TIMESTAMP_SOURCE: "price" (default) or "time"
        """
        config = cls(
            binance_timestamp_source=os.getenv(
                "BINANCE_TIMESTAMP_SOURCE", binance.TIMESTAMP_FROM_KLINE
            ).strip().lower(),
            binance_symbol=os.getenv("BINANCE_SYMBOL", binance.DEFAULT_SYMBOL).strip(),
            coinbase_timestamp_source=os.getenv(
                "COINBASE_TIMESTAMP_SOURCE", coinbase.TIMESTAMP_FROM_PRICE
            ).strip().lower(),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Validate configuration."""
        if self.binance_timestamp_source not in binance.TIMESTAMP_SOURCES:
            raise ValueError(
                f"BINANCE_TIMESTAMP_SOURCE must be one of {binance.TIMESTAMP_SOURCES}, "
                f"got '{self.binance_timestamp_source}'"
            )
        if not self.binance_symbol:
            raise ValueError("BINANCE_SYMBOL must not be empty")
        if self.coinbase_timestamp_source not in coinbase.TIMESTAMP_SOURCES:
            raise ValueError(
                f"COINBASE_TIMESTAMP_SOURCE must be one of {coinbase.TIMESTAMP_SOURCES}, "
                f"got '{self.coinbase_timestamp_source}'"
            )


@dataclass
class RunnerConfig:
    """Pub/Sub wiring for the streaming runner and replay job."""

    project_id: str
    input_subscription: str = "crypto-raw-transform"
    output_topic: str = "crypto-candles"

    @classmethod
    def from_env(cls) -> "RunnerConfig":
        """Load runner configuration from environment variables.

        Requires GCP_PROJECT_ID. Fails immediately if it is missing.
        """
        project_id = os.getenv("GCP_PROJECT_ID", "").strip()
        if not project_id:
            raise ValueError(
                "GCP_PROJECT_ID is not set.\n"
                "  - Set GCP_PROJECT_ID to the project that owns the crypto topics"
            )

        return cls(
            project_id=project_id,
            input_subscription=os.getenv("CRYPTO_RAW_SUBSCRIPTION", "crypto-raw-transform"),
            output_topic=os.getenv("CRYPTO_CANDLES_TOPIC", "crypto-candles"),
        )

    def validate(self) -> None:
        """Validate configuration."""
        if not self.project_id:
            raise ValueError("GCP_PROJECT_ID is required")
        if not self.input_subscription:
            raise ValueError("CRYPTO_RAW_SUBSCRIPTION must not be empty")
        if not self.output_topic:
            raise ValueError("CRYPTO_CANDLES_TOPIC must not be empty")
