"""Tests for configuration loading."""

import pytest

from crypto_transform.config import RunnerConfig, TransformConfig


class TestTransformConfig:
    """Adapter configuration from the environment."""

    def test_defaults(self, monkeypatch):
        """Test that defaults keep kline and price timestamps."""
        for name in ["BINANCE_TIMESTAMP_SOURCE", "BINANCE_SYMBOL", "COINBASE_TIMESTAMP_SOURCE"]:
            monkeypatch.delenv(name, raising=False)

        config = TransformConfig.from_env()

        assert config.binance_timestamp_source == "kline"
        assert config.binance_symbol == "BNBBTC"
        assert config.coinbase_timestamp_source == "price"

    def test_from_env(self, monkeypatch):
        """Test that environment variables override defaults."""
        monkeypatch.setenv("BINANCE_TIMESTAMP_SOURCE", " Received ")
        monkeypatch.setenv("BINANCE_SYMBOL", "ETHBTC")
        monkeypatch.setenv("COINBASE_TIMESTAMP_SOURCE", "TIME")

        config = TransformConfig.from_env()

        assert config.binance_timestamp_source == "received"
        assert config.binance_symbol == "ETHBTC"
        assert config.coinbase_timestamp_source == "time"

    @pytest.mark.parametrize(
        "name, value, message",
        [
            ("BINANCE_TIMESTAMP_SOURCE", "close_time", "BINANCE_TIMESTAMP_SOURCE"),
            ("BINANCE_SYMBOL", "  ", "BINANCE_SYMBOL"),
            ("COINBASE_TIMESTAMP_SOURCE", "sequence", "COINBASE_TIMESTAMP_SOURCE"),
        ],
    )
    def test_invalid_values(self, monkeypatch, name, value, message):
        """Test that invalid values fail with the variable name in the error."""
        monkeypatch.setenv(name, value)
        with pytest.raises(ValueError, match=message):
            TransformConfig.from_env()


class TestRunnerConfig:
    """Pub/Sub wiring from the environment."""

    def test_requires_project(self, monkeypatch):
        """Test that a missing project ID fails immediately."""
        monkeypatch.delenv("GCP_PROJECT_ID", raising=False)
        with pytest.raises(ValueError, match="GCP_PROJECT_ID"):
            RunnerConfig.from_env()

    def test_from_env(self, monkeypatch):
        """Test that topic and subscription names come from the environment."""
        monkeypatch.setenv("GCP_PROJECT_ID", "demo-project")
        monkeypatch.setenv("CRYPTO_RAW_SUBSCRIPTION", "raw-sub")
        monkeypatch.setenv("CRYPTO_CANDLES_TOPIC", "candles")

        config = RunnerConfig.from_env()
        config.validate()

        assert config.project_id == "demo-project"
        assert config.input_subscription == "raw-sub"
        assert config.output_topic == "candles"

    def test_defaults(self, monkeypatch):
        """Test default subscription and topic names."""
        monkeypatch.setenv("GCP_PROJECT_ID", "demo-project")
        monkeypatch.delenv("CRYPTO_RAW_SUBSCRIPTION", raising=False)
        monkeypatch.delenv("CRYPTO_CANDLES_TOPIC", raising=False)

        config = RunnerConfig.from_env()

        assert config.input_subscription == "crypto-raw-transform"
        assert config.output_topic == "crypto-candles"

    def test_validate_rejects_empty_topic(self):
        """Test that an empty output topic is invalid."""
        with pytest.raises(ValueError, match="CRYPTO_CANDLES_TOPIC"):
            RunnerConfig(project_id="demo-project", output_topic="").validate()
