"""Shared test fixtures and utilities."""

import json
from unittest.mock import MagicMock

import pytest

from crypto_transform.transform.candle_transform import CandleTransform

BINANCE_PAYLOAD = {
    "id": "1dbbeb56-8eea-466a-8f6e-86bdcfa2fc0b",
    "status": 200,
    "result": [
        [
            1655971200000,
            "0.01086000",
            "0.01086600",
            "0.01083600",
            "0.01083800",
            "2290.53800000",
            1655974799999,
            "24.85074442",
            2283,
            "1171.64000000",
            "12.71225884",
            "0",
        ]
    ],
    "rateLimits": [
        {
            "rateLimitType": "REQUEST_WEIGHT",
            "interval": "MINUTE",
            "intervalNum": 1,
            "limit": 6000,
            "count": 2,
        }
    ],
}

COINBASE_PAYLOAD = {
    "type": "ticker",
    "sequence": 58303904263,
    "product_id": "ETH-USD",
    "price": "3659.37",
    "open_24h": "3395.8",
    "volume_24h": "94855.97317284",
    "low_24h": "3369.06",
    "high_24h": "3671.07",
    "volume_30d": "3689477.67843382",
    "best_bid": "3659.36",
    "best_bid_size": "1.29804582",
    "best_ask": "3659.38",
    "best_ask_size": "0.43569488",
    "side": "buy",
    "time": "2024-04-08T16:58:47.908116Z",
    "trade_id": 512218036,
    "last_size": "0.05642456",
}

OKX_PAYLOAD = {
    "arg": {"channel": "mark-price-candle1m", "instId": "BTC-USD-SWAP"},
    "data": [["1712597400000", "71338.4", "71338.8", "71338.1", "71338.8", "0"]],
}


def to_bytes(payload) -> bytes:
    """Encode a payload the way it arrives from the raw topic."""
    return json.dumps(payload).encode("utf-8")


@pytest.fixture
def binance_raw():
    """Raw Binance klines response."""
    return to_bytes(BINANCE_PAYLOAD)


@pytest.fixture
def coinbase_raw():
    """Raw Coinbase ticker message."""
    return to_bytes(COINBASE_PAYLOAD)


@pytest.fixture
def okx_raw():
    """Raw OKX mark-price candle push."""
    return to_bytes(OKX_PAYLOAD)


@pytest.fixture
def diagnostics():
    """Mock logger standing in for the diagnostic sink."""
    return MagicMock()


@pytest.fixture
def transform(diagnostics):
    """Transform with default configuration and a mock diagnostic sink."""
    return CandleTransform(diagnostics=diagnostics)
