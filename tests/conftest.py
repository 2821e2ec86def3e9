"""Shared fixtures and canonical exchange API response payloads."""

import pytest
from typing import Any, Dict, List

from core.config import DirectoryConfig
from core.errors import RemoteFetchFailed, SnapshotUnavailable
from core.models.pairs import PairRecord
from memory.inmemory_cache import InMemoryCache


# ----------------------------------------------------------------
# Canonical Coinbase /products payload
# ----------------------------------------------------------------

COINBASE_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": "BTC-USD",
        "base_currency": "BTC",
        "quote_currency": "USD",
        "display_name": "BTC/USD",
        "status": "online",
        "trading_disabled": False,
    },
    {
        "id": "BTC-EUR",
        "base_currency": "BTC",
        "quote_currency": "EUR",
        "display_name": "BTC/EUR",
        "status": "online",
        "trading_disabled": False,
    },
    {
        "id": "ETH-USD",
        "base_currency": "ETH",
        "quote_currency": "USD",
        "display_name": "ETH/USD",
        "status": "online",
        "trading_disabled": False,
    },
    {
        "id": "AAVE-USD",
        "base_currency": "AAVE",
        "quote_currency": "USD",
        "display_name": "AAVE/USD",
        "status": "online",
        "trading_disabled": False,
    },
    {
        "id": "OLD-USD",
        "base_currency": "OLD",
        "quote_currency": "USD",
        "display_name": "OLD/USD",
        "status": "delisted",
        "trading_disabled": False,
    },
    {
        "id": "HALT-USD",
        "base_currency": "HALT",
        "quote_currency": "USD",
        "display_name": "HALT/USD",
        "status": "online",
        "trading_disabled": True,
    },
]


# ----------------------------------------------------------------
# Canonical Kraken /0/public/AssetPairs payload
# ----------------------------------------------------------------

KRAKEN_ASSET_PAIRS: Dict[str, Any] = {
    "error": [],
    "result": {
        "XXBTZUSD": {
            "altname": "XBTUSD", "wsname": "XBT/USD",
            "base": "XXBT", "quote": "ZUSD", "status": "online",
        },
        "XETHZUSD": {
            "altname": "ETHUSD", "wsname": "ETH/USD",
            "base": "XETH", "quote": "ZUSD", "status": "online",
        },
        "SOLUSD": {
            "altname": "SOLUSD",
            "base": "SOL", "quote": "ZUSD", "status": "online",
        },
        "XXBTZEUR": {
            "altname": "XBTEUR", "wsname": "XBT/EUR",
            "base": "XXBT", "quote": "ZEUR", "status": "online",
        },
        "XXBTZUSD.d": {
            "altname": "XBTUSD.d", "wsname": "XBT/USD",
            "base": "XXBT", "quote": "ZUSD",
        },
        "ADAUSD": {
            "altname": "ADAUSD", "wsname": "ADA/USD",
            "base": "ADA", "quote": "ZUSD", "status": "cancel_only",
        },
        "NONAME": {
            "base": "FOO", "quote": "ZUSD", "status": "online",
        },
    },
}

KRAKEN_ERROR_RESPONSE: Dict[str, Any] = {
    "error": ["EGeneral:Invalid"],
    "result": {
        "XXBTZUSD": {"altname": "XBTUSD", "wsname": "XBT/USD", "base": "XXBT", "quote": "ZUSD"},
    },
}

SNAPSHOT_PAIRS: List[Dict[str, str]] = [
    {"symbol": "BTC-USD", "id": "BTC", "display": "BTC/USD"},
    {"symbol": "ETH-USD", "id": "ETH", "display": "ETH/USD"},
    {"symbol": "SOL-USD", "id": "SOL", "display": "SOL/USD"},
]

NOW = 1_700_000_000.0
NOW_MS = int(NOW * 1000)
DAY_MS = 24 * 60 * 60 * 1000


# ----------------------------------------------------------------
# Test doubles
# ----------------------------------------------------------------

class RecordingSource:
    """Pair source that returns canned pairs or raises, counting calls."""

    def __init__(self, pairs: List[PairRecord] = None, error: Exception = None, name: str = "fake"):
        self._pairs = pairs or []
        self._error = error
        self._name = name
        self.calls = 0

    @property
    def name(self) -> str:
        return self._name

    async def fetch_pairs(self) -> List[PairRecord]:
        self.calls += 1
        if self._error is not None:
            raise self._error
        return list(self._pairs)


class RecordingSnapshot:
    """Snapshot loader double with the same load() contract."""

    def __init__(self, pairs: List[PairRecord] = None, error: Exception = None):
        self._pairs = pairs or []
        self._error = error
        self.calls = 0

    async def load(self) -> List[PairRecord]:
        self.calls += 1
        if self._error is not None:
            raise self._error
        return list(self._pairs)


# ----------------------------------------------------------------
# Fixtures
# ----------------------------------------------------------------

@pytest.fixture
def snapshot_records() -> List[PairRecord]:
    return [PairRecord.from_dict(item) for item in SNAPSHOT_PAIRS]


@pytest.fixture
def store() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def config() -> DirectoryConfig:
    return DirectoryConfig(cache_version="v3", cache_ttl_hours=24)


@pytest.fixture
def remote_pairs() -> List[PairRecord]:
    return [
        PairRecord(id="AAVE", symbol="AAVE-USD", display="AAVE/USD"),
        PairRecord(id="BTC", symbol="BTC-USD", display="BTC/USD"),
    ]


@pytest.fixture
def failing_snapshot() -> RecordingSnapshot:
    return RecordingSnapshot(error=SnapshotUnavailable("tokens.json not found"))


@pytest.fixture
def failing_source() -> RecordingSource:
    return RecordingSource(error=RemoteFetchFailed("HTTP 503"))
