"""
Exchange Integrations - Base and Mock

Shared HTTP plumbing for pair sources and a static source for offline use.
"""

from typing import Any, Dict, List, Optional
import logging

import httpx

from core.interfaces import IPairSource
from core.models.pairs import PairRecord
from core.pairs.collation import collation_key
from core.errors import RemoteFetchFailed

logger = logging.getLogger(__name__)


def sort_pairs(pairs: List[PairRecord]) -> List[PairRecord]:
    """Order pairs by display name using locale-aware collation"""
    return sorted(pairs, key=lambda pair: collation_key(pair.display))


class HttpPairSource(IPairSource):
    """
    Base for exchanges queried over public REST endpoints.

    A shared client may be injected; otherwise one is opened per request.
    """

    def __init__(
        self,
        quote_currency: str = "USD",
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.quote_currency = quote_currency.upper()
        self.timeout = timeout
        self._client = client

    async def _get_json(self, url: str, params: Optional[Dict] = None) -> Any:
        """GET url and decode JSON, mapping transport failures to RemoteFetchFailed"""
        try:
            if self._client is not None:
                response = await self._client.get(url, params=params, timeout=self.timeout)
                response.raise_for_status()
                return response.json()

            async with httpx.AsyncClient() as client:
                response = await client.get(url, params=params, timeout=self.timeout)
                response.raise_for_status()
                return response.json()

        except httpx.HTTPStatusError as e:
            raise RemoteFetchFailed(
                f"{self.name} API error: HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise RemoteFetchFailed(f"{self.name} request failed: {e}") from e
        except ValueError as e:
            raise RemoteFetchFailed(f"{self.name} returned malformed JSON: {e}") from e


class MockPairSource(IPairSource):
    """
    Offline pair source for demos and tests.
    Returns a fixed set of USD pairs without any network access.
    """

    DEFAULT_BASES = ["BTC", "ETH", "SOL", "DOGE", "SHIB", "PEPE", "BONK", "WIF"]

    def __init__(self, bases: Optional[List[str]] = None, quote_currency: str = "USD"):
        self._bases = bases or list(self.DEFAULT_BASES)
        self._quote = quote_currency.upper()
        self.calls = 0
        logger.info(f"[MOCK] Pair source initialized with {len(self._bases)} {self._quote} pairs")

    @property
    def name(self) -> str:
        return "mock"

    async def fetch_pairs(self) -> List[PairRecord]:
        self.calls += 1
        return sort_pairs([
            PairRecord(
                id=base,
                symbol=f"{base}-{self._quote}",
                display=f"{base}/{self._quote}"
            )
            for base in self._bases
        ])
