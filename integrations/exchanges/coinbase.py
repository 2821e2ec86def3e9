"""
Coinbase Exchange Integration

Pair listing from the public Coinbase Exchange products endpoint.
The response is a flat list of products, one per trading pair.
"""

import logging
from typing import Any, Dict, List

from integrations.exchanges.base import HttpPairSource, sort_pairs
from core.models.pairs import PairRecord
from core.errors import MalformedRecord, RemoteFetchFailed

logger = logging.getLogger(__name__)


class CoinbaseSource(HttpPairSource):
    """Coinbase products: keeps online, enabled pairs quoted in the configured currency"""

    BASE_URL = "https://api.exchange.coinbase.com"
    PRODUCTS_PATH = "/products"

    @property
    def name(self) -> str:
        return "coinbase"

    async def fetch_pairs(self) -> List[PairRecord]:
        data = await self._get_json(f"{self.BASE_URL}{self.PRODUCTS_PATH}")

        if not isinstance(data, list):
            raise RemoteFetchFailed(
                f"Coinbase products: expected list, got {type(data).__name__}"
            )

        pairs = self.normalize(data)
        logger.info(f"[PAIRS] Fetched {len(pairs)} {self.quote_currency} pairs from Coinbase")
        return pairs

    def normalize(self, products: List[Any]) -> List[PairRecord]:
        """Filter and map raw products to sorted PairRecords"""
        pairs = []
        for product in products:
            if not isinstance(product, dict):
                continue
            if not self._is_tradable(product):
                continue
            try:
                pairs.append(self._to_record(product))
            except MalformedRecord as e:
                logger.debug(f"Skipping Coinbase product: {e}")

        return sort_pairs(pairs)

    def _is_tradable(self, product: Dict) -> bool:
        return (
            product.get("quote_currency") == self.quote_currency
            and product.get("status") == "online"
            and not product.get("trading_disabled")
        )

    def _to_record(self, product: Dict) -> PairRecord:
        product_id = product.get("id")
        base = product.get("base_currency")
        if not product_id or not base:
            raise MalformedRecord(f"missing id or base_currency: {product!r}")

        display = product.get("display_name") or f"{base}/{product.get('quote_currency')}"
        return PairRecord(id=base, symbol=product_id, display=display)
