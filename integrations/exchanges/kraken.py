"""
Kraken Exchange Integration

Pair listing from the public Kraken AssetPairs endpoint. The response is
a map keyed by Kraken pair code, wrapped in an envelope that carries an
error list alongside the result.
"""

import logging
from typing import Dict, List, Optional

from integrations.exchanges.base import HttpPairSource, sort_pairs
from core.models.pairs import PairRecord
from core.errors import MalformedRecord, RemoteFetchFailed

logger = logging.getLogger(__name__)


class KrakenSource(HttpPairSource):
    """
    Kraken AssetPairs.
    Prefers the websocket name (e.g. "XBT/USD") and falls back to altname.
    """

    BASE_URL = "https://api.kraken.com"
    ASSET_PAIRS_PATH = "/0/public/AssetPairs"

    # Asset mapping: Kraken -> standard
    ASSET_MAP = {
        "XXBT": "BTC",
        "XBT": "BTC",
        "XETH": "ETH",
        "XXDG": "DOGE",
        "XDG": "DOGE",
        "XXRP": "XRP",
        "XLTC": "LTC",
        "XXLM": "XLM",
        "XETC": "ETC",
        "XZEC": "ZEC",
        "XXMR": "XMR",
        "XREP": "REP",
        "XMLN": "MLN",
        "ZUSD": "USD",
        "ZEUR": "EUR",
        "ZGBP": "GBP",
        "ZCAD": "CAD",
        "ZJPY": "JPY",
        "ZAUD": "AUD",
    }

    @property
    def name(self) -> str:
        return "kraken"

    def _normalize_asset(self, asset: str) -> str:
        """Convert Kraken asset code to standard format"""
        return self.ASSET_MAP.get(asset, asset)

    async def fetch_pairs(self) -> List[PairRecord]:
        data = await self._get_json(f"{self.BASE_URL}{self.ASSET_PAIRS_PATH}")

        if not isinstance(data, dict):
            raise RemoteFetchFailed(
                f"Kraken AssetPairs: expected object, got {type(data).__name__}"
            )
        if data.get("error"):
            raise RemoteFetchFailed(f"Kraken API error: {data['error']}")

        result = data.get("result")
        if not isinstance(result, dict):
            raise RemoteFetchFailed("Kraken AssetPairs: missing result map")

        pairs = self.normalize(result)
        logger.info(f"[PAIRS] Fetched {len(pairs)} {self.quote_currency} pairs from Kraken")
        return pairs

    def normalize(self, result: Dict[str, Dict]) -> List[PairRecord]:
        """Map the AssetPairs result to sorted PairRecords"""
        pairs = []
        for kraken_pair, info in result.items():
            # Skip dark pool and other suffixed variants (e.g. XXBTZUSD.d)
            if "." in kraken_pair or not isinstance(info, dict):
                continue
            if info.get("status") not in ("online", None):
                continue
            if self._quote_of(info) != self.quote_currency:
                continue
            try:
                pairs.append(self._to_record(info))
            except MalformedRecord as e:
                logger.debug(f"Skipping Kraken pair {kraken_pair}: {e}")

        return sort_pairs(pairs)

    def _quote_of(self, info: Dict) -> Optional[str]:
        quote = info.get("quote")
        if quote:
            return self._normalize_asset(quote)
        wsname = info.get("wsname") or ""
        if "/" in wsname:
            return self._normalize_asset(wsname.split("/", 1)[1])
        return None

    def _to_record(self, info: Dict) -> PairRecord:
        wsname = info.get("wsname")
        altname = info.get("altname")
        symbol = wsname or altname
        if not symbol:
            raise MalformedRecord("no wsname or altname")

        base = info.get("base")
        if not base and wsname and "/" in wsname:
            base = wsname.split("/", 1)[0]
        if not base:
            raise MalformedRecord(f"cannot determine base asset for {symbol}")
        base = self._normalize_asset(base)

        if wsname:
            display = wsname
        else:
            display = f"{base}/{self.quote_currency}"

        return PairRecord(id=base, symbol=symbol, display=display)
