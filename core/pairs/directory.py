"""
Pair Directory Module

Resolves the list of tradable pairs shown to the user. Tries, in order:
a fresh cached copy, the pre-generated snapshot file, then the live
exchange. The first success wins and is written back to the cache.
"""

import json
import logging
import time
from typing import Awaitable, Callable, List, Optional, Tuple

from core.config.settings import DirectoryConfig, Settings
from core.interfaces import IKeyValueStore, IPairSource
from core.models.pairs import PairRecord
from core.errors import MalformedRecord, PairDirectoryError
from core.pairs.search import MAX_RESULTS, search_pairs
from integrations.snapshot import SnapshotLoader

logger = logging.getLogger(__name__)

ResolutionStep = Callable[[], Awaitable[List[PairRecord]]]


class PairDirectory:
    """
    Canonical list of tradable pairs.

    Resolution never raises: every failure is logged and the chain moves
    on to the next step. When all steps fail the directory keeps whatever
    it already had, which is an empty list on a fresh instance. Callers
    should read an empty directory as "no data yet".
    """

    def __init__(
        self,
        source: IPairSource,
        store: IKeyValueStore,
        snapshot: Optional[SnapshotLoader] = None,
        config: DirectoryConfig = None,
        clock: Optional[Callable[[], float]] = None,
        max_results: int = MAX_RESULTS
    ):
        self.source = source
        self.store = store
        self.snapshot = snapshot
        self.config = config or DirectoryConfig()
        self.max_results = max_results
        self._clock = clock or time.time

        self._pairs: List[PairRecord] = []

    @classmethod
    def from_settings(cls, settings: Settings) -> "PairDirectory":
        """Build a directory with the source and store named in settings"""
        # Imported here to keep core free of integration imports at module load
        from integrations.exchanges import create_source
        from memory import create_store

        directory_config = settings.directory
        source = create_source(
            directory_config.source,
            quote_currency=directory_config.quote_currency,
            timeout=directory_config.request_timeout,
        )
        store = create_store(
            settings.cache.backend,
            file_path=settings.cache.file_path,
            redis_url=settings.cache.redis_url,
        )
        snapshot = None
        if directory_config.snapshot_path:
            snapshot = SnapshotLoader(
                directory_config.snapshot_path,
                timeout=directory_config.request_timeout,
            )

        return cls(
            source=source,
            store=store,
            snapshot=snapshot,
            config=directory_config,
            max_results=settings.search.max_results,
        )

    # =========================================================================
    # Public API
    # =========================================================================

    @property
    def pairs(self) -> List[PairRecord]:
        """Last resolved pair list (empty before resolution)"""
        return list(self._pairs)

    @property
    def is_empty(self) -> bool:
        return not self._pairs

    async def resolve(self) -> List[PairRecord]:
        """
        Resolve the pair list, preferring a fresh cache entry.

        Returns:
            Resolved pairs, or an empty list if nothing could be loaded
        """
        cached = await self._read_cache()
        if cached is not None:
            self._pairs = cached
            logger.info(f"[PAIRS] Using {len(cached)} cached pairs")
            return self.pairs

        return await self._resolve_from_steps()

    async def refresh(self) -> List[PairRecord]:
        """Re-fetch from snapshot or exchange, ignoring any cached copy"""
        return await self._resolve_from_steps()

    def search(self, query: str) -> List[PairRecord]:
        """Ranked search over the resolved pairs"""
        return search_pairs(query, self._pairs, self.max_results)

    # =========================================================================
    # Resolution chain
    # =========================================================================

    def _steps(self) -> List[Tuple[str, ResolutionStep]]:
        steps: List[Tuple[str, ResolutionStep]] = []
        if self.snapshot is not None:
            steps.append(("snapshot", self.snapshot.load))
        steps.append((self.source.name, self.source.fetch_pairs))
        return steps

    async def _resolve_from_steps(self) -> List[PairRecord]:
        for label, step in self._steps():
            try:
                pairs = await step()
            except PairDirectoryError as e:
                logger.warning(f"[PAIRS] {label} unavailable: {e}")
                continue
            except Exception:
                logger.exception(f"[PAIRS] Unexpected error loading pairs from {label}")
                continue

            self._pairs = list(pairs)
            logger.info(f"[PAIRS] Resolved {len(self._pairs)} pairs from {label}")
            await self._write_cache(self._pairs)
            return self.pairs

        logger.error("[PAIRS] All pair sources failed, no pair data available")
        return self.pairs

    # =========================================================================
    # Cache
    # =========================================================================

    @property
    def pairs_key(self) -> str:
        return f"{self.config.cache_version}:pairs"

    @property
    def timestamp_key(self) -> str:
        return f"{self.config.cache_version}:timestamp"

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    async def _read_cache(self) -> Optional[List[PairRecord]]:
        """Return cached pairs if present and fresh, else None"""
        try:
            raw_pairs = await self.store.get(self.pairs_key)
            raw_timestamp = await self.store.get(self.timestamp_key)
        except Exception:
            logger.exception("[CACHE] Failed to read pair cache")
            return None

        if raw_pairs is None or raw_timestamp is None:
            logger.debug(f"[CACHE] No pairs cached under {self.config.cache_version}")
            return None

        try:
            cached_at = int(float(raw_timestamp))
        except (ValueError, OverflowError):
            logger.warning(f"[CACHE] Invalid cache timestamp {raw_timestamp!r}")
            return None

        age_ms = self._now_ms() - cached_at
        if age_ms >= self.config.cache_ttl_ms:
            logger.info(f"[CACHE] Pair cache expired ({age_ms / 3_600_000:.1f}h old)")
            return None

        try:
            data = json.loads(raw_pairs)
            if not isinstance(data, list):
                raise MalformedRecord(f"expected list, got {type(data).__name__}")
            return [PairRecord.from_dict(item) for item in data]
        except (ValueError, MalformedRecord) as e:
            logger.warning(f"[CACHE] Discarding corrupt pair cache: {e}")
            return None

    async def _write_cache(self, pairs: List[PairRecord]) -> None:
        payload = json.dumps([pair.to_dict() for pair in pairs])
        try:
            stored = await self.store.set(self.pairs_key, payload)
            stored = await self.store.set(self.timestamp_key, str(self._now_ms())) and stored
        except Exception:
            logger.exception("[CACHE] Failed to write pair cache")
            return

        if stored:
            logger.debug(f"[CACHE] Cached {len(pairs)} pairs under {self.config.cache_version}")
        else:
            logger.warning("[CACHE] Pair cache write was not stored")
