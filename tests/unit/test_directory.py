"""Tests for PairDirectory resolution, fallback order and caching."""

import json

import pytest

from core.config import DirectoryConfig
from core.errors import RemoteFetchFailed
from core.models.pairs import PairRecord
from core.pairs.directory import PairDirectory
from memory.inmemory_cache import InMemoryCache
from tests.conftest import (
    DAY_MS,
    NOW,
    NOW_MS,
    SNAPSHOT_PAIRS,
    RecordingSnapshot,
    RecordingSource,
)


def _directory(source, store, snapshot=None, config=None, now=NOW):
    return PairDirectory(
        source=source,
        store=store,
        snapshot=snapshot,
        config=config or DirectoryConfig(),
        clock=lambda: now,
    )


async def _seed_cache(store, pairs, timestamp_ms, version="v3"):
    await store.set(f"{version}:pairs", json.dumps(pairs))
    await store.set(f"{version}:timestamp", str(timestamp_ms))


# ----------------------------------------------------------------
# Cache precedence
# ----------------------------------------------------------------

class TestCachePrecedence:
    async def test_fresh_cache_is_returned_without_io(self, store, remote_pairs):
        await _seed_cache(store, SNAPSHOT_PAIRS, NOW_MS - 1000)
        snapshot = RecordingSnapshot(pairs=remote_pairs)
        source = RecordingSource(pairs=remote_pairs)

        result = await _directory(source, store, snapshot).resolve()

        assert [p.to_dict() for p in result] == SNAPSHOT_PAIRS
        assert snapshot.calls == 0
        assert source.calls == 0

    async def test_expired_cache_is_ignored(self, store, snapshot_records):
        await _seed_cache(store, [{"symbol": "X", "id": "X", "display": "X/USD"}], NOW_MS - DAY_MS)
        snapshot = RecordingSnapshot(pairs=snapshot_records)

        result = await _directory(RecordingSource(), store, snapshot).resolve()

        assert result == snapshot_records
        assert snapshot.calls == 1

    async def test_cache_just_inside_window(self, store):
        await _seed_cache(store, SNAPSHOT_PAIRS, NOW_MS - DAY_MS + 1)
        source = RecordingSource()

        result = await _directory(source, store).resolve()

        assert len(result) == 3
        assert source.calls == 0

    async def test_custom_ttl(self, store, remote_pairs):
        await _seed_cache(store, SNAPSHOT_PAIRS, NOW_MS - 2 * 60 * 60 * 1000)
        source = RecordingSource(pairs=remote_pairs)
        config = DirectoryConfig(cache_ttl_hours=1)

        result = await _directory(source, store, config=config).resolve()

        assert result == remote_pairs
        assert source.calls == 1

    async def test_other_version_is_a_miss(self, store, remote_pairs):
        await _seed_cache(store, SNAPSHOT_PAIRS, NOW_MS, version="v2")
        source = RecordingSource(pairs=remote_pairs)

        result = await _directory(source, store).resolve()

        assert result == remote_pairs
        assert await store.get("v3:pairs") is not None

    @pytest.mark.parametrize("raw_pairs,raw_timestamp", [
        ("not json", str(NOW_MS)),
        ('{"not": "a list"}', str(NOW_MS)),
        ('[{"id": "BTC"}]', str(NOW_MS)),
        (json.dumps(SNAPSHOT_PAIRS), "yesterday"),
    ])
    async def test_corrupt_cache_falls_through(self, store, remote_pairs, raw_pairs, raw_timestamp):
        await store.set("v3:pairs", raw_pairs)
        await store.set("v3:timestamp", raw_timestamp)
        source = RecordingSource(pairs=remote_pairs)

        result = await _directory(source, store).resolve()

        assert result == remote_pairs

    async def test_missing_timestamp_is_a_miss(self, store, remote_pairs):
        await store.set("v3:pairs", json.dumps(SNAPSHOT_PAIRS))
        source = RecordingSource(pairs=remote_pairs)

        assert await _directory(source, store).resolve() == remote_pairs


# ----------------------------------------------------------------
# Fallback order
# ----------------------------------------------------------------

class TestFallbackOrder:
    async def test_snapshot_success_skips_remote(self, store, snapshot_records, remote_pairs):
        snapshot = RecordingSnapshot(pairs=snapshot_records)
        source = RecordingSource(pairs=remote_pairs)

        result = await _directory(source, store, snapshot).resolve()

        assert result == snapshot_records
        assert source.calls == 0

    async def test_snapshot_failure_falls_back_to_remote(self, store, failing_snapshot, remote_pairs):
        source = RecordingSource(pairs=remote_pairs)

        result = await _directory(source, store, failing_snapshot).resolve()

        assert result == remote_pairs
        assert failing_snapshot.calls == 1
        assert source.calls == 1

    async def test_unexpected_snapshot_error_falls_back(self, store, remote_pairs):
        snapshot = RecordingSnapshot(error=RuntimeError("boom"))
        source = RecordingSource(pairs=remote_pairs)

        assert await _directory(source, store, snapshot).resolve() == remote_pairs

    async def test_no_snapshot_configured(self, store, remote_pairs):
        source = RecordingSource(pairs=remote_pairs)

        assert await _directory(source, store).resolve() == remote_pairs

    async def test_all_sources_fail_returns_empty(self, store, failing_snapshot, failing_source):
        directory = _directory(failing_source, store, failing_snapshot)

        result = await directory.resolve()

        assert result == []
        assert directory.is_empty
        assert await store.get("v3:pairs") is None
        assert await store.get("v3:timestamp") is None

    async def test_remote_error_list_caches_nothing(self, store, failing_snapshot):
        source = RecordingSource(error=RemoteFetchFailed("Kraken API error: ['EGeneral:Invalid']"))

        result = await _directory(source, store, failing_snapshot).resolve()

        assert result == []
        assert store.get_stats()["sets"] == 0


# ----------------------------------------------------------------
# Cache write and round-trip
# ----------------------------------------------------------------

class TestCacheWrite:
    async def test_snapshot_result_is_cached(self, store, snapshot_records):
        await _directory(RecordingSource(), store, RecordingSnapshot(pairs=snapshot_records)).resolve()

        assert json.loads(await store.get("v3:pairs")) == SNAPSHOT_PAIRS
        assert await store.get("v3:timestamp") == str(NOW_MS)

    async def test_round_trip_preserves_content_and_order(self, store):
        pairs = [
            PairRecord(id="ZRX", symbol="ZRX-USD", display="ZRX/USD"),
            PairRecord(id="AAVE", symbol="AAVE-USD", display="AAVE/USD"),
            PairRecord(id="BTC", symbol="BTC-USD", display="BTC/USD"),
        ]
        first = await _directory(RecordingSource(pairs=pairs), store).resolve()

        source = RecordingSource()
        second = await _directory(source, store, now=NOW + 60).resolve()

        assert second == first == pairs
        assert source.calls == 0

    async def test_failed_cache_write_still_returns_pairs(self, remote_pairs):
        class ReadOnlyStore(InMemoryCache):
            async def set(self, key, value, ttl=None):
                return False

        result = await _directory(RecordingSource(pairs=remote_pairs), ReadOnlyStore()).resolve()

        assert result == remote_pairs

    async def test_store_exception_is_contained(self, remote_pairs):
        class BrokenStore(InMemoryCache):
            async def get(self, key):
                raise ConnectionError("store offline")

            async def set(self, key, value, ttl=None):
                raise ConnectionError("store offline")

        directory = _directory(RecordingSource(pairs=remote_pairs), BrokenStore())

        assert await directory.resolve() == remote_pairs


# ----------------------------------------------------------------
# refresh / pairs / search
# ----------------------------------------------------------------

class TestDirectoryApi:
    async def test_empty_before_resolution(self, store):
        directory = _directory(RecordingSource(), store)
        assert directory.pairs == []
        assert directory.is_empty

    async def test_refresh_ignores_fresh_cache(self, store, remote_pairs):
        await _seed_cache(store, SNAPSHOT_PAIRS, NOW_MS)
        source = RecordingSource(pairs=remote_pairs)
        directory = _directory(source, store)

        result = await directory.refresh()

        assert result == remote_pairs
        assert source.calls == 1
        assert json.loads(await store.get("v3:pairs")) == [p.to_dict() for p in remote_pairs]

    async def test_failed_refresh_keeps_previous_list(self, store, snapshot_records):
        snapshot = RecordingSnapshot(pairs=snapshot_records)
        directory = _directory(RecordingSource(error=RemoteFetchFailed("down")), store, snapshot)
        await directory.resolve()

        snapshot._error = RuntimeError("gone")
        result = await directory.refresh()

        assert result == snapshot_records

    async def test_pairs_is_a_copy(self, store, remote_pairs):
        directory = _directory(RecordingSource(pairs=remote_pairs), store)
        await directory.resolve()

        directory.pairs.clear()

        assert directory.pairs == remote_pairs

    async def test_search_uses_resolved_pairs(self, store, snapshot_records):
        directory = _directory(RecordingSource(), store, RecordingSnapshot(pairs=snapshot_records))
        await directory.resolve()

        assert [p.display for p in directory.search("eth")] == ["ETH/USD"]
        assert directory.search("  ") == []
