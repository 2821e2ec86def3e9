"""
Pair snapshot file.

A static, pre-generated JSON list of already-normalized pairs. The
directory reads it before touching a live exchange; the generation
script writes it.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

import httpx

from core.models.pairs import PairRecord
from core.errors import MalformedRecord, SnapshotUnavailable

logger = logging.getLogger(__name__)


class SnapshotLoader:
    """Loads a pair snapshot from a local path or an http(s) URL"""

    def __init__(
        self,
        location: str = "tokens.json",
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.location = location
        self.timeout = timeout
        self._client = client

    @property
    def is_remote(self) -> bool:
        return self.location.startswith(("http://", "https://"))

    async def load(self) -> List[PairRecord]:
        """
        Read and validate the snapshot.

        Raises:
            SnapshotUnavailable: if the file is missing, unreachable or not a
                well-formed list of pair objects
        """
        raw = await (self._fetch() if self.is_remote else self._read())

        try:
            data = json.loads(raw)
        except ValueError as e:
            raise SnapshotUnavailable(f"Snapshot {self.location} is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise SnapshotUnavailable(
                f"Snapshot {self.location}: expected list, got {type(data).__name__}"
            )

        try:
            pairs = [PairRecord.from_dict(item) for item in data]
        except MalformedRecord as e:
            raise SnapshotUnavailable(f"Snapshot {self.location} has a bad entry: {e}") from e

        logger.info(f"[SNAPSHOT] Loaded {len(pairs)} pairs from {self.location}")
        return pairs

    async def _read(self) -> str:
        try:
            return Path(self.location).read_text(encoding="utf-8")
        except OSError as e:
            raise SnapshotUnavailable(f"Cannot read snapshot {self.location}: {e}") from e

    async def _fetch(self) -> str:
        try:
            if self._client is not None:
                response = await self._client.get(self.location, timeout=self.timeout)
                response.raise_for_status()
                return response.text

            async with httpx.AsyncClient() as client:
                response = await client.get(self.location, timeout=self.timeout)
                response.raise_for_status()
                return response.text

        except httpx.HTTPError as e:
            raise SnapshotUnavailable(f"Cannot fetch snapshot {self.location}: {e}") from e


def write_snapshot(pairs: List[PairRecord], output_path: Path) -> None:
    """Write pairs as the snapshot JSON (two-space indent)."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps([pair.to_dict() for pair in pairs], indent=2, ensure_ascii=False),
        encoding="utf-8"
    )
