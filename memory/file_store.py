"""
JSON file store.

Persistent key-value store kept in a single JSON object on disk, so a
resolved pair list survives restarts for the rest of its cache window.
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional

from core.interfaces import IKeyValueStore

logger = logging.getLogger(__name__)


class JsonFileStore(IKeyValueStore):
    """String store backed by one JSON file, loaded lazily on first access"""

    def __init__(self, path: str = ".pair_cache.json"):
        self.path = Path(path)
        self._data: Optional[Dict[str, str]] = None

    def _load(self) -> Dict[str, str]:
        if self._data is not None:
            return self._data

        self._data = {}
        if not self.path.exists():
            return self._data

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"[CACHE] Ignoring unreadable cache file {self.path}: {e}")
            return self._data

        if isinstance(raw, dict):
            self._data = {k: v for k, v in raw.items() if isinstance(v, str)}
        else:
            logger.warning(f"[CACHE] Ignoring cache file {self.path}: not a JSON object")
        return self._data

    def _flush(self) -> None:
        """Write through a temp file so readers never see a partial file"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(json.dumps(self._data, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp_path, self.path)

    async def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    async def set(self, key: str, value: str) -> bool:
        self._load()[key] = value
        try:
            self._flush()
        except OSError as e:
            logger.error(f"[CACHE] Failed to write {self.path}: {e}")
            return False
        return True

    async def delete(self, key: str) -> bool:
        data = self._load()
        if key not in data:
            return False
        del data[key]
        try:
            self._flush()
        except OSError as e:
            logger.error(f"[CACHE] Failed to write {self.path}: {e}")
            return False
        return True
