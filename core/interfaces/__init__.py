"""
Core Interfaces - The contracts that enable modularity

Pair sources and cache stores implement these interfaces, allowing
exchanges and storage backends to be swapped without changing the
directory that uses them.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class IPairSource(ABC):
    """Interface for remote exchange pair listings"""

    @property
    @abstractmethod
    def name(self) -> str:
        """Exchange name"""
        pass

    @abstractmethod
    async def fetch_pairs(self) -> List["PairRecord"]:
        """Fetch, normalize and sort every tradable pair"""
        pass


class IKeyValueStore(ABC):
    """Interface for the persistent string cache behind the directory"""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Get value, or None if the key is absent"""
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> bool:
        """Store value, returning True on success"""
        pass


# Forward references for type hints
from core.models.pairs import PairRecord
