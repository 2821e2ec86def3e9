"""
Pair Models

The directory's single record type and its serialized form.
"""

from dataclasses import dataclass
from typing import Any, Dict

from core.errors import MalformedRecord


@dataclass(frozen=True)
class PairRecord:
    """
    One tradable pair.

    id is the base asset code (e.g. "BTC"), symbol is the exchange's own
    identifier (e.g. "BTC-USD" or "XBT/USD"), display is "BASE/QUOTE".
    """
    id: str
    symbol: str
    display: str

    def to_dict(self) -> Dict[str, str]:
        return {"symbol": self.symbol, "id": self.id, "display": self.display}

    @classmethod
    def from_dict(cls, data: Any) -> "PairRecord":
        """Build a record from a snapshot or cache entry."""
        if not isinstance(data, dict):
            raise MalformedRecord(f"Expected object, got {type(data).__name__}")

        values = {}
        for key in ("id", "symbol", "display"):
            value = data.get(key)
            if not isinstance(value, str):
                raise MalformedRecord(f"Field {key!r} missing or not a string: {data!r}")
            values[key] = value

        if not values["display"]:
            raise MalformedRecord(f"Empty display name: {data!r}")

        return cls(**values)

    @property
    def base(self) -> str:
        """Base asset taken from id, up to the first separator"""
        for index, char in enumerate(self.id):
            if char in "-/":
                return self.id[:index]
        return self.id
