from integrations.exchanges.kraken import KrakenSource
from integrations.exchanges.coinbase import CoinbaseSource
from integrations.exchanges.base import MockPairSource


def create_source(name: str = "coinbase", **kwargs):
    """Factory: create a pair source by name.

    Args:
        name: ``"coinbase"`` (default), ``"kraken"``, or ``"mock"``.
        **kwargs: passed through to the source constructor.

    Returns:
        An IPairSource implementation.
    """
    name = name.lower()
    if name == "coinbase":
        return CoinbaseSource(**kwargs)
    elif name == "kraken":
        return KrakenSource(**kwargs)
    elif name == "mock":
        kwargs.pop("timeout", None)
        kwargs.pop("client", None)
        return MockPairSource(**kwargs)
    else:
        raise ValueError(f"Unknown pair source: {name!r}. Supported: coinbase, kraken, mock")


__all__ = ["create_source", "CoinbaseSource", "KrakenSource", "MockPairSource"]
