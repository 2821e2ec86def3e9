# Core models
from core.models.pairs import PairRecord

__all__ = ["PairRecord"]
