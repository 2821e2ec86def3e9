"""
Pair Directory Module

Pair list resolution (cache, snapshot, exchange) and ranked search.
"""

from .directory import PairDirectory
from .search import search_pairs, MAX_RESULTS
from .collation import collation_key

__all__ = ["PairDirectory", "search_pairs", "MAX_RESULTS", "collation_key"]
