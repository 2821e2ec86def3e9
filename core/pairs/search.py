"""
Pair Search

Ranked free-text lookup over a resolved pair list. Pure function: the
same query against the same list always yields the same result.
"""

from typing import List, Sequence, Tuple

from core.models.pairs import PairRecord
from core.pairs.collation import collation_key

MAX_RESULTS = 50


def _rank(pair: PairRecord, query: str) -> Tuple:
    display = pair.display.lower()
    pair_id = pair.id.lower()

    # Tier 1: "sol" -> SOL-USD, not ABSOL-USD
    exact_base = pair.base.lower() == query
    # Tier 2: starts with the query rather than containing it
    prefix = display.startswith(query) or pair_id.startswith(query)

    return (not exact_base, not prefix, collation_key(pair.display))


def search_pairs(
    query: str,
    pairs: Sequence[PairRecord],
    limit: int = MAX_RESULTS
) -> List[PairRecord]:
    """
    Find pairs whose display name or id contains the query.

    Args:
        query: Free text typed by the user
        pairs: Resolved directory list
        limit: Maximum number of results (default: 50)

    Returns:
        Matches ordered by exact base match, then prefix match, then
        display name, truncated to limit. Empty for a blank query.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return []

    matches = [
        pair for pair in pairs
        if needle in pair.display.lower() or needle in pair.id.lower()
    ]
    matches.sort(key=lambda pair: _rank(pair, needle))

    return matches[:limit]
