"""
Locale-aware ordering for pair display names.

Sorting on raw code points puts "ZRX/USD" before "aave/USD" and scatters
accented names. The key below compares the way a reader would: letters
first without case or accents, then accents, then lowercase ahead of
uppercase, and finally the raw text so the order is total.
"""

import unicodedata
from typing import Tuple


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def collation_key(text: str) -> Tuple[str, str, Tuple[bool, ...], str]:
    """Sort key for display names (primary, secondary, tertiary, raw)."""
    primary = _strip_accents(text).casefold()
    secondary = unicodedata.normalize("NFD", text).casefold()
    tertiary = tuple(c.isupper() for c in text)
    return primary, secondary, tertiary, text
