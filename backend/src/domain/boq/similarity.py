"""String similarity for fuzzy BOQ matching.

similarity() returns a percentage in [0, 100]:
- 0 when either string is empty
- 100 for equal strings (case and whitespace insensitive)
- 85 when one string contains the other
- otherwise (1 - levenshtein / max_len) * 100
"""

import re
from typing import Optional

from rapidfuzz.distance import Levenshtein

EXACT_MATCH_SCORE = 100.0
CONTAINS_MATCH_SCORE = 85.0

_WHITESPACE = re.compile(r"\s+")


def normalize(value: str) -> str:
    """Lowercase, trim and collapse internal whitespace runs."""
    return _WHITESPACE.sub(" ", value.lower().strip())


def similarity(str1: Optional[str], str2: Optional[str]) -> float:
    """Similarity percentage between two strings.

    Args:
        str1: First string (None or empty scores 0)
        str2: Second string (None or empty scores 0)

    Returns:
        Score in [0, 100]

    Example:
        >>> similarity("Plywood", "Plywoods")
        85.0
    """
    if not str1 or not str2:
        return 0.0

    norm1 = normalize(str1)
    norm2 = normalize(str2)

    # Whitespace-only input normalizes to nothing
    if not norm1 or not norm2:
        return 0.0

    if norm1 == norm2:
        return EXACT_MATCH_SCORE

    if norm1 in norm2 or norm2 in norm1:
        return CONTAINS_MATCH_SCORE

    max_length = max(len(norm1), len(norm2))
    distance = Levenshtein.distance(norm1, norm2)
    return max(0.0, (1 - distance / max_length) * 100)
