"""Brand vocabulary used by the description parser.

The vocabulary is ordered: the first keyword found in a description wins,
so "Greenply" is reported as "Green" with the default list.
"""

import re
from typing import Iterable, List, Optional, Pattern, Union

DEFAULT_BRAND_KEYWORDS: List[str] = [
    "Gurjan",
    "Green",
    "Century",
    "Greenply",
    "Kitply",
    "Asian",
    "Godrej",
    "Hettich",
    "Hafele",
]


class BrandVocabulary:
    """Ordered, case-insensitive brand keyword matchers.

    Keywords may be plain strings (matched literally) or precompiled
    patterns (used as given).

    Usage:
        brands = BrandVocabulary(["Century", "Kitply"])
        brands.find("century plywood 12mm")  # -> "century"
    """

    def __init__(self, keywords: Iterable[Union[str, Pattern]] = DEFAULT_BRAND_KEYWORDS):
        self._patterns: List[Pattern] = []
        for keyword in keywords:
            if isinstance(keyword, str):
                keyword = keyword.strip()
                if not keyword:
                    continue
                self._patterns.append(re.compile(re.escape(keyword), re.IGNORECASE))
            else:
                self._patterns.append(keyword)

    def __len__(self) -> int:
        return len(self._patterns)

    def find(self, text: str) -> Optional[str]:
        """Return the first brand keyword found in ``text``, as written there."""
        if not text:
            return None
        for pattern in self._patterns:
            match = pattern.search(text)
            if match:
                return match.group(0)
        return None


default_brands = BrandVocabulary()
