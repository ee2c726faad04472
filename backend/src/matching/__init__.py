"""Matching module for Furnili BOQ.

Pairs BOQ line items with catalog products using fuzzy string similarity
and weighted multi-field scoring (name, thickness, size, brand, unit).
"""

from .ports import MatcherPort, MatcherError
from .scorer import BOQMatchScorer, PairScore
from .boq_matcher import (
    BOQMatcher,
    auto_match_boq_items,
    clear_match,
    find_product_matches,
    get_best_match,
    summarize,
)

__all__ = [
    "MatcherPort",
    "MatcherError",
    "BOQMatchScorer",
    "PairScore",
    "BOQMatcher",
    "auto_match_boq_items",
    "clear_match",
    "find_product_matches",
    "get_best_match",
    "summarize",
]
