"""Matching ports and interfaces for hexagonal architecture."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from domain.boq.models import BOQLineItem, CatalogProduct, MatchResult


class MatcherPort(ABC):
    """Port interface for BOQ-to-catalog matching strategies.

    Implementations:
    - BOQMatcher: fuzzy string similarity + weighted multi-field scoring
    """

    @abstractmethod
    def find_matches(
        self, item: BOQLineItem, products: Sequence[CatalogProduct]
    ) -> List[MatchResult]:
        """Rank catalog products for one line item.

        Args:
            item: BOQ line item
            products: Full candidate catalog

        Returns:
            Qualifying matches sorted by confidence descending
        """
        pass

    @abstractmethod
    def best_match(
        self, item: BOQLineItem, products: Sequence[CatalogProduct]
    ) -> Optional[MatchResult]:
        """Highest ranked match for one line item, or None."""
        pass

    @abstractmethod
    def auto_match(
        self, items: Sequence[BOQLineItem], products: Sequence[CatalogProduct]
    ) -> List[BOQLineItem]:
        """Annotate every line item of a document with its accepted match.

        Args:
            items: Document line items
            products: Full candidate catalog

        Returns:
            Line items in input order, annotated where a match was accepted
        """
        pass


class MatcherError(Exception):
    """Exception raised for matching errors."""
    pass
