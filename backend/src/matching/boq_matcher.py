"""Fuzzy matcher pairing BOQ line items with catalog products.

Pipeline for a document:
1. Resolve structured fields of each line item (parse description if needed)
2. Score every (line item, product) pair with BOQMatchScorer
3. Keep pairs with at least one contributing field and total > min_confidence
4. Rank by confidence DESC (stable, catalog order on ties)
5. Accept the top candidate when its confidence > auto_match_threshold
"""

import dataclasses
import logging
import time
from typing import Any, Iterable, List, Optional, Sequence

from config import MatchingConfig
from domain.boq.brands import BrandVocabulary
from domain.boq.models import BOQLineItem, CatalogProduct, MatchResult, MatchSummary
from observability.metrics import boq_items_matched_total, matching_duration_seconds
from .ports import MatcherPort, MatcherError
from .scorer import BOQMatchScorer

logger = logging.getLogger(__name__)


class BOQMatcher(MatcherPort):
    """Match BOQ line items against a product catalog.

    Holds only immutable configuration; safe to share across requests.

    Usage:
        matcher = BOQMatcher()
        ranked = matcher.find_matches(item, products)
        annotated = matcher.auto_match(items, products)
    """

    def __init__(self, config: Optional[MatchingConfig] = None):
        """Initialize matcher.

        Args:
            config: Thresholds and brand vocabulary (defaults when omitted)
        """
        self.config = config or MatchingConfig()
        self.scorer = BOQMatchScorer(BrandVocabulary(self.config.brand_keywords))

    def score_product(
        self, item: BOQLineItem, product: CatalogProduct
    ) -> Optional[MatchResult]:
        """Score a single pair; None when it does not qualify."""
        matches = self._rank(item, [product])
        return matches[0] if matches else None

    def find_matches(
        self, item: BOQLineItem, products: Sequence[CatalogProduct]
    ) -> List[MatchResult]:
        with matching_duration_seconds.labels(operation="find_matches").time():
            return self._rank(item, products)

    def best_match(
        self, item: BOQLineItem, products: Sequence[CatalogProduct]
    ) -> Optional[MatchResult]:
        matches = self.find_matches(item, products)
        return matches[0] if matches else None

    def candidates(
        self,
        item: BOQLineItem,
        products: Sequence[CatalogProduct],
        limit: Optional[int] = None,
    ) -> List[MatchResult]:
        """Top ranked matches offered for manual review."""
        limit = self.config.candidate_limit if limit is None else limit
        return self.find_matches(item, products)[:limit]

    def auto_match(
        self, items: Sequence[BOQLineItem], products: Sequence[CatalogProduct]
    ) -> List[BOQLineItem]:
        start = time.perf_counter()
        logger.debug(f"Auto-matching {len(items)} BOQ items against {len(products)} products")

        annotated = []
        for item in items:
            best = self._best(item, products)
            if best and best.confidence > self.config.auto_match_threshold:
                annotated.append(_annotate(item, best))
                boq_items_matched_total.labels(outcome="matched").inc()
            else:
                annotated.append(item)
                boq_items_matched_total.labels(outcome="unmatched").inc()

        matching_duration_seconds.labels(operation="auto_match").observe(
            time.perf_counter() - start
        )
        logger.info(
            f"Auto-match completed: {sum(1 for i in annotated if i.is_matched)} "
            f"of {len(annotated)} items matched"
        )
        return annotated

    def assign_product(
        self,
        item: BOQLineItem,
        product_id: Optional[Any],
        products: Sequence[CatalogProduct],
    ) -> BOQLineItem:
        """Manually assign (or clear, with None) the product of a line item.

        The assigned product is scored against the item; when the pair does
        not qualify the assignment stands without confidence or diagnostics.
        Ids compare by their string form, so "1" selects product 1.

        Raises:
            KeyError: If product_id is not in the catalog
        """
        if product_id is None:
            return clear_match(item)

        product = next((p for p in products if str(p.id) == str(product_id)), None)
        if product is None:
            raise KeyError(product_id)

        match = self.score_product(item, product)
        if match is None:
            return dataclasses.replace(
                item, matched_product_id=product.id, confidence=None, matched_fields=None
            )
        return _annotate(item, match)

    def _best(
        self, item: BOQLineItem, products: Sequence[CatalogProduct]
    ) -> Optional[MatchResult]:
        matches = self._rank(item, products)
        return matches[0] if matches else None

    def _rank(
        self, item: BOQLineItem, products: Iterable[CatalogProduct]
    ) -> List[MatchResult]:
        try:
            parsed = self.scorer.resolve_fields(item)

            matches = []
            for product in products:
                score = self.scorer.score(item, product, parsed)
                if score.match_count > 0 and score.total > self.config.min_confidence:
                    matches.append(MatchResult(
                        product_id=product.id,
                        confidence=min(100.0, score.total),
                        matched_fields=tuple(score.matched_fields),
                    ))
        except Exception as e:
            raise MatcherError(f"Matching failed: {str(e)}") from e

        # list.sort is stable: ties keep catalog order
        matches.sort(key=lambda m: m.confidence, reverse=True)
        return matches


def _annotate(item: BOQLineItem, match: MatchResult) -> BOQLineItem:
    return dataclasses.replace(
        item,
        matched_product_id=match.product_id,
        confidence=match.confidence,
        matched_fields=match.matched_fields,
    )


def clear_match(item: BOQLineItem) -> BOQLineItem:
    """Copy of ``item`` without match annotation."""
    return dataclasses.replace(
        item, matched_product_id=None, confidence=None, matched_fields=None
    )


def summarize(items: Sequence[BOQLineItem]) -> MatchSummary:
    """Count matched and unmatched line items."""
    matched = sum(1 for item in items if item.is_matched)
    return MatchSummary(
        total_items=len(items),
        matched_items=matched,
        unmatched_items=len(items) - matched,
        total_value=sum(item.amount for item in items),
    )


_default_matcher = BOQMatcher()


def find_product_matches(
    item: BOQLineItem, products: Sequence[CatalogProduct]
) -> List[MatchResult]:
    """Rank ``products`` for ``item`` with the default configuration."""
    return _default_matcher.find_matches(item, products)


def get_best_match(
    item: BOQLineItem, products: Sequence[CatalogProduct]
) -> Optional[MatchResult]:
    """Best match for ``item`` with the default configuration, or None."""
    return _default_matcher.best_match(item, products)


def auto_match_boq_items(
    items: Sequence[BOQLineItem], products: Sequence[CatalogProduct]
) -> List[BOQLineItem]:
    """Annotate ``items`` with accepted matches using the default configuration."""
    return _default_matcher.auto_match(items, products)
