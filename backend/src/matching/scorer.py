"""Weighted multi-field confidence scoring for BOQ line items.

Scoring formula (per line item x catalog product):
- S_name = max(sim(name, product.name), sim(name, product.category)) + keyword bonus
  contributes 0.50 * S_name when S_name > 25
- S_thickness contributes 0.25 * S_thickness when > 70
- S_size contributes 0.15 * S_size when > 60
- S_brand contributes 0.10 * S_brand when > 60
- S_unit adds a flat 5 points when > 70 (not counted as a field match)

The raw total may exceed 100; callers clamp it when emitting a result.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional

from domain.boq.brands import BrandVocabulary
from domain.boq.description_parser import parse_description
from domain.boq.models import BOQLineItem, CatalogProduct, ParsedDescription
from domain.boq.similarity import similarity

NAME_WEIGHT = 0.5
THICKNESS_WEIGHT = 0.25
SIZE_WEIGHT = 0.15
BRAND_WEIGHT = 0.1
UNIT_BONUS = 5.0

NAME_MIN_SCORE = 25.0
THICKNESS_MIN_SCORE = 70.0
SIZE_MIN_SCORE = 60.0
BRAND_MIN_SCORE = 60.0
UNIT_MIN_SCORE = 70.0

KEYWORD_BONUS = 25.0


@dataclass
class PairScore:
    """Raw score of one line item against one product.

    Attributes:
        total: Weighted sum before clamping
        match_count: Number of contributing fields (unit bonus excluded)
        matched_fields: Diagnostics in evaluation order
    """
    total: float = 0.0
    match_count: int = 0
    matched_fields: List[str] = field(default_factory=list)

    def add(self, label: str, score: float, contribution: float, counts: bool = True) -> None:
        self.total += contribution
        if counts:
            self.match_count += 1
        self.matched_fields.append(f"{label}: {_percent(score)}%")


def _percent(value: float) -> int:
    """Round half up, so 72.5 reads as 73%."""
    return int(math.floor(value + 0.5))


def keyword_overlap(candidate: str, product_name: str) -> float:
    """Share of candidate tokens overlapping a product-name token.

    A candidate token overlaps when a product-name token contains it or it
    contains a product-name token.

    Returns:
        Ratio in [0, 1]; 0 when the candidate has no tokens
    """
    keywords = candidate.lower().split()
    product_keywords = product_name.lower().split()
    if not keywords:
        return 0.0

    matched = [
        keyword for keyword in keywords
        if any(pk in keyword or keyword in pk for pk in product_keywords)
    ]
    return len(matched) / len(keywords)


class BOQMatchScorer:
    """Score BOQ line items against catalog products.

    Stateless apart from the brand vocabulary used when a line item has to be
    parsed on the fly, so one instance can be shared freely.
    """

    def __init__(self, brands: Optional[BrandVocabulary] = None):
        """Initialize scorer.

        Args:
            brands: Brand vocabulary for parsing unstructured descriptions
        """
        self.brands = brands

    def resolve_fields(self, item: BOQLineItem) -> ParsedDescription:
        """Structured fields of a line item.

        Uses the item's own fields when it already carries a product name,
        thickness or size; otherwise parses the description.
        """
        if item.has_parsed_fields():
            return ParsedDescription(
                product_name=item.product_name or "",
                thickness=item.thickness,
                size=item.size,
                brand=item.brand,
            )
        return parse_description(item.description, self.brands)

    def score(
        self,
        item: BOQLineItem,
        product: CatalogProduct,
        parsed: Optional[ParsedDescription] = None,
    ) -> PairScore:
        """Calculate the weighted confidence of ``product`` for ``item``.

        Args:
            item: BOQ line item
            product: Catalog product candidate
            parsed: Pre-resolved fields of ``item`` (resolved when omitted)

        Returns:
            PairScore with unclamped total, field count and diagnostics
        """
        if parsed is None:
            parsed = self.resolve_fields(item)

        result = PairScore()

        name_to_match = parsed.product_name or item.description
        if name_to_match and product.name:
            name_score = max(
                similarity(name_to_match, product.name),
                similarity(name_to_match, product.category),
            )
            name_score += keyword_overlap(name_to_match, product.name) * KEYWORD_BONUS
            if name_score > NAME_MIN_SCORE:
                result.add("Name", name_score, name_score * NAME_WEIGHT)

        if parsed.thickness and product.thickness:
            thickness_score = similarity(parsed.thickness, product.thickness)
            if thickness_score > THICKNESS_MIN_SCORE:
                result.add("Thickness", thickness_score, thickness_score * THICKNESS_WEIGHT)

        if parsed.size and product.size:
            size_score = similarity(parsed.size, product.size)
            if size_score > SIZE_MIN_SCORE:
                result.add("Size", size_score, size_score * SIZE_WEIGHT)

        if parsed.brand and product.brand:
            brand_score = similarity(parsed.brand, product.brand)
            if brand_score > BRAND_MIN_SCORE:
                result.add("Brand", brand_score, brand_score * BRAND_WEIGHT)

        if item.unit and product.unit:
            unit_score = similarity(item.unit, product.unit)
            if unit_score > UNIT_MIN_SCORE:
                result.add("Unit", unit_score, UNIT_BONUS, counts=False)

        return result
