"""Domain models for BOQ line items, catalog products and match results.

All models are plain dataclasses. Derived entities (ParsedDescription,
MatchResult) are computed per call and never persisted.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple


@dataclass(frozen=True)
class CatalogProduct:
    """Catalog product a BOQ line item can be matched against.

    Attributes:
        id: Opaque unique identifier
        name: Product name (free text)
        category: Category name (free text)
        brand: Brand name
        size: Size, e.g. "8x4 feet"
        thickness: Thickness, e.g. "18mm"
        unit: Stocking unit, e.g. "pieces", "sqft"
        sku: Stock keeping unit (informational)
        price_per_unit: Catalog price (informational)
        current_stock: Stock on hand (informational)
    """
    id: Any
    name: str
    category: str = ""
    brand: Optional[str] = None
    size: Optional[str] = None
    thickness: Optional[str] = None
    unit: str = ""
    sku: Optional[str] = None
    price_per_unit: Optional[float] = None
    current_stock: Optional[float] = None


@dataclass(frozen=True)
class ParsedDescription:
    """Structured attributes recovered from a free-text description."""
    product_name: str
    thickness: Optional[str] = None
    size: Optional[str] = None
    brand: Optional[str] = None


@dataclass(frozen=True)
class MatchResult:
    """Scored candidate product for a single line item.

    Attributes:
        product_id: Identifier of the matched catalog product
        confidence: Confidence in [0, 100]
        matched_fields: Per-field diagnostics in evaluation order
            (name, thickness, size, brand, unit), e.g. "Thickness: 100%"
    """
    product_id: Any
    confidence: float
    matched_fields: Tuple[str, ...] = ()


@dataclass(frozen=True)
class BOQLineItem:
    """One row of a Bill of Quantities.

    The pre-parsed fields (product_name, thickness, size, brand, type) are
    optional; when none of product_name/thickness/size is set the matcher
    parses the description itself. The match fields are only present once a
    match has been accepted or assigned.
    """
    description: str
    quantity: float = 0.0
    unit: str = ""
    rate: float = 0.0
    amount: float = 0.0
    product_name: Optional[str] = None
    thickness: Optional[str] = None
    size: Optional[str] = None
    brand: Optional[str] = None
    type: Optional[str] = None
    matched_product_id: Optional[Any] = None
    confidence: Optional[float] = None
    matched_fields: Optional[Tuple[str, ...]] = None

    @property
    def is_matched(self) -> bool:
        return self.matched_product_id is not None

    def has_parsed_fields(self) -> bool:
        """True when the item already carries a product name, thickness or size."""
        return bool(self.product_name or self.thickness or self.size)


@dataclass
class BOQDocument:
    """Line items and header metadata extracted from an uploaded BOQ."""
    items: List[BOQLineItem] = field(default_factory=list)
    project_name: Optional[str] = None
    client: Optional[str] = None
    work_order_number: Optional[str] = None
    work_order_date: Optional[str] = None
    description: Optional[str] = None

    @property
    def total_value(self) -> float:
        return sum(item.amount for item in self.items)


@dataclass(frozen=True)
class MatchSummary:
    """Matched/unmatched counts for a set of line items."""
    total_items: int
    matched_items: int
    unmatched_items: int
    total_value: float
