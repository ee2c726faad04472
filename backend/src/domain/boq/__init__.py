"""BOQ domain module - line items, catalog products, description parsing, similarity"""

from .models import (
    BOQDocument,
    BOQLineItem,
    CatalogProduct,
    MatchResult,
    MatchSummary,
    ParsedDescription,
)
from .brands import BrandVocabulary, DEFAULT_BRAND_KEYWORDS, default_brands
from .description_parser import parse_description
from .similarity import normalize, similarity

__all__ = [
    "BOQDocument",
    "BOQLineItem",
    "CatalogProduct",
    "MatchResult",
    "MatchSummary",
    "ParsedDescription",
    "BrandVocabulary",
    "DEFAULT_BRAND_KEYWORDS",
    "default_brands",
    "parse_description",
    "similarity",
    "normalize",
]
