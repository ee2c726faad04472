"""Best-effort extraction of structured attributes from BOQ descriptions.

Recognized attributes:
- thickness: "18mm", "12 mm" -> "18mm", "12mm"
- size: "8x4", "8 X 4 feet" -> "8x4", "8x4 feet"
- brand: first keyword of the brand vocabulary found in the text

Whatever is left after removing the thickness and size tokens becomes the
product name. Nothing here raises: a missing pattern just leaves the field
empty.
"""

import re
from typing import Optional

from .brands import BrandVocabulary, default_brands
from .models import ParsedDescription

THICKNESS_PATTERN = re.compile(r"(\d+)\s*mm", re.IGNORECASE)
SIZE_PATTERN = re.compile(r"(\d+)\s*[x×]\s*(\d+)(\s*feet)?", re.IGNORECASE)

_DASHES = re.compile(r"[-–—]")
_WHITESPACE = re.compile(r"\s+")


def parse_thickness(description: str) -> Optional[str]:
    match = THICKNESS_PATTERN.search(description)
    return f"{match.group(1)}mm" if match else None


def parse_size(description: str) -> Optional[str]:
    match = SIZE_PATTERN.search(description)
    if not match:
        return None
    size = f"{match.group(1)}x{match.group(2)}"
    if match.group(3):
        size += " feet"
    return size


def parse_description(
    description: str,
    brands: Optional[BrandVocabulary] = None,
) -> ParsedDescription:
    """Parse a free-text BOQ description.

    Args:
        description: Raw line-item description
        brands: Brand vocabulary to scan (defaults to the built-in list)

    Returns:
        ParsedDescription; product_name is always set (possibly empty)

    Example:
        >>> parse_description("Gurjan Plywood 18mm 8 X 4 feet")
        ParsedDescription(product_name='Gurjan Plywood', thickness='18mm',
                          size='8x4 feet', brand='Gurjan')
    """
    description = description or ""
    brands = brands if brands is not None else default_brands

    thickness_match = THICKNESS_PATTERN.search(description)
    size_match = SIZE_PATTERN.search(description)

    product_name = description
    if thickness_match:
        product_name = product_name.replace(thickness_match.group(0), "", 1)
    if size_match:
        product_name = product_name.replace(size_match.group(0), "", 1)

    product_name = _DASHES.sub(" ", product_name)
    product_name = _WHITESPACE.sub(" ", product_name).strip()

    return ParsedDescription(
        product_name=product_name,
        thickness=parse_thickness(description),
        size=parse_size(description),
        brand=brands.find(description),
    )
