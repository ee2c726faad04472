"""BOQ matching API endpoints.

Line items are matched against the products sent with the request or, when
none are sent, against the loaded catalog.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from catalog.schemas import CatalogProductSchema
from catalog.store import CatalogPort
from dependencies import get_catalog, get_matcher
from domain.boq.description_parser import parse_description
from domain.boq.models import CatalogProduct
from .boq_matcher import BOQMatcher, summarize
from .ports import MatcherError
from .schemas import (
    AssignRequest,
    BOQLineItemSchema,
    CandidatesRequest,
    CandidatesResponse,
    MatchRequest,
    MatchResponse,
    MatchResultSchema,
    MatchSummarySchema,
    ParseDescriptionRequest,
    ParsedDescriptionSchema,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/boq", tags=["matching"])


def _resolve_products(
    products: Optional[List[CatalogProductSchema]], catalog: CatalogPort
) -> List[CatalogProduct]:
    if products is None:
        return catalog.list_products()
    return [p.to_domain() for p in products]


@router.post("/parse", response_model=ParsedDescriptionSchema)
def parse(request: ParseDescriptionRequest, matcher: BOQMatcher = Depends(get_matcher)):
    """Parse a free-text description into product name, thickness, size and brand."""
    parsed = parse_description(request.description, matcher.scorer.brands)
    return ParsedDescriptionSchema.from_domain(parsed)


@router.post("/match", response_model=MatchResponse)
def match_items(
    request: MatchRequest,
    matcher: BOQMatcher = Depends(get_matcher),
    catalog: CatalogPort = Depends(get_catalog),
):
    """
    Auto-match every line item of a BOQ.

    Items whose best candidate clears the auto-match threshold come back
    annotated with matchedProductId, confidence and matchedFields; the rest
    are returned unchanged.

    Raises:
        HTTPException 500: If matching fails
    """
    products = _resolve_products(request.products, catalog)
    items = [i.to_domain() for i in request.items]

    try:
        annotated = matcher.auto_match(items, products)
    except MatcherError as e:
        logger.error(f"Auto-match failed: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return MatchResponse(
        items=[BOQLineItemSchema.from_domain(i) for i in annotated],
        summary=MatchSummarySchema.from_domain(summarize(annotated)),
    )


@router.post("/candidates", response_model=CandidatesResponse)
def candidates(
    request: CandidatesRequest,
    matcher: BOQMatcher = Depends(get_matcher),
    catalog: CatalogPort = Depends(get_catalog),
):
    """Ranked candidate products for one line item (manual review)."""
    products = _resolve_products(request.products, catalog)

    try:
        matches = matcher.candidates(request.item.to_domain(), products, request.limit)
    except MatcherError as e:
        logger.error(f"Candidate ranking failed: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return CandidatesResponse(
        candidates=[MatchResultSchema.from_domain(m) for m in matches],
        total=len(matches),
    )


@router.post("/assign", response_model=BOQLineItemSchema)
def assign(
    request: AssignRequest,
    matcher: BOQMatcher = Depends(get_matcher),
    catalog: CatalogPort = Depends(get_catalog),
):
    """
    Manually assign a product to a line item, or clear it with productId null.

    Raises:
        HTTPException 404: If the product is not among the candidate products
    """
    products = _resolve_products(request.products, catalog)

    try:
        item = matcher.assign_product(request.item.to_domain(), request.product_id, products)
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product {request.product_id} not found",
        )
    except MatcherError as e:
        logger.error(f"Manual assignment failed: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return BOQLineItemSchema.from_domain(item)
