"""Pydantic schemas for BOQ matching endpoints."""

import dataclasses
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from catalog.schemas import CatalogProductSchema
from domain.boq.models import BOQLineItem, MatchResult, MatchSummary, ParsedDescription

ProductId = Union[int, str]


class BOQLineItemSchema(BaseModel):
    """BOQ line item, optionally pre-parsed and/or annotated with a match."""
    description: str = Field(..., max_length=2000)
    quantity: float = 0.0
    unit: str = ""
    rate: float = 0.0
    amount: float = 0.0
    product_name: Optional[str] = Field(None, alias="productName")
    thickness: Optional[str] = None
    size: Optional[str] = None
    brand: Optional[str] = None
    type: Optional[str] = None
    matched_product_id: Optional[ProductId] = Field(None, alias="matchedProductId")
    confidence: Optional[float] = Field(None, ge=0.0, le=100.0)
    matched_fields: Optional[List[str]] = Field(None, alias="matchedFields")

    class Config:
        populate_by_name = True
        from_attributes = True

    @field_validator('product_name', 'thickness', 'size', 'brand', 'type', mode='before')
    @classmethod
    def blank_to_none(cls, v):
        """Blank pre-parsed fields count as absent"""
        if isinstance(v, str):
            return v.strip() or None
        return v

    @classmethod
    def from_domain(cls, item: BOQLineItem) -> "BOQLineItemSchema":
        return cls(**dataclasses.asdict(item))

    def to_domain(self) -> BOQLineItem:
        data = self.model_dump(by_alias=False)
        if data["matched_fields"] is not None:
            data["matched_fields"] = tuple(data["matched_fields"])
        return BOQLineItem(**data)


class MatchResultSchema(BaseModel):
    """Scored candidate product for a line item."""
    product_id: ProductId = Field(..., alias="productId")
    confidence: float = Field(..., ge=0.0, le=100.0)
    matched_fields: List[str] = Field(default_factory=list, alias="matchedFields")

    class Config:
        populate_by_name = True

    @classmethod
    def from_domain(cls, match: MatchResult) -> "MatchResultSchema":
        return cls(**dataclasses.asdict(match))


class MatchSummarySchema(BaseModel):
    """Matched/unmatched counts of a set of line items."""
    total_items: int
    matched_items: int
    unmatched_items: int
    total_value: float

    @classmethod
    def from_domain(cls, summary: MatchSummary) -> "MatchSummarySchema":
        return cls(**dataclasses.asdict(summary))


class ParseDescriptionRequest(BaseModel):
    """Request to parse a single free-text description."""
    description: str = Field(..., max_length=2000)


class ParsedDescriptionSchema(BaseModel):
    """Structured attributes recovered from a description."""
    product_name: str
    thickness: Optional[str] = None
    size: Optional[str] = None
    brand: Optional[str] = None

    @classmethod
    def from_domain(cls, parsed: ParsedDescription) -> "ParsedDescriptionSchema":
        return cls(**dataclasses.asdict(parsed))


class MatchRequest(BaseModel):
    """Auto-match a document's line items.

    When products is omitted the loaded catalog is used.
    """
    items: List[BOQLineItemSchema]
    products: Optional[List[CatalogProductSchema]] = None


class MatchResponse(BaseModel):
    """Annotated line items plus summary."""
    items: List[BOQLineItemSchema]
    summary: MatchSummarySchema


class CandidatesRequest(BaseModel):
    """Ranked candidates for one line item."""
    item: BOQLineItemSchema
    products: Optional[List[CatalogProductSchema]] = None
    limit: Optional[int] = Field(None, ge=1, le=100)


class CandidatesResponse(BaseModel):
    """Candidates in ranking order."""
    candidates: List[MatchResultSchema]
    total: int


class AssignRequest(BaseModel):
    """Manually assign a product to a line item (null clears the match)."""
    item: BOQLineItemSchema
    product_id: Optional[ProductId] = Field(None, alias="productId")
    products: Optional[List[CatalogProductSchema]] = None

    class Config:
        populate_by_name = True
