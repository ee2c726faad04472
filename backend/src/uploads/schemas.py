"""Upload API request/response schemas"""

from typing import List, Optional

from pydantic import BaseModel, Field

from matching.schemas import BOQLineItemSchema, MatchSummarySchema


class ExtractedBOQResponse(BaseModel):
    """BOQ document extracted from an uploaded file"""
    file_name: str = Field(..., description="Sanitized original filename")
    extractor_version: str = Field(..., description="Extractor that produced the document")
    project_name: Optional[str] = None
    client: Optional[str] = None
    work_order_number: Optional[str] = None
    work_order_date: Optional[str] = None
    description: Optional[str] = None
    items: List[BOQLineItemSchema] = Field(default_factory=list)
    total_value: float = Field(..., description="Sum of line item amounts")
    summary: MatchSummarySchema
    auto_matched: bool = Field(False, description="Whether items were matched against the catalog")

    class Config:
        from_attributes = True

