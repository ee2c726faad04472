"""Pydantic schemas for the product catalog"""

import dataclasses
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from domain.boq.models import CatalogProduct


class CatalogProductSchema(BaseModel):
    """Catalog product as accepted and returned by the API"""
    id: Union[int, str]
    name: str = Field(..., min_length=1, max_length=500)
    category: str = ""
    brand: Optional[str] = None
    size: Optional[str] = None
    thickness: Optional[str] = None
    unit: str = ""
    sku: Optional[str] = None
    price_per_unit: Optional[float] = Field(None, alias="pricePerUnit")
    current_stock: Optional[float] = Field(None, alias="currentStock")

    class Config:
        populate_by_name = True
        from_attributes = True

    @field_validator('brand', 'size', 'thickness', 'sku', mode='before')
    @classmethod
    def blank_to_none(cls, v):
        """Treat blank optional strings as missing"""
        if isinstance(v, str):
            return v.strip() or None
        return v

    @classmethod
    def from_domain(cls, product: CatalogProduct) -> "CatalogProductSchema":
        return cls(**dataclasses.asdict(product))

    def to_domain(self) -> CatalogProduct:
        return CatalogProduct(
            id=self.id,
            name=self.name,
            category=self.category,
            brand=self.brand,
            size=self.size,
            thickness=self.thickness,
            unit=self.unit,
            sku=self.sku,
            price_per_unit=self.price_per_unit,
            current_stock=self.current_stock,
        )


class CatalogImportRowError(BaseModel):
    """Single row rejected during catalog import"""
    row: int
    name: Optional[str] = None
    error: str


class CatalogImportResult(BaseModel):
    """Outcome of a catalog CSV import"""
    total_rows: int = 0
    imported_count: int = 0
    error_count: int = 0
    errors: List[CatalogImportRowError] = Field(default_factory=list)


class CatalogListResponse(BaseModel):
    """All products currently loaded in the catalog"""
    items: List[CatalogProductSchema]
    total: int
