"""Catalog CSV import service"""

import csv
import logging
from io import StringIO
from typing import List, Optional

import chardet

from domain.boq.models import CatalogProduct
from .schemas import CatalogImportResult, CatalogImportRowError
from .store import CatalogPort

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("name", "category")


class CatalogImportError(Exception):
    """Raised when a catalog file cannot be read at all."""
    pass


class CatalogImportService:
    """Service for importing catalog products from CSV files

    Expected columns (header row): name, category, brand, size, thickness,
    sku, pricePerUnit, currentStock, minStock, unit. An optional ``id``
    column overrides the identifier; otherwise the sku, and failing that the
    row position, identifies the product.
    """

    def __init__(self, catalog: CatalogPort):
        self.catalog = catalog

    def import_from_csv(self, file_bytes: bytes) -> CatalogImportResult:
        """Import products from CSV file bytes

        Args:
            file_bytes: Raw CSV file bytes

        Returns:
            CatalogImportResult with counts and per-row errors

        Raises:
            CatalogImportError: If the file has no header or lacks required columns
        """
        text = self._decode(file_bytes)
        reader = csv.DictReader(StringIO(text))

        columns = {(name or "").strip() for name in (reader.fieldnames or [])}
        missing = [column for column in REQUIRED_COLUMNS if column not in columns]
        if missing:
            raise CatalogImportError(f"Missing required columns: {', '.join(missing)}")

        result = CatalogImportResult()
        products: List[CatalogProduct] = []

        for position, row in enumerate(reader, start=1):
            row_num = position + 1  # Row 1 is the header
            result.total_rows += 1
            row = {(key or "").strip(): (value or "").strip() for key, value in row.items() if key}

            try:
                products.append(self._parse_row(row, position))
            except ValueError as e:
                result.error_count += 1
                result.errors.append(CatalogImportRowError(
                    row=row_num,
                    name=row.get("name") or None,
                    error=str(e),
                ))

        result.imported_count = self.catalog.upsert_many(products)
        logger.info(
            f"Catalog import: {result.imported_count} of {result.total_rows} rows imported",
            extra={"products": result.imported_count, "errors": result.error_count},
        )
        return result

    def _decode(self, file_bytes: bytes) -> str:
        if not file_bytes:
            raise CatalogImportError("File is empty")

        detected = chardet.detect(file_bytes)
        encoding = detected['encoding'] or 'utf-8'

        try:
            text = file_bytes.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            text = file_bytes.decode('utf-8', errors='replace')

        # Excel exports often carry a BOM
        return text.lstrip("\ufeff")

    def _parse_row(self, row: dict, position: int) -> CatalogProduct:
        """Validate a single CSV row

        Raises:
            ValueError: If validation fails
        """
        name = row.get("name", "")
        if not name:
            raise ValueError("name is required")

        category = row.get("category", "")
        if not category:
            raise ValueError("category is required")

        sku = row.get("sku") or None
        product_id = self._resolve_id(row.get("id"), sku, position)

        return CatalogProduct(
            id=product_id,
            name=name,
            category=category,
            brand=row.get("brand") or None,
            size=row.get("size") or None,
            thickness=row.get("thickness") or None,
            unit=row.get("unit", ""),
            sku=sku,
            price_per_unit=self._parse_number(row.get("pricePerUnit"), "pricePerUnit"),
            current_stock=self._parse_number(row.get("currentStock"), "currentStock"),
        )

    def _resolve_id(
        self, raw_id: Optional[str], sku: Optional[str], position: int
    ) -> object:
        if raw_id:
            return int(raw_id) if raw_id.isdigit() else raw_id
        if sku:
            return sku
        return position

    def _parse_number(self, value: Optional[str], column: str) -> Optional[float]:
        if not value:
            return None
        try:
            return float(value.replace(",", ""))
        except ValueError:
            raise ValueError(f"{column} must be a number, got '{value}'")
