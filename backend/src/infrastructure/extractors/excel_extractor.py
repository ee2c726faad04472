"""Excel extractor - Rule-based extraction from BOM workbooks (.xlsx).

Expected sheet layout (first/active sheet):
- Row 1: Project, <client>, Client, ..., Work Order #, <number>, Work Order Date, <date>
- Row 2: For, <description>
- A header row (within the first 15 rows) mentioning description, quantity and price
- Data rows: #, Description, (empty), Brand, Type, Quantity, Unit, Unit Price, Total Price
"""

import io
import logging
import re
import time
from typing import Any, List, Optional, Sequence

import openpyxl

from domain.boq.brands import BrandVocabulary
from domain.boq.description_parser import parse_description
from domain.boq.models import BOQDocument, BOQLineItem
from domain.boq.ports import ExtractionResult, ExtractorPort
from observability.metrics import boq_documents_extracted_total

logger = logging.getLogger(__name__)

# Column positions of a BOM data row
COL_DESCRIPTION = 1
COL_BRAND = 3
COL_TYPE = 4
COL_QUANTITY = 5
COL_UNIT = 6
COL_UNIT_PRICE = 7
COL_TOTAL_PRICE = 8

HEADER_SEARCH_ROWS = 15
MIN_ROW_CELLS = 5

_LEADING_NUMBER = re.compile(r"\s*[-+]?(\d+\.?\d*|\.\d+)")


class ExcelExtractor(ExtractorPort):
    """BOM workbook extractor using openpyxl.

    Item descriptions are run through the description parser so that product
    name, thickness and size arrive pre-parsed; brand and type come from
    their own columns.
    """

    MIME_TYPES = (
        'application/vnd.ms-excel',  # .xls
        'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',  # .xlsx
    )
    EXTENSIONS = ('.xlsx', '.xls')

    def __init__(self, brands: Optional[BrandVocabulary] = None):
        """Initialize Excel extractor.

        Args:
            brands: Brand vocabulary used when parsing item descriptions
        """
        self.brands = brands

    def extract(self, content: bytes, filename: str) -> ExtractionResult:
        """Extract BOQ data from an Excel workbook.

        Args:
            content: Raw workbook bytes
            filename: Original filename

        Returns:
            ExtractionResult with the parsed document or error
        """
        start = time.perf_counter()

        try:
            wb = openpyxl.load_workbook(io.BytesIO(content), read_only=True, data_only=True)
            sheet = wb.active
            if sheet is None:
                raise ValueError("Excel file has no active worksheet")

            rows = [list(row) for row in sheet.iter_rows(values_only=True)]
            wb.close()

            document = self.parse_rows(rows)

        except Exception as e:
            runtime_ms = int((time.perf_counter() - start) * 1000)
            logger.error(f"Excel extraction failed: {e}", exc_info=True)
            boq_documents_extracted_total.labels(source="excel", status="error").inc()
            return ExtractionResult(
                success=False,
                error=str(e),
                metrics={'runtime_ms': runtime_ms, 'error_type': type(e).__name__},
                extractor_version=self.version,
            )

        runtime_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            f"Excel extraction succeeded: {len(document.items)} items from {len(rows)} rows",
            extra={"file_name": filename, "items": len(document.items)},
        )
        boq_documents_extracted_total.labels(source="excel", status="success").inc()

        return ExtractionResult(
            success=True,
            document=document,
            metrics={
                'runtime_ms': runtime_ms,
                'row_count': len(rows),
                'lines_extracted': len(document.items),
            },
            extractor_version=self.version,
        )

    def parse_rows(self, rows: List[List[Any]]) -> BOQDocument:
        """Build a BOQDocument from raw sheet rows (lists of cell values)."""
        client = work_order_number = work_order_date = description = ""
        project_name = ""

        if rows and len(rows[0]) >= 8:
            client = _cell_str(rows[0], 1)
            work_order_number = _cell_str(rows[0], 5)
            work_order_date = _cell_str(rows[0], 7)

        if len(rows) > 1 and len(rows[1]) >= 2:
            description = _cell_str(rows[1], 1)
            project_name = f"{client} - {description}"

        items: List[BOQLineItem] = []
        header_row_idx = self._detect_header_row(rows)
        if header_row_idx is None:
            logger.warning("No header row found in BOM sheet")
        else:
            logger.debug(f"Header row detected at index: {header_row_idx}")
            for row in rows[header_row_idx + 1:]:
                if len(row) < MIN_ROW_CELLS:
                    continue
                if not any(str(cell).strip() for cell in row if cell is not None):
                    continue

                # Section titles such as "Goods" or "Hardware"
                first_cell = _cell_str(row, 0)
                if not _is_number(first_cell) and len(first_cell) < 10:
                    continue

                item = self._parse_item_row(row)
                if item:
                    items.append(item)

        return BOQDocument(
            items=items,
            project_name=project_name or "BOM Import",
            client=client or "Unknown Client",
            work_order_number=work_order_number,
            work_order_date=work_order_date,
            description=description or f"Imported BOM with {len(items)} items",
        )

    def _detect_header_row(self, rows: List[List[Any]]) -> Optional[int]:
        """Index of the first row mentioning description, quantity and price.

        Args:
            rows: Sheet rows

        Returns:
            0-based row index, or None if no header row is found
        """
        for idx, row in enumerate(rows[:HEADER_SEARCH_ROWS]):
            row_text = "".join(str(cell) for cell in row if cell is not None).lower()
            if "description" in row_text and "quantity" in row_text and "price" in row_text:
                return idx
        return None

    def _parse_item_row(self, row: Sequence[Any]) -> Optional[BOQLineItem]:
        """Parse one BOM data row; None when it lacks description, quantity or price."""
        description = _cell_str(row, COL_DESCRIPTION)
        quantity = _cell_float(row, COL_QUANTITY)
        unit_price = _cell_float(row, COL_UNIT_PRICE)
        total_price = _cell_float(row, COL_TOTAL_PRICE)

        if not description or quantity <= 0 or unit_price <= 0:
            return None

        amount = total_price if total_price > 0 else quantity * unit_price
        parsed = parse_description(description, self.brands)

        return BOQLineItem(
            description=description,
            quantity=quantity,
            unit=_cell_str(row, COL_UNIT) or "nos",
            rate=unit_price,
            amount=amount,
            brand=_cell_str(row, COL_BRAND) or None,
            type=_cell_str(row, COL_TYPE) or None,
            product_name=parsed.product_name,
            thickness=parsed.thickness,
            size=parsed.size,
        )

    def supports(self, mime_type: str, filename: str = "") -> bool:
        return mime_type in self.MIME_TYPES or filename.lower().endswith(self.EXTENSIONS)

    @property
    def version(self) -> str:
        return 'excel_bom_v1'


def _cell_str(row: Sequence[Any], index: int) -> str:
    """Cell value as stripped string ('' for missing cells)."""
    if index >= len(row) or row[index] is None:
        return ""
    return str(row[index]).strip()


def _cell_float(row: Sequence[Any], index: int) -> float:
    """Leading number of a cell, so "10 nos" reads as 10.

    Thousands separators are ignored; blank or non-numeric cells read as 0.
    """
    if index >= len(row) or row[index] is None:
        return 0.0
    value = row[index]
    if isinstance(value, (int, float)):
        return float(value)
    match = _LEADING_NUMBER.match(str(value).replace(",", ""))
    return float(match.group()) if match else 0.0


def _is_number(value: str) -> bool:
    """Blank counts as numeric, matching serial-number columns left empty."""
    if not value:
        return True
    try:
        float(value)
        return True
    except ValueError:
        return False
