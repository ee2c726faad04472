"""Text extractor - Rule-based BOQ extraction from plain text.

Parses the text layer of a BOQ (OCR output, PDF text, .txt export) line by
line. Also used by PDFTextExtractor once the PDF text has been pulled out.
"""

import logging
import re
import time
from typing import Optional

from domain.boq.models import BOQDocument, BOQLineItem
from domain.boq.ports import ExtractionResult, ExtractorPort
from observability.metrics import boq_documents_extracted_total

logger = logging.getLogger(__name__)

_AMOUNT = r"₹?([\d,]+(?:\.\d+)?)"

# Ordered: the first pattern that matches a line wins
ROW_WITH_BRAND_AND_TYPE = re.compile(
    r"^\s*\d+\s+(.+?)\s+([^\s]+)\s+([^\s]+)\s+(\d+(?:\.\d+)?)\s*([^\s]*)\s+"
    + _AMOUNT + r"\s+" + _AMOUNT + r"$"
)
NUMBERED_ROW = re.compile(
    r"^\s*\d+\s+(.+?)\s+(\d+(?:\.\d+)?)\s*([^\s]*)\s+" + _AMOUNT + r"\s+" + _AMOUNT + r"$"
)
UNNUMBERED_ROW = re.compile(
    r"^(.+?)\s+(\d+(?:\.\d+)?)\s*([a-zA-Z]*)\s+" + _AMOUNT + r"\s+" + _AMOUNT + r"$"
)
PER_UNIT_PRICE_ROW = re.compile(
    r"^(.+?)\s+(\d+(?:\.\d+)?)\s+(piece\(s\)|m|meters?)\s+" + _AMOUNT + r"/\w+\s+" + _AMOUNT + r"$"
)

ITEM_THICKNESS = re.compile(r"(\d+(?:\.\d+)?mm)", re.IGNORECASE)
ITEM_SIZE = re.compile(
    r"(\d+(?:\.\d+)?(?:mm|cm|m)\s*x?\s*\d+(?:\.\d+)?(?:mm|cm|m)?)", re.IGNORECASE
)

PROJECT_PATTERN = re.compile(r"Project\s+([^\s]+(?:\s+[^\s]+)*?)(?:\s+Client)", re.IGNORECASE)
CLIENT_PATTERN = re.compile(r"Client\s+([^\s]+(?:\s+[^\s]+)*?)(?:\s+Work Order)", re.IGNORECASE)
WORK_ORDER_NUMBER_PATTERN = re.compile(r"Work Order #\s*(\w+)", re.IGNORECASE)
WORK_ORDER_DATE_PATTERN = re.compile(r"Work Order Date\s+(.+)", re.IGNORECASE)

SKIP_WORDS = ("description", "goods", "hardware", "generated on")
_BARE_NUMBER = re.compile(r"^\d+\s*$")

DEFAULT_PROJECT_NAME = "Extracted BOQ Project"
DEFAULT_CLIENT = "---"


def _to_float(value: str) -> float:
    return float(value.replace(",", ""))


def parse_boq_line(line: str) -> Optional[BOQLineItem]:
    """Parse a single BOQ table row.

    Args:
        line: One line of BOQ text

    Returns:
        BOQLineItem, or None for headers, section titles and unrecognized lines
    """
    lowered = line.lower()
    if (
        not line.strip()
        or "#" in line
        or any(word in lowered for word in SKIP_WORDS)
        or _BARE_NUMBER.match(line)
    ):
        return None

    brand = type_ = None
    match = ROW_WITH_BRAND_AND_TYPE.match(line)
    if match:
        description, brand, type_, quantity, unit, rate, amount = match.groups()
    else:
        for pattern in (NUMBERED_ROW, UNNUMBERED_ROW, PER_UNIT_PRICE_ROW):
            match = pattern.match(line)
            if match:
                description, quantity, unit, rate, amount = match.groups()
                break
        else:
            return None

    thickness = ITEM_THICKNESS.search(description)
    size = ITEM_SIZE.search(description)

    return BOQLineItem(
        description=description.strip(),
        quantity=float(quantity),
        unit=unit or "nos",
        rate=_to_float(rate),
        amount=_to_float(amount),
        brand=brand or None,
        type=type_ or None,
        size=size.group(0) if size else None,
        thickness=thickness.group(0) if thickness else None,
    )


def parse_boq_text(text: str) -> BOQDocument:
    """Parse BOQ text into line items and project metadata.

    Metadata comes from a line mentioning both "Project" and "Client"
    (project name, client, work order number and date) and from a line
    starting with "For ".

    Args:
        text: Full document text

    Returns:
        BOQDocument with every recognized item row, in document order
    """
    document = BOQDocument()
    project_name = client = work_order_number = work_order_date = description = ""

    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line:
            continue

        if "Project" in line and "Client" in line:
            match = PROJECT_PATTERN.search(line)
            if match:
                project_name = match.group(1).strip()
            match = CLIENT_PATTERN.search(line)
            if match:
                client = match.group(1).strip()
            match = WORK_ORDER_NUMBER_PATTERN.search(line)
            if match:
                work_order_number = match.group(1)
            match = WORK_ORDER_DATE_PATTERN.search(line)
            if match:
                work_order_date = match.group(1).strip()

        if line.lower().startswith("for "):
            description = line[4:].strip()

        item = parse_boq_line(line)
        if item:
            document.items.append(item)

    document.project_name = project_name or DEFAULT_PROJECT_NAME
    document.client = client or DEFAULT_CLIENT
    document.work_order_number = work_order_number
    document.work_order_date = work_order_date
    document.description = description
    return document


class TextExtractor(ExtractorPort):
    """Plain-text BOQ extractor (UTF-8 text, e.g. OCR output)."""

    MIME_TYPES = ("text/plain",)
    EXTENSIONS = (".txt",)

    def extract(self, content: bytes, filename: str) -> ExtractionResult:
        start = time.perf_counter()
        try:
            document = parse_boq_text(content.decode("utf-8", errors="replace"))
        except Exception as e:
            logger.error(f"Text extraction failed: {e}", exc_info=True)
            boq_documents_extracted_total.labels(source="text", status="error").inc()
            return ExtractionResult(
                success=False,
                error=str(e),
                metrics={'error_type': type(e).__name__},
                extractor_version=self.version,
            )

        runtime_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            f"Text extraction succeeded: {len(document.items)} items",
            extra={"file_name": filename, "items": len(document.items)},
        )
        boq_documents_extracted_total.labels(source="text", status="success").inc()
        return ExtractionResult(
            success=True,
            document=document,
            metrics={'runtime_ms': runtime_ms, 'lines_extracted': len(document.items)},
            extractor_version=self.version,
        )

    def supports(self, mime_type: str, filename: str = "") -> bool:
        return mime_type in self.MIME_TYPES or filename.lower().endswith(self.EXTENSIONS)

    @property
    def version(self) -> str:
        return 'text_v1'

    @property
    def priority(self) -> int:
        # Lowest priority: text/plain is also a common fallback MIME type
        return 50
