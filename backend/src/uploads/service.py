"""BOQ extraction service - runs the matching extractor over an uploaded file"""

import logging
from typing import Optional

from domain.boq.models import BOQDocument
from domain.boq.ports import ExtractionError, ExtractionResult
from infrastructure.extractors.extractor_registry import ExtractorRegistry

logger = logging.getLogger(__name__)


class UnsupportedFileError(ExtractionError):
    """No registered extractor handles the file type."""
    pass


def extract_boq(
    registry: ExtractorRegistry,
    content: bytes,
    filename: str,
    mime_type: Optional[str] = None,
) -> ExtractionResult:
    """Extract a BOQ document from file content.

    Args:
        registry: Extractor registry
        content: Raw file bytes
        filename: Original filename
        mime_type: MIME type reported by the client

    Returns:
        Successful ExtractionResult (document is set)

    Raises:
        UnsupportedFileError: If no extractor supports the file
        ExtractionError: If the extractor could not read the file
    """
    extractor = registry.get_extractor(mime_type or "", filename)
    if extractor is None:
        raise UnsupportedFileError(f"Unsupported file type: {mime_type or filename}")

    result = extractor.extract(content, filename)
    if not result.success:
        raise ExtractionError(result.error or "Extraction failed")

    if result.document is None:
        result.document = BOQDocument()

    logger.info(
        f"Extracted {len(result.document.items)} BOQ items with {result.extractor_version}",
        extra={"file_name": filename, "items": len(result.document.items)},
    )
    return result
