"""Upload API endpoints for Furnili BOQ

Provides POST /boq/extract for BOQ document upload.
Validates filename, file type and size, runs the matching extractor
and optionally auto-matches the extracted items against the catalog.
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from catalog.store import CatalogPort
from config import Settings, get_settings
from dependencies import get_catalog, get_extractor_registry, get_matcher
from domain.boq.ports import ExtractionError
from domain.documents import (
    is_supported_file,
    sanitize_filename,
    validate_file_size,
    validate_filename,
)
from infrastructure.extractors.extractor_registry import ExtractorRegistry
from matching.boq_matcher import BOQMatcher, summarize
from matching.ports import MatcherError
from matching.schemas import BOQLineItemSchema, MatchSummarySchema
from .schemas import ExtractedBOQResponse
from .service import UnsupportedFileError, extract_boq

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/boq", tags=["Uploads"])


@router.post("/extract", response_model=ExtractedBOQResponse)
async def extract_document(
    file: UploadFile = File(...),
    auto_match: bool = Form(False),
    settings: Settings = Depends(get_settings),
    registry: ExtractorRegistry = Depends(get_extractor_registry),
    matcher: BOQMatcher = Depends(get_matcher),
    catalog: CatalogPort = Depends(get_catalog),
):
    """
    Extract a BOQ from an uploaded file.

    Supported file types:
    - Excel BOM workbooks (.xlsx, .xls)
    - Text-based PDF (application/pdf)
    - Plain text (text/plain)

    Args:
        file: Uploaded file (multipart/form-data)
        auto_match: Match extracted items against the loaded catalog

    Returns:
        ExtractedBOQResponse: Document metadata, line items, totals

    Raises:
        HTTPException 400: Invalid filename or empty file
        HTTPException 413: File exceeds MAX_UPLOAD_SIZE_BYTES
        HTTPException 415: Unsupported file type
        HTTPException 422: File could not be read
    """
    is_valid, error_msg = validate_filename(file.filename)
    if not is_valid:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error_msg)

    safe_filename = sanitize_filename(file.filename)

    if not is_supported_file(file.content_type, safe_filename):
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f"Unsupported file type: {file.content_type}. "
                   f"Supported types: PDF, Excel (.xls, .xlsx), plain text",
        )

    content = await file.read()
    size_bytes = len(content)

    is_valid, error_msg = validate_file_size(size_bytes, settings.MAX_UPLOAD_SIZE_BYTES)
    if not is_valid:
        code = (
            status.HTTP_400_BAD_REQUEST
            if size_bytes == 0
            else status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
        )
        raise HTTPException(status_code=code, detail=error_msg)

    try:
        result = extract_boq(registry, content, safe_filename, file.content_type)
    except UnsupportedFileError as e:
        raise HTTPException(status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, detail=str(e))
    except ExtractionError as e:
        logger.warning(f"BOQ extraction failed: {e}", extra={"file_name": safe_filename})
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Could not read BOQ file: {e}",
        )

    document = result.document
    items = document.items
    if auto_match:
        try:
            items = matcher.auto_match(items, catalog.list_products())
        except MatcherError as e:
            logger.error(f"Auto-match after extraction failed: {e}", exc_info=True)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return ExtractedBOQResponse(
        file_name=safe_filename,
        extractor_version=result.extractor_version,
        project_name=document.project_name,
        client=document.client,
        work_order_number=document.work_order_number,
        work_order_date=document.work_order_date,
        description=document.description,
        items=[BOQLineItemSchema.from_domain(i) for i in items],
        total_value=document.total_value,
        summary=MatchSummarySchema.from_domain(summarize(items)),
        auto_matched=auto_match,
    )
