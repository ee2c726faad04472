"""Product catalog API endpoints"""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from dependencies import get_catalog
from .import_service import CatalogImportError, CatalogImportService
from .schemas import CatalogImportResult, CatalogListResponse, CatalogProductSchema
from .store import CatalogPort

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("", response_model=CatalogListResponse)
def list_catalog(catalog: CatalogPort = Depends(get_catalog)):
    """List all products currently loaded for matching."""
    products = catalog.list_products()
    return CatalogListResponse(
        items=[CatalogProductSchema.from_domain(p) for p in products],
        total=len(products),
    )


@router.post("/import", response_model=CatalogImportResult)
async def import_catalog(
    file: UploadFile = File(...),
    catalog: CatalogPort = Depends(get_catalog),
):
    """
    Import products from a CSV file.

    Rows are upserted by id; rows failing validation are reported with their
    row number and skipped.

    Raises:
        HTTPException 400: If the file is empty or lacks required columns
    """
    content = await file.read()

    try:
        return CatalogImportService(catalog).import_from_csv(content)
    except CatalogImportError as e:
        logger.warning(f"Catalog import rejected: {e}", extra={"file_name": file.filename})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_catalog(catalog: CatalogPort = Depends(get_catalog)):
    """Remove every product from the catalog."""
    catalog.clear()
