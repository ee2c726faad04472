"""Catalog module - product catalog source for BOQ matching"""

from .store import CatalogPort, InMemoryCatalog
from .import_service import CatalogImportService, CatalogImportError

__all__ = [
    "CatalogPort",
    "InMemoryCatalog",
    "CatalogImportService",
    "CatalogImportError",
]
