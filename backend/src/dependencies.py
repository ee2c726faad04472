"""Global FastAPI dependencies.

This module provides:
- get_catalog: process-wide catalog store
- get_matcher: BOQ matcher configured from settings
- get_extractor_registry: registry of BOQ document extractors

Each is a cached singleton; tests replace them via app.dependency_overrides.
"""

from functools import lru_cache

from catalog.store import CatalogPort, InMemoryCatalog
from config import get_settings
from infrastructure.extractors.extractor_registry import ExtractorRegistry
from infrastructure.extractors.registry_init import create_extractor_registry
from matching.boq_matcher import BOQMatcher


@lru_cache()
def get_catalog() -> CatalogPort:
    """Catalog shared by all requests of this process."""
    return InMemoryCatalog()


@lru_cache()
def get_matcher() -> BOQMatcher:
    """Matcher with thresholds and brand vocabulary from settings."""
    return BOQMatcher(get_settings().matching_config())


@lru_cache()
def get_extractor_registry() -> ExtractorRegistry:
    """Registry with every BOQ extractor registered."""
    return create_extractor_registry(get_settings().matching_config())
