"""Extractor Registry Initialization - Register all BOQ extractors."""

import logging
from typing import Optional

from config import MatchingConfig
from domain.boq.brands import BrandVocabulary
from .excel_extractor import ExcelExtractor
from .extractor_registry import ExtractorRegistry
from .pdf_text_extractor import PDFTextExtractor
from .text_extractor import TextExtractor

logger = logging.getLogger(__name__)


def create_extractor_registry(config: Optional[MatchingConfig] = None) -> ExtractorRegistry:
    """Create a registry with the Excel, PDF and plain-text extractors.

    Args:
        config: Matching configuration; its brand vocabulary is used when the
            Excel extractor parses item descriptions

    Returns:
        ExtractorRegistry ready for use
    """
    config = config or MatchingConfig()
    registry = ExtractorRegistry()

    registry.register(ExcelExtractor(BrandVocabulary(config.brand_keywords)))
    registry.register(PDFTextExtractor())
    registry.register(TextExtractor())

    logger.info(f"Extractor registry initialized with {len(registry)} extractors")
    return registry
