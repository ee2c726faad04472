"""Extractor Registry - Manages available BOQ extractors and selects one per upload.

Registry pattern for managing multiple extractor implementations.
Selection is by MIME type, falling back to the filename extension because
browsers often send application/octet-stream for spreadsheets.
"""

import logging
from typing import List, Optional

from domain.boq.ports import ExtractorPort

logger = logging.getLogger(__name__)


class ExtractorRegistry:
    """Registry for managing available BOQ extractors.

    Example:
        registry = ExtractorRegistry()
        registry.register(ExcelExtractor())
        registry.register(PDFTextExtractor())

        extractor = registry.get_extractor('application/pdf', 'boq.pdf')
        if extractor:
            result = extractor.extract(content, 'boq.pdf')
    """

    def __init__(self):
        """Initialize empty registry."""
        self._extractors: List[ExtractorPort] = []

    def register(self, extractor: ExtractorPort) -> None:
        """Register an extractor.

        Raises:
            ValueError: If extractor is None
        """
        if extractor is None:
            raise ValueError("Cannot register None as extractor")

        self._extractors.append(extractor)
        logger.info(f"Registered extractor: {extractor.version}")

    def get_extractor(self, mime_type: str, filename: str = "") -> Optional[ExtractorPort]:
        """Get the highest priority extractor for a MIME type / filename.

        Args:
            mime_type: MIME type of the upload (may be empty)
            filename: Original filename, used for extension matching

        Returns:
            ExtractorPort instance or None if nothing supports the file
        """
        if not mime_type and not filename:
            logger.warning("get_extractor called without mime_type or filename")
            return None

        compatible = [
            extractor
            for extractor in self._extractors
            if extractor.supports(mime_type or "", filename or "")
        ]

        if not compatible:
            logger.warning(f"No extractor found for MIME type: {mime_type} ({filename})")
            return None

        # Sort by priority (lower = higher priority)
        compatible.sort(key=lambda e: e.priority)
        selected = compatible[0]
        logger.debug(
            f"Selected extractor {selected.version} for {mime_type or filename} "
            f"(priority={selected.priority})"
        )
        return selected

    def list_extractors(self) -> List[ExtractorPort]:
        return list(self._extractors)

    def __len__(self) -> int:
        return len(self._extractors)
