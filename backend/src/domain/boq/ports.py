"""
BOQ extraction ports (interfaces) following Hexagonal Architecture.
Extractors are pluggable adapters turning an uploaded file into a BOQDocument.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .models import BOQDocument


class ExtractionError(Exception):
    """Raised when a BOQ file cannot be read."""
    pass


@dataclass
class ExtractionResult:
    """Outcome of running one extractor over one file.

    Attributes:
        success: Whether the file could be read
        document: Extracted document (None on failure)
        error: Error message (None on success)
        metrics: Runtime, row/line counts
        extractor_version: Identifier of the extractor that ran
    """
    success: bool
    document: Optional[BOQDocument] = None
    error: Optional[str] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
    extractor_version: str = ""


class ExtractorPort(ABC):
    """
    Port interface for BOQ document extractors.
    All extractors (Excel, PDF, text) must implement this interface.
    """

    @abstractmethod
    def extract(self, content: bytes, filename: str) -> ExtractionResult:
        """
        Extract BOQ line items and header metadata from a file.

        Args:
            content: Raw file bytes
            filename: Original filename

        Returns:
            ExtractionResult; failures are reported, not raised
        """
        pass

    @abstractmethod
    def supports(self, mime_type: str, filename: str = "") -> bool:
        """
        Check if this extractor can handle the given file type.

        Args:
            mime_type: MIME type (e.g., 'application/pdf')
            filename: Original filename (extension fallback)
        """
        pass

    @property
    @abstractmethod
    def version(self) -> str:
        pass

    @property
    def priority(self) -> int:
        """Lower runs first when several extractors support a type."""
        return 10
