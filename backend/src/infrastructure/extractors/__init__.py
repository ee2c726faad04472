"""Extractor implementations - Concrete adapters for the BOQ extraction port.

Contains rule-based extractors for Excel BOM workbooks, text PDFs and plain text.
"""

from .excel_extractor import ExcelExtractor
from .pdf_text_extractor import PDFTextExtractor
from .text_extractor import TextExtractor, parse_boq_text, parse_boq_line
from .extractor_registry import ExtractorRegistry
from .registry_init import create_extractor_registry

__all__ = [
    "ExcelExtractor",
    "PDFTextExtractor",
    "TextExtractor",
    "parse_boq_text",
    "parse_boq_line",
    "ExtractorRegistry",
    "create_extractor_registry",
]
