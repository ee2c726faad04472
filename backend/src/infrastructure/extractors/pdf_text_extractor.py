"""PDF text extractor - Rule-based BOQ extraction from text-based PDFs.

Pulls the text layer of every page with pdfplumber and hands it to the
line-based BOQ text parser. Scanned PDFs without a text layer yield no items.
"""

import io
import logging
import time

import pdfplumber

from domain.boq.ports import ExtractionResult, ExtractorPort
from observability.metrics import boq_documents_extracted_total
from .text_extractor import parse_boq_text

logger = logging.getLogger(__name__)


class PDFTextExtractor(ExtractorPort):
    """PDF BOQ extractor using pdfplumber.

    Note: designed for text-based PDFs. Pages without extractable text are
    counted in the metrics so scanned uploads can be spotted.
    """

    def extract(self, content: bytes, filename: str) -> ExtractionResult:
        """Extract BOQ items from a PDF file.

        Args:
            content: Raw PDF bytes
            filename: Original filename

        Returns:
            ExtractionResult with the parsed document or error
        """
        start = time.perf_counter()

        try:
            page_texts = []
            empty_pages = 0
            with pdfplumber.open(io.BytesIO(content)) as pdf:
                page_count = len(pdf.pages)
                logger.info(f"Processing PDF with {page_count} pages", extra={"file_name": filename})

                for page in pdf.pages:
                    page_text = page.extract_text() or ""
                    if not page_text.strip():
                        empty_pages += 1
                    page_texts.append(page_text)

            if empty_pages:
                logger.warning(
                    f"{empty_pages} of {page_count} PDF pages have no text layer",
                    extra={"file_name": filename},
                )

            document = parse_boq_text("\n".join(page_texts))

        except Exception as e:
            runtime_ms = int((time.perf_counter() - start) * 1000)
            logger.error(f"PDF extraction failed: {e}", exc_info=True)
            boq_documents_extracted_total.labels(source="pdf", status="error").inc()
            return ExtractionResult(
                success=False,
                error=str(e),
                metrics={'runtime_ms': runtime_ms, 'error_type': type(e).__name__},
                extractor_version=self.version,
            )

        runtime_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            f"PDF extraction succeeded: {len(document.items)} items, runtime={runtime_ms}ms",
            extra={"file_name": filename, "items": len(document.items)},
        )
        boq_documents_extracted_total.labels(source="pdf", status="success").inc()

        return ExtractionResult(
            success=True,
            document=document,
            metrics={
                'runtime_ms': runtime_ms,
                'page_count': page_count,
                'empty_pages': empty_pages,
                'lines_extracted': len(document.items),
            },
            extractor_version=self.version,
        )

    def supports(self, mime_type: str, filename: str = "") -> bool:
        return mime_type == 'application/pdf' or filename.lower().endswith('.pdf')

    @property
    def version(self) -> str:
        return 'pdf_text_v1'
