"""Unit tests for text-based PDF extraction"""

import io
import logging

from infrastructure.extractors.pdf_text_extractor import PDFTextExtractor


def build_pdf(pages) -> bytes:
    """Minimal text PDF (Helvetica 14pt), one list of lines per page"""
    page_ids = [4 + 2 * i for i in range(len(pages))]
    kids = b" ".join(b"%d 0 R" % page_id for page_id in page_ids)
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [" + kids + b"] /Count %d >>" % len(pages),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for page_id, lines in zip(page_ids, pages):
        ops = [b"BT /F1 14 Tf 20 TL 40 780 Td"]
        for line in lines:
            ops.append(b"(" + line.encode("latin-1") + b") Tj T*")
        ops.append(b"ET")
        stream = b"\n".join(ops)
        objects.append(
            b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 1200 842] "
            b"/Resources << /Font << /F1 3 0 R >> >> /Contents %d 0 R >>" % (page_id + 1)
        )
        objects.append(b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream")

    out = io.BytesIO()
    out.write(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(out.tell())
        out.write(b"%d 0 obj\n" % number + body + b"\nendobj\n")

    xref_offset = out.tell()
    out.write(b"xref\n0 %d\n" % (len(objects) + 1))
    out.write(b"0000000000 65535 f \n")
    for offset in offsets:
        out.write(b"%010d 00000 n \n" % offset)
    out.write(b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1))
    out.write(b"startxref\n%d\n" % xref_offset)
    out.write(b"%%EOF\n")
    return out.getvalue()


BOQ_PAGE = [
    "Project Kitchen Fitout Client Acme Interiors Work Order # WO42 Work Order Date 01-05-2024",
    "1 Century Plywood 18mm Century BWP 10 sheets 2,500 25,000",
    "2 Hinge 20 nos 150 3000",
]


class TestPDFTextExtractor:
    """Test pdfplumber text extraction feeding the BOQ text parser"""

    def test_extract_items_and_metadata(self):
        result = PDFTextExtractor().extract(build_pdf([BOQ_PAGE]), "boq.pdf")

        assert result.success is True
        assert result.extractor_version == "pdf_text_v1"
        assert result.metrics["page_count"] == 1
        assert result.metrics["empty_pages"] == 0

        document = result.document
        assert document.project_name == "Kitchen Fitout"
        assert document.client == "Acme Interiors"
        assert document.work_order_number == "WO42"

        plywood, hinge = document.items
        assert plywood.description == "Century Plywood 18mm"
        assert plywood.brand == "Century"
        assert plywood.quantity == 10.0
        assert plywood.amount == 25000.0
        assert hinge.description == "Hinge"
        assert hinge.unit == "nos"
        assert document.total_value == 28000.0

    def test_pages_without_text_layer(self, caplog):
        content = build_pdf([BOQ_PAGE, []])

        with caplog.at_level(logging.WARNING):
            result = PDFTextExtractor().extract(content, "scan.pdf")

        assert result.success is True
        assert result.metrics["page_count"] == 2
        assert result.metrics["empty_pages"] == 1
        assert len(result.document.items) == 2
        assert "1 of 2 PDF pages have no text layer" in caplog.text

    def test_supports(self):
        extractor = PDFTextExtractor()

        assert extractor.supports("application/pdf")
        assert extractor.supports("application/octet-stream", "BOQ.PDF")
        assert not extractor.supports("text/plain", "boq.txt")
