"""Extractor module: text extraction from downloaded documents."""

from screener_yoy.extractor.pdf_parser import PdfTextResult, extract_text_from_pdf_bytes

__all__ = [
    "PdfTextResult",
    "extract_text_from_pdf_bytes",
]
