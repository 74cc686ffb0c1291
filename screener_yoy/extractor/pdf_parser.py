"""PDF text extraction using pdfplumber for in-memory transcript documents."""

from __future__ import annotations

import io
from dataclasses import dataclass, field

import pdfplumber

from screener_yoy.config import setup_logging

logger = setup_logging(__name__)


@dataclass
class PdfTextResult:
    """Best-effort text extraction outcome.

    Attributes
    ----------
    text : str
        Concatenated text of every page that extracted, one newline after each.
    page_count : int
        Pages in the document.
    skipped_pages : list[int]
        One-indexed pages whose extraction raised and contributed nothing.
    """

    text: str = ""
    page_count: int = 0
    skipped_pages: list[int] = field(default_factory=list)

    @property
    def extracted_pages(self) -> int:
        """Pages that did not raise during extraction."""
        return self.page_count - len(self.skipped_pages)


def extract_text_from_pdf_bytes(content: bytes) -> PdfTextResult:
    """Extract text from every page of a PDF held in memory.

    Parameters
    ----------
    content : bytes
        Raw PDF document.

    Returns
    -------
    PdfTextResult
        Page texts joined in page order. A page whose extraction raises is
        recorded in ``skipped_pages`` and extraction continues.

    Raises
    ------
    Exception
        Whatever pdfplumber raises when the document itself cannot be opened
        (e.g. not a PDF). Per-page errors never propagate.
    """
    chunks: list[str] = []
    skipped: list[int] = []

    with pdfplumber.open(io.BytesIO(content)) as pdf:
        total_pages = len(pdf.pages)
        logger.debug("PDF has %s pages", total_pages)

        for idx, page in enumerate(pdf.pages, start=1):
            try:
                text = page.extract_text()
            except Exception as e:  # noqa: BLE001
                logger.debug(f"Page {idx}: extraction failed ({e})")
                skipped.append(idx)
                continue
            if text:
                chunks.append(text + "\n")
                logger.debug(f"Page {idx}: {len(text)} characters")

    result = PdfTextResult(text="".join(chunks), page_count=total_pages, skipped_pages=skipped)
    logger.info(f"Extracted text from {result.extracted_pages}/{total_pages} pages")
    if skipped:
        logger.warning("Skipped %d unreadable pages: %s", len(skipped), skipped)
    return result
