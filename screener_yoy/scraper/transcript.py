"""Latest earnings-call transcript locator for Screener company pages.

The ``#documents`` section lists concalls as ``ul.list-links > li`` entries,
each with links titled ``"Raw Transcript"``, ``"Notes"``, ``"PPT"`` and so on.
The first ``li`` with a raw transcript link is the most recent call.

A missing link, an unreachable PDF, or an unreadable PDF are not errors: the
pipeline continues with :data:`TRANSCRIPT_UNAVAILABLE` as the transcript text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from urllib.parse import urljoin

import httpx
import lxml.etree
import lxml.html

from screener_yoy.config import SOURCE_BASE_URL, TRANSCRIPT_MAX_CHARS, setup_logging
from screener_yoy.extractor.pdf_parser import extract_text_from_pdf_bytes
from screener_yoy.scraper.downloader import fetch_bytes, fetch_page
from screener_yoy.utils.parsing import truncate

if TYPE_CHECKING:
    from screener_yoy.extractor.pdf_parser import PdfTextResult

logger = setup_logging(__name__)

TRANSCRIPT_UNAVAILABLE = "Transcript not available"
TRANSCRIPT_LINK_TITLE = "Raw Transcript"

_TRANSCRIPT_LINK_XPATH = (
    "//*[@id='documents']"
    "//ul[contains(concat(' ', normalize-space(@class), ' '), ' list-links ')]"
    f"//li//a[@title='{TRANSCRIPT_LINK_TITLE}'][@href]/@href"
)


@dataclass
class TranscriptResult:
    """Transcript text plus where it came from.

    Attributes
    ----------
    text : str
        Truncated transcript text, or :data:`TRANSCRIPT_UNAVAILABLE`.
    source_url : str | None
        Absolute PDF URL, ``None`` when no link was found.
    skipped_pages : list[int]
        One-indexed PDF pages that could not be extracted.
    """

    text: str = TRANSCRIPT_UNAVAILABLE
    source_url: str | None = None
    skipped_pages: list[int] = field(default_factory=list)

    @property
    def available(self) -> bool:
        """``True`` when transcript text was actually extracted."""
        return self.text != TRANSCRIPT_UNAVAILABLE


def find_transcript_link(html: str, base_url: str = SOURCE_BASE_URL) -> str | None:
    """Return the absolute URL of the latest raw transcript, if any.

    Parameters
    ----------
    html : str
        Company page markup.
    base_url : str, optional
        Site root used to resolve relative links.

    Returns
    -------
    str | None
        First matching link in document order, or ``None``.
    """
    try:
        doc = lxml.html.fromstring(html)
    except lxml.etree.ParserError:
        # Blank or comment-only markup
        return None

    links = [href.strip() for href in doc.xpath(_TRANSCRIPT_LINK_XPATH) if href.strip()]
    if not links:
        return None

    link = links[0]
    return link if link.startswith("http") else urljoin(base_url, link)


def _extract(content: bytes) -> PdfTextResult | None:
    try:
        return extract_text_from_pdf_bytes(content)
    except Exception as e:  # noqa: BLE001
        logger.warning("Transcript PDF could not be opened: %s", e)
        return None


def fetch_latest_transcript(url: str, client: httpx.Client) -> TranscriptResult:
    """Locate, download, and extract the latest transcript for a company.

    Parameters
    ----------
    url : str
        Screener company URL.
    client : httpx.Client
        HTTP client shared with the rest of the run.

    Returns
    -------
    TranscriptResult
        Extracted text capped at ``TRANSCRIPT_MAX_CHARS``, or the unavailable
        sentinel when there is no link or the document cannot be read.

    Raises
    ------
    httpx.HTTPError
        If the company page itself cannot be fetched.
    """
    html = fetch_page(client, url)
    link = find_transcript_link(html)
    if link is None:
        logger.info("No transcript link found")
        return TranscriptResult()

    logger.info("Transcript link: %s", link)

    try:
        content = fetch_bytes(client, link)
    except httpx.HTTPError as e:
        logger.warning("Transcript download failed: %s", e)
        return TranscriptResult(source_url=link)

    pdf_result = _extract(content)
    if pdf_result is None:
        return TranscriptResult(source_url=link)

    return TranscriptResult(
        text=truncate(pdf_result.text, TRANSCRIPT_MAX_CHARS),
        source_url=link,
        skipped_pages=pdf_result.skipped_pages,
    )


def fetch_latest_transcript_text(url: str, client: httpx.Client) -> str:
    """Return the latest transcript text, or ``"Transcript not available"``."""
    return fetch_latest_transcript(url, client).text
