"""Scraper module for Screener company pages and linked documents.

Primary entry points:
- fetch_snapshot: Company symbol, description and quarterly sales/net profit
- fetch_latest_transcript_text: Text of the most recent concall transcript PDF
- create_http_client: Shared httpx client for one run
"""

from screener_yoy.scraper.downloader import create_http_client, fetch_bytes, fetch_page
from screener_yoy.scraper.quarterly import (
    CompanySnapshot,
    DataNotFoundError,
    QuarterObservation,
    fetch_snapshot,
    parse_snapshot,
)
from screener_yoy.scraper.transcript import (
    TRANSCRIPT_UNAVAILABLE,
    TranscriptResult,
    fetch_latest_transcript,
    fetch_latest_transcript_text,
    find_transcript_link,
)

__all__ = [
    "TRANSCRIPT_UNAVAILABLE",
    # Quarterly results
    "CompanySnapshot",
    "DataNotFoundError",
    "QuarterObservation",
    # Transcripts
    "TranscriptResult",
    # HTTP
    "create_http_client",
    "fetch_bytes",
    "fetch_latest_transcript",
    "fetch_latest_transcript_text",
    "fetch_page",
    "fetch_snapshot",
    "find_transcript_link",
    "parse_snapshot",
]
