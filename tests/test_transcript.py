"""Tests for transcript link discovery and text extraction."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import pytest

from screener_yoy.config import TRANSCRIPT_MAX_CHARS
from screener_yoy.scraper.transcript import (
    TRANSCRIPT_UNAVAILABLE,
    fetch_latest_transcript,
    fetch_latest_transcript_text,
    find_transcript_link,
)

if TYPE_CHECKING:
    from collections.abc import Callable


class TestFindTranscriptLink:
    """Tests for find_transcript_link."""

    def test_first_raw_transcript_link(self, company_page: str, transcript_url: str) -> None:
        """The newest concall comes first; its "Raw Transcript" link wins over "Notes"."""
        assert find_transcript_link(company_page) == transcript_url

    def test_relative_link_resolved(self, make_company_page: Callable[..., str]) -> None:
        """Site-relative links are resolved against screener.in."""
        html = make_company_page(transcript_href="/concalls/transcript/123/")

        assert find_transcript_link(html) == "https://www.screener.in/concalls/transcript/123/"

    def test_no_documents_section(self, make_company_page: Callable[..., str]) -> None:
        """Pages without a documents section have no link."""
        assert find_transcript_link(make_company_page(transcript_href=None)) is None

    def test_link_outside_documents_ignored(self) -> None:
        """Only links inside #documents ul.list-links count."""
        html = '<html><body><a title="Raw Transcript" href="/x.pdf">x</a></body></html>'

        assert find_transcript_link(html) is None

    @pytest.mark.parametrize("html", ["", "<!-- maintenance -->"])
    def test_page_without_elements(self, html: str) -> None:
        """Blank or comment-only pages have no link."""
        assert find_transcript_link(html) is None


class TestFetchLatestTranscript:
    """Tests for fetch_latest_transcript and fetch_latest_transcript_text."""

    def test_no_link_returns_sentinel(
        self,
        make_http_client: Callable[[dict[str, httpx.Response]], httpx.Client],
        make_company_page: Callable[..., str],
        company_url: str,
    ) -> None:
        """Without a "Raw Transcript" link the literal sentinel is returned."""
        page = make_company_page(transcript_href=None)
        client = make_http_client({company_url: httpx.Response(200, text=page)})

        assert fetch_latest_transcript_text(company_url, client) == "Transcript not available"

    def test_extracts_and_truncates(
        self,
        make_http_client: Callable[[dict[str, httpx.Response]], httpx.Client],
        pdf_pages: Callable[[list[Any]], None],
        company_page: str,
        company_url: str,
        transcript_url: str,
    ) -> None:
        """Downloaded PDF text is capped at the transcript limit."""
        pdf_pages(["a" * 4000, "b" * 4000])
        client = make_http_client({
            company_url: httpx.Response(200, text=company_page),
            transcript_url: httpx.Response(200, content=b"%PDF-1.7"),
        })

        result = fetch_latest_transcript(company_url, client)

        assert result.available
        assert result.source_url == transcript_url
        assert len(result.text) == TRANSCRIPT_MAX_CHARS
        assert result.text.startswith("a" * 4000 + "\nb")

    def test_skipped_pages_reported(
        self,
        make_http_client: Callable[[dict[str, httpx.Response]], httpx.Client],
        pdf_pages: Callable[[list[Any]], None],
        company_page: str,
        company_url: str,
        transcript_url: str,
    ) -> None:
        """Per-page failures surface on the result instead of raising."""
        pdf_pages([ValueError("broken stream"), "Management commentary"])
        client = make_http_client({
            company_url: httpx.Response(200, text=company_page),
            transcript_url: httpx.Response(200, content=b"%PDF-1.7"),
        })

        result = fetch_latest_transcript(company_url, client)

        assert result.text == "Management commentary\n"
        assert result.skipped_pages == [1]

    def test_download_failure_returns_sentinel(
        self,
        make_http_client: Callable[[dict[str, httpx.Response]], httpx.Client],
        company_page: str,
        company_url: str,
        transcript_url: str,
    ) -> None:
        """A transcript that cannot be downloaded does not fail the run."""
        client = make_http_client({company_url: httpx.Response(200, text=company_page)})

        result = fetch_latest_transcript(company_url, client)

        assert result.text == TRANSCRIPT_UNAVAILABLE
        assert not result.available
        assert result.source_url == transcript_url

    def test_unreadable_pdf_returns_sentinel(
        self,
        make_http_client: Callable[[dict[str, httpx.Response]], httpx.Client],
        monkeypatch: pytest.MonkeyPatch,
        company_page: str,
        company_url: str,
        transcript_url: str,
    ) -> None:
        """A document pdfplumber cannot open is treated as unavailable."""

        def refuse(_stream: Any) -> None:
            msg = "No /Root object! - Is this really a PDF?"
            raise ValueError(msg)

        monkeypatch.setattr("screener_yoy.extractor.pdf_parser.pdfplumber.open", refuse)
        client = make_http_client({
            company_url: httpx.Response(200, text=company_page),
            transcript_url: httpx.Response(200, content=b"<html>not a pdf</html>"),
        })

        assert fetch_latest_transcript_text(company_url, client) == TRANSCRIPT_UNAVAILABLE

    def test_company_page_failure_propagates(
        self,
        make_http_client: Callable[[dict[str, httpx.Response]], httpx.Client],
        company_url: str,
    ) -> None:
        """Only the optional transcript steps are absorbed."""
        client = make_http_client({company_url: httpx.Response(500)})

        with pytest.raises(httpx.HTTPStatusError):
            fetch_latest_transcript_text(company_url, client)
