"""Pytest configuration for screener_yoy tests.

This module provides:
- Sample Screener company page markup (quarterly table + documents section)
- An httpx client factory backed by MockTransport
- Settings and fake OpenAI / gspread collaborators
"""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from typing import TYPE_CHECKING, Any
from unittest.mock import MagicMock

import httpx
import pytest

from screener_yoy.config import Settings

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

COMPANY_URL = "https://www.screener.in/company/ZAGGLE/#quarters"
TRANSCRIPT_URL = "https://www.bseindia.com/stockinfo/AnnPdfOpen.aspx?Pname=transcript.pdf"

QUARTERS_TABLE = """
<section id="quarters">
  <table class="data-table responsive-text-nowrap">
    <thead>
      <tr><th></th><th>Mar 2023</th><th>Jun 2023</th><th>Sep 2023</th><th>Dec 2023</th>
          <th>Mar 2024</th><th>Jun 2024</th><th>Sep 2024</th><th>Dec 2024</th></tr>
    </thead>
    <tbody>
      <tr><td class="text"><button>Sales&nbsp;+</button></td><td>1,000</td><td>1,100</td><td>1,200</td>
          <td>1,300</td><td>1,250</td><td>1,210</td><td>1,380</td><td>1,300</td></tr>
      <tr><td class="text"><button>Expenses&nbsp;+</button></td><td>900</td><td>950</td><td>1,000</td>
          <td>1,050</td><td>1,100</td><td>1,100</td><td>1,150</td><td>1,200</td></tr>
      <tr><td class="text"><button>Net Profit&nbsp;+</button></td><td>100</td><td>110</td><td>-20</td>
          <td>0</td><td>150</td><td>99</td><td>30</td><td>5</td></tr>
    </tbody>
  </table>
</section>
"""

DOCUMENTS_SECTION = """
<section id="documents">
  <div class="concalls">
    <ul class="list-links">
      <li class="flex">
        <div>Feb 2025</div>
        <a class="concall-link" title="Notes" href="/concalls/notes/1/">Notes</a>
        <a class="concall-link" title="Raw Transcript" href="{href}">Transcript</a>
      </li>
      <li class="flex">
        <div>Nov 2024</div>
        <a class="concall-link" title="Raw Transcript" href="/older-transcript.pdf">Transcript</a>
      </li>
    </ul>
  </div>
</section>
"""


def build_company_page(
    transcript_href: str | None = TRANSCRIPT_URL,
    profile: str = "<p>Zaggle is a spend management SaaS company.</p>",
    table: str = QUARTERS_TABLE,
) -> str:
    """Render a minimal Screener company page."""
    documents = DOCUMENTS_SECTION.format(href=transcript_href) if transcript_href else ""
    return f"""<html><body>
<div class="company-profile">{profile}</div>
{table}
{documents}
</body></html>"""


@pytest.fixture
def company_page() -> str:
    """Company page with quarterly table and an absolute transcript link."""
    return build_company_page()


@pytest.fixture
def make_company_page() -> Callable[..., str]:
    """Return :func:`build_company_page` for tests that vary the markup."""
    return build_company_page


@pytest.fixture
def company_url() -> str:
    """Screener URL for the sample company."""
    return COMPANY_URL


@pytest.fixture
def transcript_url() -> str:
    """Absolute transcript link used by the sample page."""
    return TRANSCRIPT_URL


@pytest.fixture
def make_http_client() -> Iterator[Callable[[dict[str, httpx.Response]], httpx.Client]]:
    """Return a factory for httpx clients that serve canned responses by URL.

    Unknown URLs answer 404. URL fragments are ignored when matching, as a
    server never sees them. Requests are recorded on ``client.requested``.
    """
    clients: list[httpx.Client] = []

    def without_fragment(url: str | httpx.URL) -> str:
        return str(httpx.URL(url).copy_with(fragment=None))

    def factory(routes: dict[str, httpx.Response]) -> httpx.Client:
        requested: list[str] = []
        served = {without_fragment(url): response for url, response in routes.items()}

        def handler(request: httpx.Request) -> httpx.Response:
            url = without_fragment(request.url)
            requested.append(url)
            canned = served.get(url)
            if canned is None:
                return httpx.Response(404)
            # Fresh response per request; the same URL may be fetched twice
            return httpx.Response(canned.status_code, headers=canned.headers, content=canned.content)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        client.requested = requested  # type: ignore[attr-defined]
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway credentials file."""
    credentials = tmp_path / "credentials.json"
    credentials.write_text("{}", encoding="utf-8")
    return Settings(
        sheet_id="sheet-key",
        sheet_tab="Results",
        openai_api_key="sk-test",
        credentials_path=credentials,
    )


@pytest.fixture
def make_openai_client() -> Callable[[str | None], MagicMock]:
    """Return a factory for fake OpenAI clients replying with fixed content."""

    def factory(content: str | None) -> MagicMock:
        client = MagicMock()
        message = SimpleNamespace(content=content)
        client.chat.completions.create.return_value = SimpleNamespace(choices=[SimpleNamespace(message=message)])
        return client

    return factory


@pytest.fixture
def make_sheets_client() -> Callable[..., MagicMock]:
    """Return a factory for fake gspread clients whose append reports a range."""

    def factory(updated_range: str = "Results!A5:Q5", worksheet_id: int = 123) -> MagicMock:
        client = MagicMock()
        spreadsheet = client.open_by_key.return_value
        worksheet = spreadsheet.worksheet.return_value
        worksheet.id = worksheet_id
        worksheet.append_row.return_value = {
            "spreadsheetId": "sheet-key",
            "tableRange": "Results!A1:Q4",
            "updates": {"updatedRange": updated_range, "updatedRows": 1},
        }
        return client

    return factory


@pytest.fixture
def pdf_pages(monkeypatch: pytest.MonkeyPatch) -> Callable[[list[Any]], None]:
    """Patch ``pdfplumber.open`` to yield fake pages.

    Each item is either a string (page text), ``None`` (no text layer), or an
    exception instance raised from ``extract_text``.
    """

    def install(pages: list[Any]) -> None:
        fake_pages = []
        for item in pages:
            page = MagicMock()
            if isinstance(item, Exception):
                page.extract_text.side_effect = item
            else:
                page.extract_text.return_value = item
            fake_pages.append(page)

        pdf = MagicMock()
        pdf.pages = fake_pages
        pdf.__enter__.return_value = pdf
        pdf.__exit__.return_value = False
        monkeypatch.setattr("screener_yoy.extractor.pdf_parser.pdfplumber.open", lambda _stream: pdf)

    return install
