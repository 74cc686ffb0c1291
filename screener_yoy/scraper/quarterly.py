"""Quarterly results scraper for Screener company pages.

The company page carries one or more ``table.data-table`` elements. The first
row of the first table is the quarter header (``"", "Mar 2023", "Jun 2023",
...``); the ``Sales`` and ``Net Profit`` rows supply the figures.

Main components:
- fetch_snapshot: Fetch a company page and parse it into a CompanySnapshot
- parse_snapshot: Pure parsing half, given already-fetched HTML
- DataNotFoundError: Raised when the sales or net profit row is missing
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import lxml.etree
import lxml.html

from screener_yoy.config import DESCRIPTION_MAX_CHARS, setup_logging
from screener_yoy.scraper.downloader import fetch_page
from screener_yoy.utils.parsing import extract_symbol, parse_number, truncate

if TYPE_CHECKING:
    import httpx
    from lxml.html import HtmlElement

logger = setup_logging(__name__)

NO_PROFILE_TEXT = "No company profile."
SALES_ROW_LABEL = "sales"
PROFIT_ROW_LABEL = "net profit"


class DataNotFoundError(Exception):
    """Raised when the quarterly table lacks a sales or net profit row."""


@dataclass(frozen=True)
class QuarterObservation:
    """Sales and net profit for one published quarter.

    Attributes
    ----------
    label : str
        Column header as published, e.g. ``"Sep 2024"``.
    sales : float
        Sales figure (``0.0`` when the cell was not numeric).
    profit : float
        Net profit figure (``0.0`` when the cell was not numeric).
    """

    label: str
    sales: float
    profit: float


@dataclass
class CompanySnapshot:
    """Everything scraped from a company page that the pipeline needs."""

    symbol: str
    description: str
    quarters: list[QuarterObservation] = field(default_factory=list)


def _class_predicate(class_name: str) -> str:
    """XPath predicate matching elements whose class list contains ``class_name``."""
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {class_name} ')"


def _extract_description(doc: HtmlElement) -> str:
    profiles = doc.xpath(f"//*[{_class_predicate('company-profile')}]")
    text = "".join(el.text_content() for el in profiles).strip()
    return truncate(text or NO_PROFILE_TEXT, DESCRIPTION_MAX_CHARS)


def _extract_table_rows(doc: HtmlElement) -> list[list[str]]:
    """Return stripped cell texts for every non-empty row of every data table."""
    rows: list[list[str]] = []
    for tr in doc.xpath(f"//table[{_class_predicate('data-table')}]//tr"):
        cols = [cell.text_content().strip() for cell in tr.xpath("./th | ./td")]
        if cols:
            rows.append(cols)
    return rows


def _find_row(rows: list[list[str]], name: str) -> list[str] | None:
    """Return the first row whose label cell contains ``name`` (case-insensitive)."""
    needle = name.lower()
    return next((row for row in rows if needle in row[0].lower()), None)


def _row_values(row: list[str], count: int) -> list[float]:
    values = [parse_number(cell) for cell in row[1:]]
    # Short rows pad with zeros so every quarter gets a value
    return (values + [0.0] * count)[:count]


def parse_snapshot(html: str, url: str) -> CompanySnapshot:
    """Parse a Screener company page into a :class:`CompanySnapshot`.

    Parameters
    ----------
    html : str
        Company page markup.
    url : str
        Page URL; the company symbol is taken from its path.

    Returns
    -------
    CompanySnapshot
        Symbol, truncated description, and quarters in published order.

    Raises
    ------
    ValueError
        If no symbol can be derived from ``url``.
    DataNotFoundError
        If the page has no sales or net profit row.
    """
    symbol = extract_symbol(url)

    try:
        doc = lxml.html.fromstring(html)
    except lxml.etree.ParserError as e:
        msg = f"Empty page for {symbol}; no Sales/Profit rows found."
        raise DataNotFoundError(msg) from e

    description = _extract_description(doc)
    rows = _extract_table_rows(doc)

    sales_row = _find_row(rows, SALES_ROW_LABEL)
    profit_row = _find_row(rows, PROFIT_ROW_LABEL)
    if sales_row is None or profit_row is None:
        msg = f"No Sales/Profit rows found for {symbol}."
        raise DataNotFoundError(msg)

    labels = rows[0][1:]
    sales = _row_values(sales_row, len(labels))
    profit = _row_values(profit_row, len(labels))

    quarters = [
        QuarterObservation(label=label, sales=sales[i], profit=profit[i])
        for i, label in enumerate(labels)
    ]
    logger.debug("Parsed %d quarters for %s", len(quarters), symbol)
    return CompanySnapshot(symbol=symbol, description=description, quarters=quarters)


def fetch_snapshot(url: str, client: httpx.Client) -> CompanySnapshot:
    """Fetch a company page and parse its quarterly results.

    Parameters
    ----------
    url : str
        Screener company URL, e.g. ``https://www.screener.in/company/ZAGGLE/#quarters``.
    client : httpx.Client
        HTTP client from :func:`screener_yoy.scraper.downloader.create_http_client`.

    Returns
    -------
    CompanySnapshot
        Parsed snapshot.

    Raises
    ------
    ValueError
        If no symbol can be derived from ``url`` (checked before fetching).
    DataNotFoundError
        If the page has no sales or net profit row.
    httpx.HTTPError
        If the page request fails.
    """
    # Validate the URL shape before any network activity
    extract_symbol(url)

    logger.info("Scraping quarterly data from: %s", url)
    html = fetch_page(client, url)
    snapshot = parse_snapshot(html, url)
    logger.info(f"{snapshot.symbol}: {len(snapshot.quarters)} quarters scraped")
    return snapshot
