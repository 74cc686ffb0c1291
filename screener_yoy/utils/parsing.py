"""Shared parsing utilities for scraped table cells and company URLs.

Screener publishes figures with comma thousands separators (``"1,342.5"``)
and occasionally leaves cells blank or filled with placeholders. Cells that
do not start with a number coerce to ``0.0`` so that a single malformed cell
never aborts the run.
"""

from __future__ import annotations

import re

# Leading float prefix, the way a browser's parseFloat reads "12.5%" as 12.5
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

SYMBOL_PATH_INDEX = 4


def parse_number(value_str: str | None) -> float:
    """Parse a table cell into a float, defaulting to ``0.0``.

    Examples
    --------
    - "1,342" -> 1342.0
    - "-62.5" -> -62.5
    - "12%" -> 12.0
    - "" -> 0.0
    - "--" -> 0.0

    Parameters
    ----------
    value_str
        Raw cell text.

    Returns
    -------
    float
        Parsed value, or ``0.0`` when the cell has no leading number.
    """
    if not value_str:
        return 0.0

    match = _LEADING_NUMBER.match(value_str.replace(",", ""))
    if match is None:
        return 0.0
    return float(match.group(1))


def extract_symbol(url: str) -> str:
    """Return the upper-cased company symbol from a Screener company URL.

    ``https://www.screener.in/company/ZAGGLE/#quarters`` splits on ``/`` into
    ``["https:", "", "www.screener.in", "company", "ZAGGLE", ...]``; the symbol
    is the segment at index 4.

    Raises
    ------
    ValueError
        If the URL has no segment at that position.
    """
    segments = url.split("/")
    if len(segments) <= SYMBOL_PATH_INDEX or not segments[SYMBOL_PATH_INDEX]:
        msg = f"Cannot derive a company symbol from URL: {url}"
        raise ValueError(msg)
    return segments[SYMBOL_PATH_INDEX].upper()


def truncate(text: str, max_chars: int) -> str:
    """Cut ``text`` to at most ``max_chars`` characters."""
    return text[:max_chars]
