"""Shared utility functions for screener_yoy package."""

from screener_yoy.utils.parsing import (
    extract_symbol,
    parse_number,
    truncate,
)

__all__ = [
    "extract_symbol",
    "parse_number",
    "truncate",
]
