"""Writer module for Google Sheets output.

One row per company: symbol, sector, sub-sector, 12 growth cells, concall
summary, guidance. Growth cells are colored after the append.
"""

from screener_yoy.writer.sheet_writer import (
    append_row,
    build_color_requests,
    build_output_row,
    color_for_value,
    parse_appended_row_index,
)

__all__ = [
    "append_row",
    "build_color_requests",
    "build_output_row",
    "color_for_value",
    "parse_appended_row_index",
]
