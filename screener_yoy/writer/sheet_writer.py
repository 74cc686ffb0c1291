"""Google Sheets writer for the per-company summary row.

Row layout (17 columns, A:Q):

=====  ==========================================================
A      Symbol
B      Sector
C      Sub-sector
D:O    YOY growth, ``[sales, profit]`` for 6 quarters, oldest first
P      Concall summary
Q      Guidance
=====  ==========================================================

After appending, the twelve growth cells are colored: white for unavailable,
green for growth of at least 10%, red otherwise.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from gspread.utils import InsertDataOption, ValueInputOption

from screener_yoy.config import setup_logging
from screener_yoy.transformer.growth import UNAVAILABLE

if TYPE_CHECKING:
    from collections.abc import Sequence

    from screener_yoy.insights.generator import Insight
    from screener_yoy.scraper.quarterly import CompanySnapshot
    from screener_yoy.transformer.growth import GrowthValue

logger = setup_logging(__name__)

APPEND_RANGE = "A:Z"
GROWTH_START_COLUMN = 3
GREEN_THRESHOLD = 10

WHITE = {"red": 1, "green": 1, "blue": 1}
GREEN = {"red": 0, "green": 0.8, "blue": 0}
RED = {"red": 1, "green": 0, "blue": 0}

_TRAILING_ROW_NUMBER = re.compile(r"(\d+)$")


def build_output_row(
    snapshot: CompanySnapshot,
    insight: Insight,
    growth: Sequence[GrowthValue],
) -> list[Any]:
    """Assemble the sheet row for one company.

    Returns
    -------
    list[Any]
        ``[symbol, sector, sub_sector, *growth, concall_summary, guidance]``.
    """
    return [
        snapshot.symbol,
        insight.sector,
        insight.sub_sector,
        *growth,
        insight.concall_summary,
        insight.guidance,
    ]


def color_for_value(value: GrowthValue | None) -> dict[str, float]:
    """Background color for one growth cell.

    Parameters
    ----------
    value : GrowthValue | None
        Growth percentage or the unavailable sentinel.

    Returns
    -------
    dict[str, float]
        Sheets RGB color: white for unavailable, green for ``>= 10``, red
        for everything else (negative and 0-9.99 alike).
    """
    if value is None or value == UNAVAILABLE:
        return WHITE
    if value >= GREEN_THRESHOLD:
        return GREEN
    return RED


def build_color_requests(
    sheet_id: int,
    row_index: int,
    growth: Sequence[GrowthValue],
    start_column: int = GROWTH_START_COLUMN,
) -> list[dict[str, Any]]:
    """Build ``repeatCell`` requests coloring each growth cell of one row.

    Parameters
    ----------
    sheet_id : int
        Numeric worksheet id (``gid``), not the spreadsheet key.
    row_index : int
        Zero-indexed row to color.
    growth : Sequence[GrowthValue]
        Growth values in column order.
    start_column : int, optional
        Zero-indexed column of the first growth value (default 3, column D).

    Returns
    -------
    list[dict[str, Any]]
        One request per growth value, for ``spreadsheets.batchUpdate``.
    """
    requests = []
    for offset, value in enumerate(growth):
        col_index = start_column + offset
        requests.append({
            "repeatCell": {
                "range": {
                    "sheetId": sheet_id,
                    "startRowIndex": row_index,
                    "endRowIndex": row_index + 1,
                    "startColumnIndex": col_index,
                    "endColumnIndex": col_index + 1,
                },
                "cell": {"userEnteredFormat": {"backgroundColor": color_for_value(value)}},
                "fields": "userEnteredFormat.backgroundColor",
            },
        })
    return requests


def parse_appended_row_index(append_response: dict[str, Any]) -> int:
    """Return the zero-indexed row written by a ``values.append`` call.

    Parameters
    ----------
    append_response : dict[str, Any]
        Response body; ``updates.updatedRange`` looks like ``"Tab!A42:Q42"``.

    Returns
    -------
    int
        ``41`` for the example above.

    Raises
    ------
    ValueError
        If the response carries no updated range ending in a row number.
    """
    updated_range = append_response.get("updates", {}).get("updatedRange", "")
    match = _TRAILING_ROW_NUMBER.search(updated_range)
    if match is None:
        msg = f"Cannot determine appended row from range: {updated_range!r}"
        raise ValueError(msg)
    return int(match.group(1)) - 1


def append_row(
    client: Any,
    sheet_id: str,
    sheet_tab: str,
    row: Sequence[Any],
    growth: Sequence[GrowthValue],
) -> int:
    """Append ``row`` to a worksheet and color its growth cells.

    Parameters
    ----------
    client : gspread.Client
        Authorized client from :func:`screener_yoy.config.get_sheets_client`.
    sheet_id : str
        Spreadsheet key.
    sheet_tab : str
        Worksheet title.
    row : Sequence[Any]
        Output row from :func:`build_output_row`.
    growth : Sequence[GrowthValue]
        The growth values contained in ``row``, used for coloring.

    Returns
    -------
    int
        Zero-indexed row that was written.

    Raises
    ------
    gspread.exceptions.APIError
        If the append or the formatting request fails.
    ValueError
        If the appended row cannot be determined from the API response.
    """
    spreadsheet = client.open_by_key(sheet_id)
    worksheet = spreadsheet.worksheet(sheet_tab)

    response = worksheet.append_row(
        list(row),
        value_input_option=ValueInputOption.raw,
        insert_data_option=InsertDataOption.insert_rows,
        table_range=APPEND_RANGE,
    )
    row_index = parse_appended_row_index(response)
    logger.debug("Appended row index %d on sheet gid %s", row_index, worksheet.id)

    requests = build_color_requests(worksheet.id, row_index, growth)
    if requests:
        spreadsheet.batch_update({"requests": requests})

    logger.info(f'Row appended and colored to "{sheet_tab}"')
    return row_index
