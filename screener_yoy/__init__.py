"""screener-yoy: quarterly YOY growth and concall insights for Screener companies.

The package scrapes a company page on screener.in, computes year-over-year
sales and net profit growth for the last six quarters, summarizes the latest
earnings-call transcript with an OpenAI model, and appends one colored row to
a Google Sheets tab.

Architecture
------------
* ``scraper``: httpx fetches and lxml parsing of the company page and transcript links.
* ``extractor``: Transcript PDF text extraction (pdfplumber).
* ``transformer``: YOY growth computation.
* ``insights``: Prompt and response handling for the chat completion.
* ``writer``: Row assembly, append and cell coloring via gspread.

Configuration and credentials
-----------------------------
``SHEET_ID``, ``SHEET_TAB`` and ``OPENAI_API_KEY`` are required;
``GOOGLE_CREDENTIALS_FILE`` points to a service-account key (default
``credentials.json``). See :mod:`screener_yoy.config`.

Examples
--------
Append a row for Zaggle:

    >>> python -m screener_yoy.main "https://www.screener.in/company/ZAGGLE/#quarters"

Print the row without touching the sheet:

    >>> python -m screener_yoy.main "https://www.screener.in/company/ZAGGLE/" --dry-run
"""

from screener_yoy.transformer.growth import UNAVAILABLE, compute_yoy

__version__ = "0.1.0"
__all__ = ["UNAVAILABLE", "__version__", "compute_yoy"]
