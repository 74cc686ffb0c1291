#!/usr/bin/env python3
"""Company YOY orchestrator - scrape, compute growth, summarize, and append.

This module runs the complete workflow for one Screener company URL:
1. Scrape quarterly sales / net profit and the company profile
2. Compute YOY growth for the last 6 quarters
3. Fetch the latest concall transcript PDF and extract its text
4. Ask the language model for sector, sub-sector, summary and guidance
5. Append the row to Google Sheets and color the growth cells

Usage (from project root):
    python -m screener_yoy.main "https://www.screener.in/company/ZAGGLE/#quarters"
    python -m screener_yoy.main "https://www.screener.in/company/TCS/consolidated/" --dry-run
    screener-yoy "https://www.screener.in/company/ZAGGLE/" --quiet

CLI Flags:
    url                 Screener company page URL (required)
    --dry-run           Run every stage but skip the sheet write
    --quiet             Only show warnings and errors on the console
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Any

from screener_yoy.config import (
    Settings,
    get_openai_client,
    get_sheets_client,
    load_settings,
    set_console_level,
    setup_logging,
)
from screener_yoy.insights import Insight, generate_insight
from screener_yoy.scraper import (
    CompanySnapshot,
    TranscriptResult,
    create_http_client,
    fetch_latest_transcript,
    fetch_snapshot,
)
from screener_yoy.transformer import GrowthValue, compute_yoy
from screener_yoy.writer import append_row, build_output_row

logger = setup_logging(__name__)


@dataclass
class PipelineResult:
    """Everything produced by one run, for callers and tests."""

    snapshot: CompanySnapshot
    growth: list[GrowthValue]
    transcript: TranscriptResult
    insight: Insight
    row: list[Any]
    row_index: int | None = None


# =============================================================================
# Main Processing
# =============================================================================


def run_pipeline(
    url: str,
    settings: Settings,
    http_client: Any = None,
    openai_client: Any = None,
    sheets_client: Any = None,
    dry_run: bool = False,
) -> PipelineResult:
    """Run the end-to-end workflow for one company.

    Parameters
    ----------
    url : str
        Screener company page URL.
    settings : Settings
        Resolved run settings.
    http_client : httpx.Client, optional
        Client for page and PDF fetches; created (and closed) here when ``None``.
    openai_client : openai.OpenAI, optional
        Chat completion client; built from ``settings`` when ``None``.
    sheets_client : gspread.Client, optional
        Sheets client; built from ``settings`` when ``None`` and not a dry run.
    dry_run : bool, optional
        Skip the sheet write when ``True``.

    Returns
    -------
    PipelineResult
        Scraped data, growth, insight, the row, and the written row index
        (``None`` on dry runs).

    Raises
    ------
    DataNotFoundError
        If the quarterly table has no sales or net profit row. Nothing is written.
    """
    owns_http_client = http_client is None
    if owns_http_client:
        http_client = create_http_client(settings.request_timeout)

    try:
        # Step 1-2: Quarterly data and growth
        snapshot = fetch_snapshot(url, http_client)
        growth = compute_yoy(snapshot.quarters)

        # Step 3: Latest transcript
        logger.info("Fetching latest transcript...")
        transcript = fetch_latest_transcript(url, http_client)
        if not transcript.available:
            logger.info("No transcript text for %s", snapshot.symbol)
        elif transcript.skipped_pages:
            logger.warning(
                "Transcript %s: skipped unreadable pages %s",
                transcript.source_url,
                transcript.skipped_pages,
            )
    finally:
        if owns_http_client:
            http_client.close()

    # Step 4: AI insight
    logger.info("Getting AI-powered company insights...")
    if openai_client is None:
        openai_client = get_openai_client(settings)
    insight = generate_insight(
        openai_client,
        snapshot.symbol,
        snapshot.description,
        transcript.text,
        model=settings.openai_model,
    )

    row = build_output_row(snapshot, insight, growth)
    logger.info("Row: %s", " | ".join(str(cell) for cell in row))

    result = PipelineResult(snapshot=snapshot, growth=growth, transcript=transcript, insight=insight, row=row)

    if dry_run:
        logger.info("Dry run: skipping sheet write")
        return result

    # Step 5: Append and color
    if sheets_client is None:
        sheets_client = get_sheets_client(settings)
    result.row_index = append_row(sheets_client, settings.sheet_id, settings.sheet_tab, row, growth)
    return result


# =============================================================================
# CLI
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    """Return the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="screener-yoy",
        description="Append a company's YOY growth and concall insights to Google Sheets.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  screener-yoy "https://www.screener.in/company/ZAGGLE/#quarters"
  screener-yoy "https://www.screener.in/company/TCS/consolidated/" --dry-run
        """,
    )
    parser.add_argument("url", nargs="?", help="Screener company page URL")
    parser.add_argument("--dry-run", action="store_true", help="Don't write to Google Sheets")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors to the console")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and run the pipeline.

    Returns
    -------
    int
        ``0`` on success; ``1`` when the URL argument is missing. Other
        failures propagate as exceptions.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.url:
        parser.print_usage(sys.stderr)
        print("error: a Screener company URL is required", file=sys.stderr)
        return 1

    if args.quiet:
        set_console_level(logging.WARNING)

    settings = load_settings(require_sheet=not args.dry_run)
    run_pipeline(args.url, settings, dry_run=args.dry_run)
    return 0


if __name__ == "__main__":
    sys.exit(main())
