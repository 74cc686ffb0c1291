"""Configuration management for screener-yoy.

This module centralizes file-system paths, environment variables, logging
setup, and the client factories used by the pipeline.

Environment variables
---------------------
``SHEET_ID`` and ``SHEET_TAB`` name the target Google Sheets document and tab,
``OPENAI_API_KEY`` authenticates the insight generator, and
``GOOGLE_CREDENTIALS_FILE`` points to a service-account JSON key (defaults to
``credentials.json`` in the working directory). ``OPENAI_MODEL``,
``REQUEST_TIMEOUT`` and ``LOGS_DIR`` are optional overrides. Values are read
from the nearest ``.env`` at or above the working directory, and logs go to
``./logs`` unless ``LOGS_DIR`` says otherwise.

Settings are gathered once per run by :func:`load_settings` and handed to each
component explicitly; clients are built from them with :func:`get_openai_client`
and :func:`get_sheets_client`.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv


def load_env_file() -> str:
    """Load the nearest ``.env`` found upward from the working directory.

    Variables already present in the environment are left untouched.

    Returns
    -------
    str
        Path of the loaded file, or ``""`` when none was found.
    """
    path = find_dotenv(usecwd=True)
    if path:
        load_dotenv(path)
    return path


load_env_file()

LOGS_DIR = Path(os.getenv("LOGS_DIR") or Path.cwd() / "logs")

# Source site
SOURCE_BASE_URL = "https://www.screener.in"
USER_AGENT = "Mozilla/5.0"

# Prompt size bounds
DESCRIPTION_MAX_CHARS = 2000
TRANSCRIPT_MAX_CHARS = 5000

# Defaults for optional environment values
DEFAULT_OPENAI_MODEL = "gpt-4.1-mini"
DEFAULT_CREDENTIALS_FILE = "credentials.json"
DEFAULT_REQUEST_TIMEOUT = 60.0

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


class ConfigurationError(ValueError):
    """Raised when a required setting is missing or invalid."""


@dataclass(frozen=True)
class Settings:
    """Per-run configuration resolved from the environment.

    Attributes
    ----------
    sheet_id : str
        Google Sheets document key (empty in dry runs).
    sheet_tab : str
        Worksheet title rows are appended to (empty in dry runs).
    openai_api_key : str
        Credential for the chat completion API.
    credentials_path : Path
        Service-account JSON key used for the Sheets API.
    openai_model : str
        Chat model used by the insight generator.
    request_timeout : float
        HTTP timeout in seconds for page and document fetches.
    """

    sheet_id: str
    sheet_tab: str
    openai_api_key: str
    credentials_path: Path
    openai_model: str = DEFAULT_OPENAI_MODEL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT


def _require_env(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        msg = f"{name} is not set"
        raise ConfigurationError(msg)
    return value


def _parse_timeout(raw: str | None) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_REQUEST_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError as err:
        msg = f"REQUEST_TIMEOUT must be a number of seconds, got {raw!r}"
        raise ConfigurationError(msg) from err
    if timeout <= 0:
        msg = f"REQUEST_TIMEOUT must be positive, got {timeout}"
        raise ConfigurationError(msg)
    return timeout


def load_settings(require_sheet: bool = True) -> Settings:
    """Resolve run settings from environment variables.

    Parameters
    ----------
    require_sheet : bool, optional
        When ``True`` (the default) the spreadsheet id, tab and credentials
        file must be configured. Dry runs pass ``False``.

    Returns
    -------
    Settings
        Immutable settings for one pipeline run.

    Raises
    ------
    ConfigurationError
        If a required variable is missing, the credentials file does not
        exist, or ``REQUEST_TIMEOUT`` is not a positive number.
    """
    openai_api_key = _require_env("OPENAI_API_KEY")
    credentials_path = Path(os.getenv("GOOGLE_CREDENTIALS_FILE") or Path.cwd() / DEFAULT_CREDENTIALS_FILE)

    if require_sheet:
        sheet_id = _require_env("SHEET_ID")
        sheet_tab = _require_env("SHEET_TAB")
        if not credentials_path.exists():
            msg = f"Google credentials file not found: {credentials_path}"
            raise ConfigurationError(msg)
    else:
        sheet_id = os.getenv("SHEET_ID", "").strip()
        sheet_tab = os.getenv("SHEET_TAB", "").strip()

    return Settings(
        sheet_id=sheet_id,
        sheet_tab=sheet_tab,
        openai_api_key=openai_api_key,
        credentials_path=credentials_path,
        openai_model=os.getenv("OPENAI_MODEL", "").strip() or DEFAULT_OPENAI_MODEL,
        request_timeout=_parse_timeout(os.getenv("REQUEST_TIMEOUT")),
    )


CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def log_file_path() -> Path:
    """Return today's log file under ``LOGS_DIR``, creating the directory on first use."""
    LOGS_DIR.mkdir(parents=True, exist_ok=True)
    return LOGS_DIR / f"{datetime.now(UTC):%Y-%m-%d}_screener_yoy.log"


def setup_logging(name: str = "screener_yoy") -> logging.Logger:
    """Return the named logger, attaching console and file handlers on first call.

    The console shows INFO and above; the daily file under ``LOGS_DIR``
    records DEBUG. Calling again with the same name reuses the handlers.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    logfile = logging.FileHandler(log_file_path(), encoding="utf-8")
    logfile.setLevel(logging.DEBUG)
    logfile.setFormatter(logging.Formatter(FILE_FORMAT))

    logger.addHandler(console)
    logger.addHandler(logfile)
    return logger


def set_console_level(level: int) -> None:
    """Set the console threshold on every logger created by :func:`setup_logging`.

    File handlers keep logging at DEBUG.
    """
    for logger in logging.Logger.manager.loggerDict.values():
        if not isinstance(logger, logging.Logger) or not logger.name.startswith("screener_yoy"):
            continue
        for handler in logger.handlers:
            if type(handler) is logging.StreamHandler:
                handler.setLevel(level)


def get_openai_client(settings: Settings) -> Any:
    """Instantiate the synchronous OpenAI client.

    Parameters
    ----------
    settings : Settings
        Run settings carrying ``openai_api_key``.

    Returns
    -------
    openai.OpenAI
        Client used for chat completions.
    """
    from openai import OpenAI

    return OpenAI(api_key=settings.openai_api_key)


def get_sheets_client(settings: Settings) -> Any:
    """Authorize a gspread client with the service-account key.

    Parameters
    ----------
    settings : Settings
        Run settings carrying ``credentials_path``.

    Returns
    -------
    gspread.Client
        Client scoped to the spreadsheets API.

    Raises
    ------
    ConfigurationError
        If the credentials file is missing.
    """
    if not settings.credentials_path.exists():
        msg = f"Google credentials file not found: {settings.credentials_path}"
        raise ConfigurationError(msg)

    import gspread
    from google.oauth2.service_account import Credentials

    creds = Credentials.from_service_account_file(str(settings.credentials_path), scopes=SHEETS_SCOPES)
    return gspread.authorize(creds)
