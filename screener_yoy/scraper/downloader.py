"""HTTP fetch utilities for Screener pages and linked documents.

All requests go through a single :class:`httpx.Client` created by
:func:`create_http_client` and owned by the caller, so tests can hand in a
client backed by :class:`httpx.MockTransport`.

Functions
---------
create_http_client : Client with browser User-Agent and redirect following
fetch_page : GET a page and return its decoded HTML
fetch_bytes : GET a binary document (PDF) and return its raw bytes
"""

from __future__ import annotations

import httpx

from screener_yoy.config import DEFAULT_REQUEST_TIMEOUT, USER_AGENT, setup_logging

# Module-level logger for download operations
logger = setup_logging(__name__)


def create_http_client(timeout: float = DEFAULT_REQUEST_TIMEOUT) -> httpx.Client:
    """Create the blocking HTTP client used for one pipeline run.

    Parameters
    ----------
    timeout : float, optional
        HTTP request timeout in seconds. Default 60.0.

    Returns
    -------
    httpx.Client
        Client that follows redirects and sends a browser ``User-Agent``
        (Screener rejects the default httpx agent). Use it as a context manager.
    """
    return httpx.Client(
        timeout=timeout,
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
    )


def fetch_page(client: httpx.Client, url: str) -> str:
    """Fetch an HTML page.

    Parameters
    ----------
    client : httpx.Client
        Client from :func:`create_http_client`.
    url : str
        Page URL; fragments such as ``#quarters`` are ignored by the server.

    Returns
    -------
    str
        Decoded response body.

    Raises
    ------
    httpx.HTTPError
        If the request fails (4xx, 5xx, connection error).
    """
    logger.debug("Fetching page: %s", url)
    resp = client.get(url)
    resp.raise_for_status()  # Raise on 4xx/5xx
    logger.debug("Fetched %s (%d bytes)", url, len(resp.content))
    return resp.text


def fetch_bytes(client: httpx.Client, url: str) -> bytes:
    """Download a binary document into memory.

    Parameters
    ----------
    client : httpx.Client
        Client from :func:`create_http_client`.
    url : str
        Absolute document URL (supports redirects).

    Returns
    -------
    bytes
        Raw response content.

    Raises
    ------
    httpx.HTTPError
        If the request fails (4xx, 5xx, connection error).
    """
    logger.info("Downloading: %s", url)
    resp = client.get(url)
    resp.raise_for_status()  # Raise on 4xx/5xx
    logger.info(f"Downloaded: {url} ({len(resp.content)} bytes)")
    return resp.content
