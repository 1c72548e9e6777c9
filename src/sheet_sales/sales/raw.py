"""Bronze layer: download the published sales sheet as text.

This module handles the single network call of the pipeline: an HTTP GET
against the spreadsheet's published-CSV URL. The body is returned verbatim;
parsing happens in sheet_sales.sales.core.
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from sheet_sales.config import DEFAULT_RETRIES, DEFAULT_TIMEOUT, SheetConfig
from sheet_sales.exceptions import FetchError

logger = logging.getLogger(__name__)


def make_session(
    timeout: float = DEFAULT_TIMEOUT, retries: int = DEFAULT_RETRIES
) -> requests.Session:
    """Create a requests Session with retry logic and default timeout.

    Configures the session with:
    - Retry adapter for HTTP/HTTPS with exponential backoff
    - Retries on 429, 500, 502, 503, 504 status codes
    - Default timeout for all requests

    Args:
        timeout: Default timeout in seconds for all requests.
        retries: Number of retry attempts.

    Returns:
        Configured requests.Session object.

    """
    s = requests.Session()
    s.headers.update({"User-Agent": "sheet-sales/0.1"})
    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        status=retries,
        backoff_factor=0.8,  # 0.8, 1.6, 3.2, ...
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=frozenset({"GET", "HEAD"}),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    s.mount("http://", adapter)
    s.mount("https://", adapter)
    orig_request = s.request

    def timed_request(method: str, url: str, **kwargs: Any) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return orig_request(method, url, **kwargs)

    s.request = timed_request  # type: ignore[method-assign,assignment]
    return s


def fetch_csv_text(config: SheetConfig, session: requests.Session | None = None) -> str:
    """Download the published sheet and return its text body.

    Args:
        config: Sheet configuration (URL, timeout, retries).
        session: Optional pre-built session; one is created from ``config``
            when omitted.

    Returns:
        The response body as text.

    Raises:
        FetchError: On a non-2xx status (``status_code`` set) or when the
            request fails at the network level.

    """
    s = session or make_session(timeout=config.timeout, retries=config.retries)
    logger.info("Fetching sales sheet from %s", config.csv_url)

    try:
        resp = s.get(config.csv_url)
    except requests.RequestException as e:
        logger.error("Network error fetching sales sheet: %s", e)
        raise FetchError(f"Connection error: {e}") from e

    if not 200 <= resp.status_code < 300:
        logger.error("Sales sheet request failed with HTTP %s", resp.status_code)
        raise FetchError(f"Connection error: {resp.status_code}", status_code=resp.status_code)

    # Published sheets are UTF-8 but rarely declare a charset
    if resp.encoding is None or resp.encoding.lower() == "iso-8859-1":
        resp.encoding = "utf-8"

    text = resp.text
    logger.debug("Fetched %d characters", len(text))
    return text
