# File: calendar_summary/services/page_loader.py

from pathlib import Path
from typing import Optional, Union

import requests

from calendar_summary.core.config_manager import Config
from calendar_summary.services.document import CalendarDocument
from calendar_summary.utils.logger import setup_logger

logger = setup_logger(__name__)


def is_remote(source: Union[str, Path]) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def fetch_html(url: str, timeout: Optional[int] = None) -> str:
    """
    Download a rendered calendar page.

    Raises:
        requests.exceptions.RequestException: on network or HTTP errors
    """
    timeout = timeout or Config.REQUEST_TIMEOUT
    logger.info(f"Fetching calendar page from {url}")

    response = requests.get(url, timeout=timeout, headers={"Accept": "text/html"})
    response.raise_for_status()

    logger.debug(f"Fetched {len(response.text)} characters")
    return response.text


def load_document(
    source: Union[str, Path],
    url: Optional[str] = None,
    timeout: Optional[int] = None
) -> CalendarDocument:
    """
    Load a calendar page from a saved HTML file or an http(s) URL.

    Args:
        source: File path or URL
        url: Page location used for URL-based date hints (defaults to the
            source itself when it is a URL)
        timeout: Request timeout in seconds

    Returns:
        Parsed CalendarDocument

    Raises:
        FileNotFoundError: if a local file does not exist
        requests.exceptions.RequestException: if a download fails
    """
    if is_remote(source):
        html = fetch_html(str(source), timeout=timeout)
        return CalendarDocument.from_html(html, url=url or str(source))

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(2, "Calendar page not found", str(path))

    logger.info(f"Reading calendar page from {path}")
    html = path.read_text(encoding="utf-8", errors="replace")
    return CalendarDocument.from_html(html, url=url)
