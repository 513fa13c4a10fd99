"""Download of the published sheet as CSV text."""

import socket
from http.client import HTTPException
from urllib.error import HTTPError, URLError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

from ..config.defaults import SourceParams
from ..errors import SourceFetchError
from ..logging.config import get_logger

logger = get_logger(__name__)

ERROR_BODY_PREVIEW = 200
LOG_BODY_PREVIEW = 500


def fetch_csv_text(source: SourceParams) -> str:
    """
    Fetch the sheet CSV export.

    Args:
        source: URL, timeout and request headers

    Returns:
        Response body decoded as UTF-8

    Raises:
        SourceFetchError: On invalid URL, non-2xx status or network failure
    """
    parsed = urlparse(source.url)
    if (not parsed.scheme or not parsed.netloc
            or any(char.isspace() or not char.isprintable() for char in source.url)):
        raise SourceFetchError(f"Invalid URL: {source.url}", url=source.url)

    headers = {
        'Accept': source.accept,
        'User-Agent': source.user_agent,
    }
    req = Request(source.url, headers=headers, method='GET')

    logger.info("Fetching sheet CSV", url=source.url)

    try:
        with urlopen(req, timeout=source.timeout_seconds) as response:
            status = response.getcode()
            body = response.read().decode('utf-8', errors='replace')

    except HTTPError as e:
        error_body = _read_error_body(e)
        raise SourceFetchError(
            f"HTTP error! Status: {e.code}. This might be due to a temporary service issue "
            f"or an incorrect URL/publishing setting. Response: {error_body[:ERROR_BODY_PREVIEW]}...",
            url=source.url,
            status_code=e.code
        ) from e

    except (OSError, URLError, socket.timeout) as e:
        raise SourceFetchError(f"Network error: {e}", url=source.url) from e

    except (HTTPException, ValueError) as e:
        # http.client errors such as InvalidURL or IncompleteRead are not OSErrors
        raise SourceFetchError(f"Invalid response or request: {e!r}", url=source.url) from e

    if not 200 <= status < 300:
        raise SourceFetchError(
            f"HTTP error! Status: {status}. Response: {body[:ERROR_BODY_PREVIEW]}...",
            url=source.url,
            status_code=status
        )

    logger.debug(
        "Fetched sheet CSV",
        url=source.url,
        status=status,
        size=len(body),
        preview=body[:LOG_BODY_PREVIEW]
    )
    return body


def _read_error_body(error: HTTPError) -> str:
    """Best-effort read of an HTTP error response body."""
    try:
        return error.read().decode('utf-8', errors='replace')
    except (OSError, AttributeError, ValueError):
        return ""
