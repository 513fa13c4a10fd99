"""
Payload checks applied to downloaded sheet text before parsing.

A sheet that is not published as CSV comes back as an HTML page, which the
tolerant parser would otherwise quietly turn into an empty result.
"""

from ..errors import MalformedDataError, MissingDataError

HTML_MARKERS = ("<html", "<!DOCTYPE")


def looks_like_html(text: str) -> bool:
    """Check whether the payload is an HTML document rather than CSV."""
    return any(marker in text for marker in HTML_MARKERS)


def validate_csv_payload(text: str) -> None:
    """
    Validate that downloaded text can plausibly be parsed as CSV.

    Args:
        text: Raw response body

    Raises:
        MalformedDataError: If the payload is an HTML page
        MissingDataError: If the payload is empty or whitespace only
    """
    if looks_like_html(text):
        raise MalformedDataError(
            "Received HTML content instead of CSV data. "
            "Please ensure your Google Sheet is published as CSV.",
            raw_data=text[:200],
            expected_format="text/csv"
        )

    if not text.strip():
        raise MissingDataError(
            "Received empty CSV data. "
            "Please verify your Google Sheet has content and is published correctly.",
            data_type="csv"
        )
