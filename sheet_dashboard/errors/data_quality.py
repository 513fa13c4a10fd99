"""
Data quality error classifications for sheet payloads.

These exceptions categorize payloads that were received but cannot be
turned into stock records.
"""

from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Base class for data quality issues that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MissingDataError(DataQualityError):
    """Required data is completely missing."""

    def __init__(self, message: str, data_type: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.data_type = data_type


class MalformedDataError(DataQualityError):
    """Data exists but is in incorrect format."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class NoUsableRowsError(DataQualityError):
    """Parsing finished without a single Symbol-bearing record."""

    def __init__(self, message: str, headers: Optional[list] = None,
                 header_found: bool = False, **kwargs):
        super().__init__(message, **kwargs)
        self.headers = headers or []
        self.header_found = header_found
