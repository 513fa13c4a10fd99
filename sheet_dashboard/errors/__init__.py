"""
Error classification for fetching and parsing sheet data.

Data quality errors describe payloads that arrived but cannot be used;
system failures describe a data source that could not be reached at all.
The CSV parser itself never raises; these surface from the load pipeline.
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
    NoUsableRowsError,
)
from .system_failures import (
    SystemFailureError,
    SourceFetchError,
    ConfigurationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    "NoUsableRowsError",
    # System Failures
    "SystemFailureError",
    "SourceFetchError",
    "ConfigurationError",
]
