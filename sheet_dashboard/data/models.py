"""
Data models for parsed sheet content.

Records are plain dictionaries keyed by normalized header names, since the
sheet may carry columns the dashboard does not know about. The result types
wrapping them are immutable and carry enough metadata for callers to tell
"no header" apart from "header but no usable rows".
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

# One parsed data row: header name -> str, or float for numeric columns
Record = dict[str, Union[str, float]]


class ParseStatus(Enum):
    """Outcome tag of a CSV table parse."""
    NO_HEADER_FOUND = "no_header_found"
    PARSED = "parsed"


@dataclass(frozen=True)
class ParseResult:
    """Result of parsing one CSV payload."""

    status: ParseStatus
    headers: tuple[str, ...] = ()
    records: tuple[Record, ...] = ()

    # Index of the header line in the raw text, -1 if none
    header_line_index: int = -1

    # Rows dropped after the header
    skipped_malformed: int = 0
    skipped_missing_symbol: int = 0

    @classmethod
    def no_header(cls) -> "ParseResult":
        """Create result for text without a recognizable header row."""
        return cls(status=ParseStatus.NO_HEADER_FOUND)

    @classmethod
    def parsed(cls, headers: list[str], records: list[Record], header_line_index: int,
               skipped_malformed: int = 0, skipped_missing_symbol: int = 0) -> "ParseResult":
        """Create result for text whose header row was found."""
        return cls(
            status=ParseStatus.PARSED,
            headers=tuple(headers),
            records=tuple(records),
            header_line_index=header_line_index,
            skipped_malformed=skipped_malformed,
            skipped_missing_symbol=skipped_missing_symbol,
        )

    @property
    def header_found(self) -> bool:
        return self.status is ParseStatus.PARSED

    @property
    def skipped_rows(self) -> int:
        return self.skipped_malformed + self.skipped_missing_symbol


@dataclass(frozen=True)
class LoadResult:
    """Result of the fetch-and-parse pipeline, consumed by the presentation layer."""

    success: bool
    records: list[Record] = field(default_factory=list)
    error_msg: Optional[str] = None
    parse_result: Optional[ParseResult] = None

    @classmethod
    def loaded(cls, records: list[Record], parse_result: Optional[ParseResult] = None):
        """Create successful result with records ready for display."""
        return cls(success=True, records=records, parse_result=parse_result)

    @classmethod
    def failure(cls, error_msg: str, parse_result: Optional[ParseResult] = None):
        """Create error result."""
        return cls(success=False, error_msg=error_msg, parse_result=parse_result)
