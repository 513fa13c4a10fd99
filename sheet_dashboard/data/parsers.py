"""
CSV table parser for published Google Sheet exports.

This module turns raw CSV text into stock records. It tolerates preamble
lines above the real header, quoted fields containing commas and numbers
written with thousands separators. Parsing never raises: rows that cannot be
used are dropped and reported through the parser logger.
"""

import re
from enum import Enum
from typing import Optional

from ..config.defaults import ParserParams
from ..logging.config import get_parser_logger, log_row_skipped
from .models import ParseResult, Record

logger = get_parser_logger(__name__)

QUOTE = '"'
SEPARATOR = ','

# Longest numeric prefix, so "12.5%" reads as 12.5 and "abc" does not match
_NUMERIC_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class QuoteState(Enum):
    """Scanner state while splitting a data line into fields."""
    OUTSIDE = "outside"
    INSIDE = "inside"


def split_fields(line: str) -> list[str]:
    """
    Split one data line into raw field values.

    A double quote flips the scanner between OUTSIDE and INSIDE and is never
    kept as content, so doubled quotes are not escapes. A comma ends the
    current field only while OUTSIDE. Fields are returned untrimmed.

    Args:
        line: Single line of CSV text without its line terminator

    Returns:
        Field values in column order; always at least one element
    """
    fields = []
    current: list[str] = []
    state = QuoteState.OUTSIDE

    for char in line:
        if char == QUOTE:
            state = QuoteState.INSIDE if state is QuoteState.OUTSIDE else QuoteState.OUTSIDE
        elif char == SEPARATOR and state is QuoteState.OUTSIDE:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)

    fields.append("".join(current))
    return fields


def strip_quotes(value: str) -> str:
    """Remove at most one leading and one trailing double quote."""
    if value.startswith(QUOTE):
        value = value[1:]
    if value.endswith(QUOTE):
        value = value[:-1]
    return value


def normalize_header(token: str) -> str:
    """Normalize a header token into a record key ("Current price" -> "Current_price")."""
    return strip_quotes(token.strip()).replace(" ", "_")


def coerce_number(value: str) -> float:
    """
    Convert numeric cell text to float.

    Thousands separators are removed and the longest numeric prefix is read.
    Empty or non-numeric text yields 0.0.
    """
    match = _NUMERIC_PREFIX.match(value.replace(SEPARATOR, "").lstrip())
    if match is None:
        return 0.0
    # Collapse -0.0 to 0.0
    return float(match.group(0)) or 0.0


class CsvTableParser:
    """Parses CSV text with a header row identified by a marker substring."""

    def __init__(self, params: Optional[ParserParams] = None):
        """
        Initialize parser with configuration.

        Args:
            params: Parser parameters; defaults recognize the stock sheet layout
        """
        self.params = params or ParserParams()
        self.logger = logger
        self.header_marker = self.params.header_marker.lower()
        self.numeric_fields = frozenset(self.params.numeric_fields)

    def parse(self, text: str) -> list[Record]:
        """Parse text into records; empty when no header or no valid rows."""
        return list(self.parse_table(text).records)

    def parse_table(self, text: str) -> ParseResult:
        """
        Parse text into a tagged result.

        Args:
            text: Raw CSV payload

        Returns:
            ParseResult with status NO_HEADER_FOUND, or PARSED with the
            normalized headers and every retained record in input order
        """
        if not isinstance(text, str):
            self.logger.warning("csv_input_not_text", input_type=type(text).__name__)
            return ParseResult.no_header()

        lines = text.split("\n")
        header_index = self.find_header_line(lines)

        if header_index < 0:
            self.logger.warning(
                "csv_header_not_found",
                header_marker=self.header_marker,
                line_count=len(lines)
            )
            return ParseResult.no_header()

        headers = self.parse_header(lines[header_index])
        self.logger.debug("csv_header_detected", line_number=header_index + 1, headers=headers)

        records = []
        skipped_malformed = 0
        skipped_missing_symbol = 0

        for index in range(header_index + 1, len(lines)):
            line = lines[index].strip()
            if not line:
                continue

            values = [strip_quotes(value.strip()).strip() for value in split_fields(line)]

            if len(values) != len(headers):
                skipped_malformed += 1
                log_row_skipped(
                    self.logger,
                    line_number=index + 1,
                    reason="field_count_mismatch",
                    expected_fields=len(headers),
                    actual_fields=len(values)
                )
                continue

            record = self.build_record(headers, values)

            symbol = record.get(self.params.required_field)
            if not isinstance(symbol, str) or not symbol:
                skipped_missing_symbol += 1
                self.logger.debug(
                    "csv_row_without_symbol",
                    line_number=index + 1,
                    required_field=self.params.required_field
                )
                continue

            records.append(record)

        self.logger.info(
            "csv_parse_complete",
            records=len(records),
            skipped_malformed=skipped_malformed,
            skipped_missing_symbol=skipped_missing_symbol
        )

        return ParseResult.parsed(
            headers=headers,
            records=records,
            header_line_index=header_index,
            skipped_malformed=skipped_malformed,
            skipped_missing_symbol=skipped_missing_symbol,
        )

    def find_header_line(self, lines: list[str]) -> int:
        """Return the index of the first line whose first non-empty token holds the marker, or -1."""
        for index, raw_line in enumerate(lines):
            line = raw_line.strip()
            if not line:
                continue

            tokens = [token for token in line.split(SEPARATOR) if token.strip()]
            if tokens and self.header_marker in tokens[0].lower():
                return index

        return -1

    def parse_header(self, line: str) -> list[str]:
        """Split and normalize a header line."""
        return [normalize_header(token) for token in line.strip().split(SEPARATOR)]

    def build_record(self, headers: list[str], values: list[str]) -> Record:
        """Zip headers to values, coercing numeric columns. Later duplicate headers win."""
        record: Record = {}
        for name, value in zip(headers, values):
            if name in self.numeric_fields:
                record[name] = coerce_number(value)
            else:
                record[name] = value
        return record


def parse_csv(text: str, params: Optional[ParserParams] = None) -> list[Record]:
    """Parse CSV text into stock records. Never raises."""
    return CsvTableParser(params).parse(text)


def parse_csv_table(text: str, params: Optional[ParserParams] = None) -> ParseResult:
    """Parse CSV text into a tagged ParseResult. Never raises."""
    return CsvTableParser(params).parse_table(text)
