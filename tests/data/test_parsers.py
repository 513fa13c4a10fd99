"""
Tests for the CSV table parser.

Covers header detection, the quote-toggling field scanner, numeric coercion,
row validation and the tagged parse result.
"""

import pytest

from sheet_dashboard.config.defaults import ParserParams
from sheet_dashboard.data.models import ParseStatus
from sheet_dashboard.data.parsers import (
    CsvTableParser,
    QuoteState,
    coerce_number,
    normalize_header,
    parse_csv,
    parse_csv_table,
    split_fields,
    strip_quotes,
)


class TestSplitFields:
    """Test the two-state field scanner."""

    def test_plain_fields(self):
        """Test unquoted fields split on every comma."""
        assert split_fields("AAA,Foo,100") == ["AAA", "Foo", "100"]

    def test_quoted_comma_is_kept(self):
        """Test comma inside quotes does not separate fields."""
        assert split_fields('"AAA","Foo, Inc.",100') == ["AAA", "Foo, Inc.", "100"]

    def test_quotes_are_never_content(self):
        """Test doubled quotes toggle twice instead of producing a literal quote."""
        assert split_fields('"Say ""hi""",1') == ["Say hi", "1"]

    def test_unterminated_quote_swallows_rest_of_line(self):
        """Test commas after an unmatched quote stay in the last field."""
        assert split_fields('AAA,"Foo, Inc.,100') == ["AAA", "Foo, Inc.,100"]

    def test_empty_and_trailing_fields(self):
        """Test empty fields are preserved, including a trailing one."""
        assert split_fields(",Foo,") == ["", "Foo", ""]
        assert split_fields("") == [""]

    def test_fields_are_not_trimmed(self):
        """Test scanner leaves whitespace for the caller to trim."""
        assert split_fields(" AAA , Foo ") == [" AAA ", " Foo "]

    def test_quote_state_values(self):
        """Test scanner exposes exactly two states."""
        assert {state.name for state in QuoteState} == {"OUTSIDE", "INSIDE"}


class TestHeaderNormalization:
    """Test header token normalization."""

    def test_spaces_become_underscores(self):
        """Test 'Current price' normalizes to Current_price."""
        assert normalize_header("Current price") == "Current_price"

    def test_quotes_and_whitespace_stripped(self):
        """Test surrounding whitespace and one pair of quotes are removed."""
        assert normalize_header('  "Stock name"  ') == "Stock_name"

    def test_strip_quotes_removes_at_most_one_each_side(self):
        """Test only a single leading and trailing quote are stripped."""
        assert strip_quotes('""x""') == '"x"'
        assert strip_quotes('"') == ""
        assert strip_quotes("x") == "x"


class TestNumericCoercion:
    """Test numeric field coercion."""

    @pytest.mark.parametrize("text,expected", [
        ("1,234.56", 1234.56),
        ("100", 100.0),
        ("-15.5", -15.5),
        ("12.5%", 12.5),
        (".5", 0.5),
        ("1e3", 1000.0),
    ])
    def test_numeric_text(self, text, expected):
        """Test numeric text, including thousands separators, parses to float."""
        assert coerce_number(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["abc", "", "-", "N/A", "#DIV/0!"])
    def test_non_numeric_text_is_zero(self, text):
        """Test non-numeric text degrades to 0."""
        assert coerce_number(text) == 0.0

    def test_negative_zero_collapses(self):
        """Test -0 is reported as plain 0."""
        result = coerce_number("-0")
        assert result == 0.0
        assert str(result) == "0.0"


class TestHeaderDetection:
    """Test header row detection."""

    def test_no_header_returns_empty(self, parser):
        """Test text without a symbol column yields nothing."""
        text = "Name,Price\nFoo,100\n"

        assert parser.parse(text) == []
        result = parser.parse_table(text)
        assert result.status is ParseStatus.NO_HEADER_FOUND
        assert result.header_found is False
        assert result.header_line_index == -1

    def test_no_header_logs_warning(self, parser, recording_logger):
        """Test missing header is reported on the parser logger."""
        parser.parse("Name,Price\nFoo,100\n")

        events = recording_logger.named("csv_header_not_found")
        assert len(events) == 1
        assert events[0]["level"] == "warning"

    def test_empty_text(self, parser):
        """Test empty and whitespace-only input yields nothing."""
        assert parser.parse("") == []
        assert parser.parse("   \n\n  \n") == []

    def test_non_text_input_does_not_raise(self, parser):
        """Test parser returns an empty result for non-string input."""
        assert parser.parse(None) == []
        assert parser.parse_table(b"Symbol\nAAA").status is ParseStatus.NO_HEADER_FOUND

    def test_preamble_lines_are_skipped(self, parser):
        """Test header is found below title and blank lines."""
        text = "Stock sheet\n\n,,\nSymbol,Name,Price\nAAA,Foo,100\n"

        result = parser.parse_table(text)

        assert result.status is ParseStatus.PARSED
        assert result.header_line_index == 3
        assert result.headers == ("Symbol", "Name", "Price")
        assert len(result.records) == 1

    def test_case_insensitive_substring_match(self, parser):
        """Test a column named 'Ticker Symbol Code' also marks the header."""
        text = "Ticker Symbol Code,Price\nAAA,100\n"

        result = parser.parse_table(text)

        assert result.status is ParseStatus.PARSED
        assert result.headers == ("Ticker_Symbol_Code", "Price")
        # No plain Symbol column, so every row is dropped
        assert result.records == ()
        assert result.skipped_missing_symbol == 1

    def test_leading_empty_tokens_ignored(self, parser):
        """Test the first non-empty token decides, even after leading commas."""
        text = ",,SYMBOL,Price\n,,AAA,1\n"

        result = parser.parse_table(text)

        assert result.header_found
        assert result.headers == ("", "", "SYMBOL", "Price")

    def test_symbol_not_in_first_token(self, parser):
        """Test a symbol column that is not first does not mark the header."""
        assert parser.parse("Name,Symbol\nFoo,AAA\n") == []

    def test_quoted_header(self, parser):
        """Test quoted header names are unwrapped and normalized."""
        text = '"Symbol","Current price"\nAAA,"1,234.56"\n'

        records = parser.parse(text)

        assert records == [{"Symbol": "AAA", "Current_price": 1234.56}]


class TestRowParsing:
    """Test data row handling."""

    def test_quoted_comma_preserved(self, parser):
        """Test quoted comma in a text field stays in the value."""
        text = 'Symbol,Name,Price\n"AAA","Foo, Inc.",100\n'

        records = parser.parse(text)

        assert len(records) == 1
        assert records[0]["Name"] == "Foo, Inc."
        assert records[0]["Price"] == "100"

    def test_numeric_fields_are_floats(self, parser):
        """Test the five numeric columns are coerced and others stay strings."""
        text = (
            "Symbol,Current price,Price change,Percent_change,Liquidity,Volume,Exchange\n"
            'AAA,"1,234.56",-2.5,abc,"10,000",,NSE\n'
        )

        record = parser.parse(text)[0]

        assert record["Current_price"] == pytest.approx(1234.56)
        assert record["Price_change"] == pytest.approx(-2.5)
        assert record["Percent_change"] == 0
        assert record["Liquidity"] == pytest.approx(10000.0)
        assert record["Volume"] == 0
        assert record["Exchange"] == "NSE"
        assert all(isinstance(record[name], float)
                   for name in ("Current_price", "Price_change", "Percent_change", "Liquidity", "Volume"))

    def test_empty_symbol_excluded(self, parser):
        """Test a row with an empty Symbol is dropped."""
        text = "Symbol,Name,Price\n,Foo,100\nBBB,Bar,200\n"

        result = parser.parse_table(text)

        assert [record["Symbol"] for record in result.records] == ["BBB"]
        assert result.skipped_missing_symbol == 1

    def test_whitespace_symbol_excluded(self, parser):
        """Test a Symbol made of spaces or quotes only is dropped."""
        text = 'Symbol,Name\n   ,Foo\n"",Bar\n'

        assert parser.parse(text) == []

    def test_field_count_mismatch_excluded(self, parser, recording_logger):
        """Test rows with too few or too many fields are dropped and reported."""
        text = "Symbol,Name,Price\nAAA,Foo\nBBB,Bar,1,extra\nCCC,Baz,3\n"

        result = parser.parse_table(text)

        assert [record["Symbol"] for record in result.records] == ["CCC"]
        assert result.skipped_malformed == 2

        skipped = recording_logger.named("csv_row_skipped")
        assert len(skipped) == 2
        assert skipped[0]["level"] == "warning"
        assert skipped[0]["line_number"] == 2
        assert skipped[0]["expected_fields"] == 3
        assert skipped[0]["actual_fields"] == 2
        assert skipped[0]["reason"] == "field_count_mismatch"

    def test_numeric_failure_not_reported(self, parser, recording_logger):
        """Test numeric coercion failures produce no diagnostics."""
        parser.parse("Symbol,Volume\nAAA,abc\n")

        assert recording_logger.named("csv_row_skipped") == []

    def test_blank_lines_between_rows(self, parser):
        """Test blank lines inside the data block are ignored."""
        text = "Symbol,Price\nAAA,1\n\n   \nBBB,2\n"

        assert [record["Symbol"] for record in parser.parse(text)] == ["AAA", "BBB"]

    def test_values_are_trimmed(self, parser):
        """Test surrounding whitespace is removed from values."""
        text = 'Symbol,Name\n  AAA  ,  " Foo "  \n'

        assert parser.parse(text) == [{"Symbol": "AAA", "Name": "Foo"}]

    def test_duplicate_headers_later_wins(self, parser):
        """Test later columns overwrite earlier ones sharing a name."""
        text = "Symbol,Name,Name\nAAA,first,second\n"

        assert parser.parse(text) == [{"Symbol": "AAA", "Name": "second"}]

    def test_crlf_line_endings(self, parser, sample_sheet_crlf):
        """Test Windows line endings parse like plain newlines."""
        records = parser.parse(sample_sheet_crlf)

        assert [record["Symbol"] for record in records] == ["RELIANCE", "TCS", "INFY"]
        assert records[-1]["Volume"] == pytest.approx(7.9)


class TestParseResult:
    """Test the full parse over a realistic sheet export."""

    def test_sample_sheet(self, parser, sample_sheet_csv):
        """Test every well-formed row is returned in input order."""
        result = parser.parse_table(sample_sheet_csv)

        assert result.status is ParseStatus.PARSED
        assert result.header_line_index == 2
        assert result.headers == (
            "Symbol", "Exchange", "Stock_name", "Current_price",
            "Price_change", "Percent_change", "Liquidity", "Volume",
        )
        assert [record["Symbol"] for record in result.records] == ["RELIANCE", "TCS", "INFY"]

        reliance = result.records[0]
        assert reliance["Stock_name"] == "Reliance Industries, Ltd."
        assert reliance["Current_price"] == pytest.approx(2945.10)
        assert reliance["Liquidity"] == pytest.approx(1520.75)
        assert result.skipped_rows == 0

    def test_every_record_has_symbol_and_header_keys(self, parser, sample_sheet_csv):
        """Test emitted records carry every header key and a Symbol."""
        result = parser.parse_table(sample_sheet_csv)

        for record in result.records:
            assert set(record) == set(result.headers)
            assert record["Symbol"]

    def test_idempotent(self, parser, sample_sheet_csv):
        """Test parsing the same text twice yields equal results."""
        assert parser.parse(sample_sheet_csv) == parser.parse(sample_sheet_csv)
        assert parser.parse_table(sample_sheet_csv) == parser.parse_table(sample_sheet_csv)

    def test_header_only_is_parsed_but_empty(self, parser):
        """Test a header with no rows is distinguishable from no header."""
        result = parser.parse_table("Symbol,Name\n")

        assert result.status is ParseStatus.PARSED
        assert result.records == ()

    def test_summary_logged(self, parser, recording_logger, sample_sheet_csv):
        """Test a completion summary is logged with counts."""
        parser.parse(sample_sheet_csv)

        summary = recording_logger.named("csv_parse_complete")
        assert len(summary) == 1
        assert summary[0]["records"] == 3
        assert summary[0]["skipped_malformed"] == 0


class TestParserParams:
    """Test parser configuration."""

    def test_custom_numeric_fields(self):
        """Test only configured numeric fields are coerced."""
        params = ParserParams(numeric_fields=("Price",))
        records = CsvTableParser(params).parse("Symbol,Price,Volume\nAAA,\"1,000\",5\n")

        assert records == [{"Symbol": "AAA", "Price": 1000.0, "Volume": "5"}]

    def test_custom_marker_and_required_field(self):
        """Test header marker and required field are configurable."""
        params = ParserParams(header_marker="ticker", required_field="Ticker")
        records = CsvTableParser(params).parse("notes\nTicker,Name\nAAA,Foo\n,Bar\n")

        assert records == [{"Ticker": "AAA", "Name": "Foo"}]

    def test_module_level_helpers(self, sample_sheet_csv):
        """Test convenience functions match the parser methods."""
        assert len(parse_csv(sample_sheet_csv)) == 3
        assert parse_csv_table("no header here").status is ParseStatus.NO_HEADER_FOUND
