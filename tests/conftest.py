"""Pytest configuration and shared fixtures."""

import pytest

from sheet_dashboard.data.parsers import CsvTableParser


class RecordingLogger:
    """Stand-in for a structlog bound logger that keeps emitted events."""

    def __init__(self, events=None, context=None):
        self.events = events if events is not None else []
        self.context = context or {}

    def bind(self, **kwargs):
        return RecordingLogger(self.events, {**self.context, **kwargs})

    def _record(self, level, event, **kwargs):
        self.events.append({"level": level, "event": event, **self.context, **kwargs})

    def debug(self, event, **kwargs):
        self._record("debug", event, **kwargs)

    def info(self, event, **kwargs):
        self._record("info", event, **kwargs)

    def warning(self, event, **kwargs):
        self._record("warning", event, **kwargs)

    def error(self, event, **kwargs):
        self._record("error", event, **kwargs)

    def named(self, event):
        return [entry for entry in self.events if entry["event"] == event]


@pytest.fixture
def recording_logger() -> RecordingLogger:
    """Logger that records events for assertions."""
    return RecordingLogger()


@pytest.fixture
def parser(recording_logger) -> CsvTableParser:
    """CSV table parser with default parameters and a recording logger."""
    csv_parser = CsvTableParser()
    csv_parser.logger = recording_logger
    return csv_parser


@pytest.fixture
def sample_sheet_csv() -> str:
    """Published sheet export with a preamble, quoted fields and thousands separators."""
    return (
        "Live stock sheet,,,,,,,\n"
        "\n"
        "Symbol,Exchange,Stock name,Current price,Price change,Percent_change,Liquidity,Volume\n"
        "\"RELIANCE\",\"NSE\",\"Reliance Industries, Ltd.\",\"2,945.10\",12.4,0.42,\"1,520.75\",5.2\n"
        "TCS,NSE,Tata Consultancy Services,\"3,870.00\",-15.5,-0.4,980.5,2.1\n"
        "INFY,NSE,Infosys,1510.35,4.2,0.28,\"2,310.00\",7.9\n"
    )


@pytest.fixture
def sample_sheet_crlf(sample_sheet_csv) -> str:
    """Same sheet exported with Windows line endings."""
    return sample_sheet_csv.replace("\n", "\r\n")
