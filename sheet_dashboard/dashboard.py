"""
Main dashboard coordinator.

Runs the load pipeline for the stock dashboard:
Sheet URL → CSV text → payload checks → CSV table parse → liquidity ranking

and shapes each ranked record into a card view with display fallbacks.
"""

from typing import Any, Optional, Union

import structlog

from .config.defaults import DashboardConfig, DisplayParams, get_default_config
from .data.fetcher import fetch_csv_text
from .data.models import LoadResult, ParseResult, Record
from .data.parsers import CsvTableParser
from .data.validators import validate_csv_payload
from .errors import DataQualityError, NoUsableRowsError, SystemFailureError

logger = structlog.get_logger(__name__)

LOAD_ERROR_PREFIX = "Failed to load stock data"


def sort_key_value(record: Record, field: str) -> float:
    """Numeric sort value of a record field; absent or non-numeric counts as 0."""
    value = record.get(field)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def rank_records(records: list[Record], display: Optional[DisplayParams] = None) -> list[Record]:
    """Sort records by the display sort field. Ties keep input order."""
    display = display or DisplayParams()
    return sorted(
        records,
        key=lambda record: sort_key_value(record, display.sort_field),
        reverse=display.descending
    )


def card_view(record: Record, display: Optional[DisplayParams] = None) -> dict[str, Any]:
    """
    Shape one record into the values shown on its card.

    Missing text fields fall back to the display text ("N/A") and missing or
    non-numeric numbers to the display number (0).
    """
    display = display or DisplayParams()

    def text(field: str) -> str:
        value = record.get(field)
        return value if isinstance(value, str) and value else display.fallback_text

    def number(field: str) -> float:
        value = record.get(field)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not value:
            return display.fallback_number
        return float(value)

    percent_change = number("Percent_change")
    price_change = number("Price_change")
    exchange = record.get("Exchange")

    return {
        "symbol": text("Symbol"),
        "stock_name": text("Stock_name"),
        "exchange": exchange if isinstance(exchange, str) and exchange else None,
        "current_price": number("Current_price"),
        "price_change": price_change,
        "percent_change": percent_change,
        "liquidity": number("Liquidity"),
        "volume": number("Volume"),
        "trend": "up" if percent_change >= 0 else "down",
        "price_trend": "up" if price_change >= 0 else "down",
    }


def format_card(view: dict[str, Any]) -> str:
    """Render a card view as a short block of text."""
    arrow = "▲" if view["trend"] == "up" else "▼"
    sign = "+" if view["price_trend"] == "up" else ""
    lines = [
        f"{view['symbol']}  {arrow} {view['percent_change']:.2f}%",
        f"  Stock Name: {view['stock_name']}",
        f"  Price: {view['current_price']:,.2f}  ({sign}{view['price_change']:.2f})",
        f"  Liquidity (M): {view['liquidity']:,.2f}",
        f"  Volume (M): {view['volume']:,.2f}",
    ]
    if view["exchange"]:
        lines.append(f"  Exchange: {view['exchange']}")
    return "\n".join(lines)


class StockDashboard:
    """
    Coordinator for loading and ranking sheet stock data.

    Errors from fetching and payload checks are turned into a failed
    LoadResult, so callers only ever branch on LoadResult.success.
    """

    def __init__(self, config: Optional[DashboardConfig] = None) -> None:
        self.config = config or get_default_config()
        self.parser = CsvTableParser(self.config.parser)
        self.logger = logger

    def load(self) -> LoadResult:
        """Fetch the configured sheet and run the full pipeline."""
        try:
            text = fetch_csv_text(self.config.source)
        except SystemFailureError as e:
            self.logger.error("Sheet fetch failed", url=self.config.source.url, error=str(e))
            return LoadResult.failure(f"{LOAD_ERROR_PREFIX}: {e}")

        return self.load_text(text)

    def load_text(self, text: Union[str, bytes]) -> LoadResult:
        """Run payload checks, parsing and ranking on CSV text already in hand."""
        if isinstance(text, bytes):
            text = text.decode("utf-8", errors="replace")

        parse_result: Optional[ParseResult] = None
        try:
            validate_csv_payload(text)
            parse_result = self.parser.parse_table(text)
            records = self._require_records(parse_result)

        except DataQualityError as e:
            self.logger.error(
                "Stock data unusable",
                error=str(e),
                error_type=type(e).__name__,
                context=e.context
            )
            return LoadResult.failure(f"{LOAD_ERROR_PREFIX}: {e}", parse_result=parse_result)

        ranked = rank_records(records, self.config.display)
        self.logger.info(
            "Stock data loaded",
            records=len(ranked),
            skipped_rows=parse_result.skipped_rows,
            sort_field=self.config.display.sort_field
        )
        return LoadResult.loaded(ranked, parse_result=parse_result)

    def cards(self, records: list[Record]) -> list[dict[str, Any]]:
        """Card views for ranked records, in the same order."""
        return [card_view(record, self.config.display) for record in records]

    def _require_records(self, parse_result: ParseResult) -> list[Record]:
        required = self.config.parser.required_field

        if not parse_result.header_found:
            raise NoUsableRowsError(
                f"No header row found containing '{self.config.parser.header_marker}'. "
                f"Please ensure your CSV has a '{required}' column.",
                header_found=False
            )

        if not parse_result.records:
            raise NoUsableRowsError(
                "No valid stock data found after parsing the CSV. "
                f"Check headers (especially '{required}') and data rows in your Google Sheet.",
                headers=list(parse_result.headers),
                header_found=True,
                context={
                    "skipped_malformed": parse_result.skipped_malformed,
                    "skipped_missing_symbol": parse_result.skipped_missing_symbol,
                }
            )

        return list(parse_result.records)
