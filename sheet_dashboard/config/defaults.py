"""Default configuration parameters for the sheet dashboard."""

from dataclasses import dataclass

# Published-to-web CSV export of the stock sheet; must end with output=csv
DEFAULT_SHEET_URL = (
    "https://docs.google.com/spreadsheets/d/e/"
    "2PACX-1vRUthUWDMj2uhp0KxFBlVTgryGTLYXZ6QnW6k6aRszmHk2MsHgIRlVP1981f7Zx_O2GrWNsH3wtB1_Q"
    "/pub?gid=223530344&single=true&output=csv"
)

NUMERIC_FIELDS = (
    "Current_price",
    "Price_change",
    "Liquidity",
    "Volume",
    "Percent_change",
)


@dataclass(frozen=True)
class SourceParams:
    """Where and how the sheet CSV is downloaded."""
    url: str = DEFAULT_SHEET_URL
    timeout_seconds: float = 15.0
    accept: str = "text/csv,text/plain,*/*"
    user_agent: str = "sheet-dashboard/0.1"


@dataclass(frozen=True)
class ParserParams:
    """CSV table parsing parameters."""
    header_marker: str = "symbol"                    # Substring identifying the header row
    required_field: str = "Symbol"                   # Rows without it are dropped
    numeric_fields: tuple[str, ...] = NUMERIC_FIELDS  # Coerced to float, 0.0 on failure


@dataclass(frozen=True)
class DisplayParams:
    """Ordering and fallbacks for the card view."""
    sort_field: str = "Liquidity"
    descending: bool = True
    fallback_text: str = "N/A"
    fallback_number: float = 0.0


@dataclass(frozen=True)
class DashboardConfig:
    """Complete dashboard configuration."""
    source: SourceParams
    parser: ParserParams
    display: DisplayParams


def get_default_config() -> DashboardConfig:
    """Get the default configuration instance."""
    return DashboardConfig(
        source=SourceParams(),
        parser=ParserParams(),
        display=DisplayParams(),
    )
