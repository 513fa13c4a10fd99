#!/usr/bin/env python3
"""
Main entry point for the sheet dashboard

Usage:
    python -m sheet_dashboard
    python -m sheet_dashboard --url "https://docs.google.com/.../pub?output=csv"
    python -m sheet_dashboard --file stocks.csv --limit 10
    python -m sheet_dashboard --json --log-level DEBUG
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional

from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .dashboard import StockDashboard, format_card
from .errors import ConfigurationError
from .logging.config import configure_logging, get_logger

logger = get_logger(__name__)


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Show stocks from a published Google Sheet ranked by liquidity'
    )
    parser.add_argument(
        '--url',
        type=str,
        help='Published sheet CSV URL (overrides dashboard.yaml and defaults)'
    )
    parser.add_argument(
        '--file',
        type=Path,
        help='Read CSV from a local file instead of fetching the sheet'
    )
    parser.add_argument(
        '--config-dir',
        type=Path,
        help='Directory containing dashboard.yaml'
    )
    parser.add_argument(
        '--limit',
        type=positive_int,
        help='Show only the top N stocks (N >= 1)'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print ranked records as JSON instead of cards'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default='WARNING',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Logging level'
    )
    parser.add_argument(
        '--json-logs',
        action='store_true',
        help='Emit logs as JSON lines'
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Load the sheet, print the ranked stocks and return the exit code."""
    args = build_arg_parser().parse_args(argv)

    configure_logging(level=args.log_level, format_json=args.json_logs)

    overrides: dict[str, Any] = {}
    if args.url:
        overrides["source"] = {"url": args.url}

    loader = ConfigLoader.create(args.config_dir)
    try:
        merged = loader.merge_config(overrides)
    except ConfigurationError as e:
        logger.error("Could not load configuration", path=e.path, error=str(e))
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    errors = ConfigValidator.validate_config(merged)
    if errors:
        for error in errors:
            logger.error("Invalid configuration", field=error.field,
                         message=error.message, value=error.value)
        print(f"Invalid configuration: {len(errors)} error(s)", file=sys.stderr)
        return 1

    dashboard = StockDashboard(loader.build_config(overrides))

    if args.file:
        try:
            text = args.file.read_text(encoding='utf-8')
        except OSError as e:
            logger.error("Could not read CSV file", path=str(args.file), error=str(e))
            print(f"Error: could not read {args.file}: {e}", file=sys.stderr)
            return 1
        result = dashboard.load_text(text)
    else:
        result = dashboard.load()

    if not result.success:
        print(f"Error: {result.error_msg}", file=sys.stderr)
        return 1

    records = result.records[:args.limit] if args.limit is not None else result.records

    if args.json:
        print(json.dumps(records, indent=2, ensure_ascii=False))
        return 0

    print(f"A total of {len(result.records)} stock entries loaded successfully.\n")
    for view in dashboard.cards(records):
        print(format_card(view))
        print()

    return 0


if __name__ == "__main__":
    sys.exit(main())
