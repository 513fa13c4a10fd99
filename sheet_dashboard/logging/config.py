"""
Centralized logging configuration for the sheet dashboard.

This module provides standardized logging configuration using structlog
for all components. Parser diagnostics (skipped rows, missing headers) and
fetch progress are emitted as structured events through this configuration.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    # Log to stderr so stdout stays clean for CLI output
    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
        format="%(message)s"  # structlog will handle formatting
    )
    logging.getLogger().setLevel(log_level)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_parser_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for CSV parsing diagnostics.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger tagged with the parser subsystem
    """
    # Initial values keep the proxy lazy; bind() here would freeze the
    # configuration that is active at import time
    return structlog.get_logger(name, subsystem="csv_parser")


def log_row_skipped(
    logger: FilteringBoundLogger,
    line_number: int,
    reason: str,
    expected_fields: Optional[int] = None,
    actual_fields: Optional[int] = None,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a discarded data row with standardized format.

    Args:
        logger: Structlog logger instance
        line_number: 1-based line number of the row in the raw text
        reason: Why the row was discarded
        expected_fields: Header field count, for field count mismatches
        actual_fields: Field count found on the row
        context: Additional context data
    """
    bound_logger = logger.bind(
        line_number=line_number,
        reason=reason,
    )

    if expected_fields is not None:
        bound_logger = bound_logger.bind(
            expected_fields=expected_fields,
            actual_fields=actual_fields
        )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.warning("csv_row_skipped")
