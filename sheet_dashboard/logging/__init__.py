"""
Logging configuration and utilities for the sheet dashboard.
"""
from .config import configure_logging, get_logger, get_parser_logger

__all__ = ["configure_logging", "get_logger", "get_parser_logger"]
