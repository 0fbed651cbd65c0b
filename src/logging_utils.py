"""
Logging utilities for the tool evaluation tracker.

Provides consistent logging configuration across all modules.

Usage:
    from logging_utils import get_logger

    logger = get_logger(__name__)
    logger.info("Loaded 12 evaluations")
    logger.warning("Unparsable evaluation date")
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "tooleval"

# Default format for log messages
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Track if root logger has been configured
_root_configured = False


def configure_logging(
    level: int = logging.INFO,
    format_str: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    stream: Optional[object] = None,
) -> None:
    """
    Configure the tooleval root logger.

    Call this once at application startup. Subsequent calls are ignored.

    Args:
        level: Logging level (default: INFO)
        format_str: Log message format
        date_format: Date format for timestamps
        stream: Output stream (default: sys.stderr)
    """
    global _root_configured
    if _root_configured:
        return

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(logging.NOTSET)
    handler.setFormatter(logging.Formatter(format_str, date_format))

    root.addHandler(handler)
    _root_configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance under the tooleval hierarchy.
    """
    configure_logging()

    # Strip src. prefix when imported as a package
    if name.startswith("src."):
        name = name[4:]

    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def set_verbose(verbose: bool) -> None:
    """Switch all tooleval loggers between DEBUG and INFO."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)
