"""Logging configuration for bsserve."""

import logging
import sys
from typing import Any, Optional

from .config import LoggingConfig

ROOT_LOGGER_NAME = "bsserve"
LABEL_WIDTH = 20


class BSServeFormatter(logging.Formatter):
    """Custom formatter for bsserve logs."""

    def __init__(self, format_string: str):
        """Initialize the formatter.

        Args:
            format_string: Format string for log messages
        """
        super().__init__(format_string)


def setup_logging(config: Optional[LoggingConfig] = None) -> None:
    """Set up logging configuration for bsserve.

    Args:
        config: Logging configuration object. If None, uses default configuration.
    """
    if config is None:
        config = LoggingConfig()

    numeric_level = getattr(logging, config.level.upper(), logging.INFO)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(numeric_level)

    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(BSServeFormatter(config.format_string))
    root_logger.addHandler(console_handler)

    root_logger.propagate = False

    root_logger.debug(f"Logging initialized - Level: {config.level}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific component.

    Args:
        name: Logger name (will be prefixed with 'bsserve.')

    Returns:
        Logger instance
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def log_labelled(logger: logging.Logger, level: int, label: str, value: Any) -> None:
    """Log ``value`` behind a right-aligned label, e.g. ``Server address: http://...``.

    Args:
        logger: Logger instance
        level: Logging level
        label: Short topic such as "Server address:"
        value: Message printed after the label
    """
    logger.log(level, f"{label.rjust(LABEL_WIDTH)} {value}")
