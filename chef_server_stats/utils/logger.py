"""Diagnostic logging configuration."""

import logging
import sys
from pythonjsonlogger import jsonlogger


def setup_logger(
    name: str = "chef_server_stats",
    level: str = "WARNING",
    json_format: bool = False
) -> logging.Logger:
    """
    Configure the diagnostic logger.

    Diagnostics always go to stderr; stdout is reserved for the JSON report.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Emit structured JSON lines instead of bare messages

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers to avoid duplicates
    logger.handlers = []

    handler = logging.StreamHandler(sys.stderr)
    if json_format:
        formatter = jsonlogger.JsonFormatter(
            '%(asctime)s %(name)s %(levelname)s %(message)s',
            timestamp=True
        )
    else:
        formatter = logging.Formatter('%(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # Don't propagate to root logger
    logger.propagate = False

    return logger
