"""
Logging setup for the attendance report renderer.

Modules log through ``logging.getLogger(__name__)``; applications call
``configure_logging`` once to install a rich console handler.
"""

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "attendance_report"
_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance for module.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    if not name or not isinstance(name, str):
        raise ValueError("Logger name must be a non-empty string")
    return logging.getLogger(name)


def configure_logging(
    level: str = "INFO",
    rich: bool = True,
    console: Optional[Console] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Configure logging for the package logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        rich: Use a RichHandler; plain StreamHandler on stdout otherwise
        console: Optional rich Console to write to
        format_string: Custom format string for the plain handler

    Returns:
        The configured package logger
    """
    if level.upper() not in _VALID_LEVELS:
        raise ValueError(f"Invalid log level: {level}")

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers.clear()

    if rich:
        handler: logging.Handler = RichHandler(
            console=console or Console(stderr=True),
            show_time=True,
            show_path=True,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                format_string or "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    handler.setLevel(getattr(logging, level.upper()))
    logger.addHandler(handler)
    return logger
