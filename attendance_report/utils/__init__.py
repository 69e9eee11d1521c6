"""Helper utilities for attendance_report."""

from .logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
