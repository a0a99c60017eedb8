"""
Logger Module

Provides a centralized logging setup shared by every module.
"""

import logging
import sys
from typing import Optional

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_ROOT_NAME = "office_tracker"


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach console (and optional file) handlers to the package root logger.

    Args:
        level: Level name such as "INFO" or "DEBUG"
        log_file: Optional path of an extra log file

    Returns:
        The package root logger
    """
    root = logging.getLogger(_ROOT_NAME)
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    # Avoid adding handlers multiple times (app factory may run more than once)
    if root.handlers:
        return root

    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
        except OSError as e:
            # If file logging fails, just log to console
            root.warning(f"Cannot open log file {log_file}: {e}")

    return root


def get_logger(name: str) -> logging.Logger:
    """Get a child logger of the package root (e.g. "office_tracker.attendance.service")."""
    if not name.startswith(_ROOT_NAME):
        name = f"{_ROOT_NAME}.{name}"
    return logging.getLogger(name)
