"""Logging setup for the trello2focalboard package logger.

Every module logs through ``logging.getLogger(__name__)``, so configuring the
``trello2focalboard`` logger once covers the converter, the archive writer
and the Trello client. Progress lines go to stderr; stdout stays free for
``--help`` output.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "trello2focalboard"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    """Point the package logger at stderr and, optionally, a log file.

    Calling it again replaces the handlers from the previous call.

    Raises:
        ValueError: level is not one of LOG_LEVELS
    """
    name = level.upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level {level!r}, expected one of {', '.join(LOG_LEVELS)}")

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(getattr(logging, name))
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    package_logger.addHandler(console)

    if log_file:
        to_file = logging.FileHandler(log_file, encoding="utf-8")
        to_file.setFormatter(logging.Formatter(FILE_FORMAT))
        package_logger.addHandler(to_file)

    # The CLI owns the output format; keep records off the root logger
    package_logger.propagate = False
    return package_logger
