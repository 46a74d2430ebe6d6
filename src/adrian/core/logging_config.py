"""Logging configuration for the Adrian font server."""

import logging
import sys
from pathlib import Path

ACCESS_LOGGER_NAME = "adrian.access"
ACCESS_LOG_TIME_FORMAT = "%d/%b/%Y:%H:%M:%S %z"


def setup_logging(level: int = logging.INFO) -> None:
    """
    Configure application logging on the console.

    Args:
        level: Logging level (default: INFO)
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )


def setup_access_log(path: Path | None) -> logging.Logger:
    """
    Attach a file handler for combined-format access lines.

    Args:
        path: Access log file (appended to). ``None`` keeps lines on the console.

    Returns:
        The access logger
    """
    access_logger = logging.getLogger(ACCESS_LOGGER_NAME)

    for handler in list(access_logger.handlers):
        access_logger.removeHandler(handler)
        handler.close()

    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        access_logger.addHandler(file_handler)
        access_logger.propagate = False
    else:
        access_logger.propagate = True

    access_logger.setLevel(logging.INFO)
    return access_logger
