"""
Logging configuration for agskills.

Console diagnostics go through rich's RichHandler on stderr so they never
interleave with the selection list drawn on stdout.
"""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from agskills.storage.paths import expand_path

LOGGER_NAME = "agskills"


def setup_logging(level: str = "WARNING", log_file: str | Path | None = None) -> logging.Logger:
    """
    Configure the agskills logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional file that also receives every record at `level`.

    Returns:
        The configured package logger.
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    logger.propagate = False

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    console_handler.setLevel(numeric_level)
    logger.addHandler(console_handler)

    if log_file:
        path = expand_path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    logger.debug(f"Logging initialized: level={level}, file={log_file}")
    return logger


__all__ = ["LOGGER_NAME", "setup_logging"]
