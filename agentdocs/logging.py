"""Logging utilities for agentdocs commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

_LOGGER_NAME = "agentdocs"


class ConsoleFormatter(logging.Formatter):
    """Progress lines stay plain; problems get a level prefix.

    With ``verbose`` every record is tagged with its level and the logger name
    relative to ``agentdocs`` so debug output can be traced to a module.
    """

    def __init__(self, *, verbose: bool = False) -> None:
        super().__init__()
        self.verbose = verbose

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if self.verbose:
            module = record.name[len(_LOGGER_NAME) + 1 :] or _LOGGER_NAME
            return f"[{record.levelname.lower()}] {module}: {message}"
        if record.levelno >= logging.WARNING:
            return f"{record.levelname.capitalize()}: {message}"
        return message


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the agentdocs hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Route agentdocs records to stderr (or ``stream``) and an optional file."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream)
    console.setLevel(level)
    console.setFormatter(ConsoleFormatter(verbose=verbose))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)
        # The file keeps debug records even when the console only shows info.
        logger.setLevel(logging.DEBUG)

    return logger


__all__ = ["ConsoleFormatter", "configure_logging", "get_logger"]
