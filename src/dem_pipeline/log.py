"""Coloured console logging for the command line."""

from __future__ import annotations

import logging
import sys

CYAN = "\033[38;5;038m"
RED = "\033[38;5;160m"
GREEN = "\033[38;5;028m"
YELLOW = "\033[38;5;178m"
PURPLE = "\033[38;5;062m"
RESET = "\033[0m"

LEVEL_COLORS = {
    logging.DEBUG: PURPLE,
    logging.WARNING: YELLOW,
    logging.ERROR: RED,
    logging.CRITICAL: RED,
}

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColorFormatter(logging.Formatter):
    """``[timestamp] [LEVEL] message`` with ANSI colours.

    INFO records carry no level tag, matching plain progress output.
    """

    def __init__(self, color: bool = True) -> None:
        super().__init__(datefmt=DATE_FORMAT)
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        timestamp = f"[{self.formatTime(record, self.datefmt)}]"
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        tag = "" if record.levelno == logging.INFO else f"[{record.levelname}] "
        if not self.color:
            return f"{timestamp} {tag}{message}"

        level_color = LEVEL_COLORS.get(record.levelno, GREEN)
        if tag:
            tag = f"{level_color}{tag.rstrip()}{RESET} "
        return f"{CYAN}{timestamp}{RESET} {tag}{message}"


def configure_logging(level: int = logging.INFO, color: bool | None = None) -> None:
    """Send ``dem_pipeline`` log records to stderr.

    Colour defaults to on when stderr is a terminal.
    """
    if color is None:
        color = sys.stderr.isatty()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ColorFormatter(color=color))

    package_logger = logging.getLogger("dem_pipeline")
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False
