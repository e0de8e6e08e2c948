"""Logging helpers for the mcassets CLI."""

from __future__ import annotations

import logging
import os
import sys

import colorlog

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "bold_yellow",
    "ERROR": "bold_red",
    "CRITICAL": "bold_red,bg_white",
}

_FORMAT = "[%(asctime)s] <%(name)s> %(levelname)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Libraries logging every request at INFO
_NOISY_LOGGERS = ("httpx", "httpcore")


def _use_color() -> bool:
    return os.getenv("NO_COLOR") is None and sys.stderr.isatty()


def _formatter(color: bool) -> logging.Formatter:
    if not color:
        return logging.Formatter(_FORMAT, datefmt=_DATEFMT)
    return colorlog.ColoredFormatter(
        "%(log_color)s" + _FORMAT.replace(": %(message)s", ":%(reset)s %(message)s"),
        log_colors=LOG_COLORS,
        datefmt=_DATEFMT,
    )


def configure_logging(verbose: bool) -> None:
    """Log to stderr, using colors when it is a terminal and NO_COLOR is unset."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter(_use_color()))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        handlers=[handler],
        force=True,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
