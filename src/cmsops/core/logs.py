"""Logging setup shared by the CLI and the HTTP client."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(name)s | %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str = "WARNING") -> None:
    """
    Configure root logging with a Rich handler on stderr.

    Logging output goes to stderr so it never interleaves with tables and
    messages printed on stdout.
    """
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
        log_time_format=LOG_DATE_FORMAT,
    )
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        handlers=[handler],
        force=True,
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
