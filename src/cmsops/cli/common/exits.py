"""Exit handling utilities for the CLI."""

from typing import NoReturn

import typer

from cmsops.cli.common.output import out
from cmsops.core.errors import ApiError


def ok_exit(msg: str | None = None) -> NoReturn:
    """Exit successfully with an optional informational message."""
    if msg:
        out.info(msg)
    raise typer.Exit(0)


def die(msg: str, code: int = 1) -> NoReturn:
    """Exit with an error message and optional exit code."""
    out.error(msg)
    raise typer.Exit(code)


def warn_exit(msg: str, code: int = 0) -> NoReturn:
    """Exit with a warning message and optional exit code."""
    out.warn(msg)
    raise typer.Exit(code)


def exit_from_api_error(exc: ApiError, *, code: int = 1) -> NoReturn:
    """Print a normalized backend error and exit; the UI state is left untouched."""
    out.api_error(exc)
    raise typer.Exit(code) from exc


def exit_from_exc(exc: Exception, *, message: str, code: int = 1) -> NoReturn:
    """Print `message` for a non-backend failure (e.g. an unreadable file) and exit."""
    out.error(message)
    raise typer.Exit(code) from exc
