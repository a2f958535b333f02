"""Output formatting utilities for the CLI."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Mapping

import questionary
from rich.console import Console
from rich.markup import escape
from rich.style import Style
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from cmsops.cli.common.tui_style import QUESTIONARY_STYLE_CONFIRM
from cmsops.core.errors import ApiError
from cmsops.core.table import CellKind, CellView, RecordTable

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

THUMBNAIL_LABEL = "▣ image"

console = Console(theme=_THEME)


def cell_renderable(cell: CellView) -> Text:
    """Turn a rendered cell into Rich text (images become fixed-size link labels)."""
    if cell.kind == CellKind.IMAGE:
        return Text(THUMBNAIL_LABEL, style=Style(color="magenta", link=cell.text))
    if cell.kind == CellKind.PLACEHOLDER:
        return Text(cell.text, style="meta")
    return Text(cell.text)


def build_record_table(table: RecordTable, title: str) -> Table:
    """Build a Rich table for the current filtered view of a RecordTable."""
    t = Table(title=title, show_lines=False)
    t.add_column("ID", style="ok", no_wrap=True)
    for column in table.columns:
        t.add_column(column.label, style=column.class_name or "")

    for record, cells in table.rows():
        t.add_row(escape(str(record.get("id"))), *(cell_renderable(c) for c in cells))
    return t


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def _q(self, message: str) -> str:
        """Prefix Questionary prompts consistently."""
        return f"[CMS] {message}"

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {msg}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with console.status(msg, spinner="dots"):
            yield

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[ok]✓[/] {msg}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {escape(msg)}")

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{title}[/]")

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{escape(str(k))}[/]: {escape(str(v))}")

    def api_error(self, err: ApiError) -> None:
        """
        Print a normalized backend error.

        Validation errors show their details list in place of the message;
        any other error shows the message, then the details (if any).
        """
        details = err.details or []
        if err.is_validation:
            console.print("[err]✗ Validation Error[/]")
            for d in details:
                console.print(f"  [err]•[/] {escape(d)}")
            return

        console.print(f"[err]✗ Error[/] {escape(err.message)}")
        if details:
            console.print("[meta]Additional details:[/]")
            for d in details:
                console.print(f"  [err]•[/] {escape(d)}")

    def confirm(self, message: str, *, default: bool = False) -> bool:
        """Ask the user for a yes/no confirmation."""
        console.print("[meta]Use y/n then Enter[/]")
        prompt = questionary.confirm(
            self._q(message),
            default=default,
            style=QUESTIONARY_STYLE_CONFIRM,
            qmark="✦",
            auto_enter=False,
        )
        return bool(prompt.ask())

    def record_table(self, table: RecordTable, title: str) -> None:
        """Render the filtered view of a record table."""
        console.print(build_record_table(table, title))
        if table.query:
            console.print(
                f"[meta]{len(table.records)} match(es) for '{escape(table.query)}'[/]"
            )


out = Out()
