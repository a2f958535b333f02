"""Terminal UI utilities for picking table rows."""

from __future__ import annotations

import questionary

from cmsops.cli.common.tui_style import QUESTIONARY_STYLE_PICK
from cmsops.core.models import Record, record_id
from cmsops.core.table import CellKind, RecordTable

_MAX_LABEL_WIDTH = 72


def _truncate(text: str, max_len: int) -> str:
    """Return text capped at max_len characters using an ASCII ellipsis."""
    if max_len <= 3 or len(text) <= max_len:
        return text[:max_len]
    return f"{text[: max_len - 3]}..."


def _row_label(table: RecordTable, record: Record) -> str:
    """Join the non-image, non-placeholder cells of a row into one line."""
    parts = [
        cell.text
        for cell in table.render_row(record)
        if cell.kind == CellKind.TEXT and cell.text
    ]
    return " | ".join(parts) or record_id(record)


def _row_choice_title(label: str, record: Record, *, label_width: int) -> str:
    """Format one row choice as `<label>  (id: <id>)` with aligned id column."""
    short = _truncate(label, _MAX_LABEL_WIDTH)
    return f"{short.ljust(label_width)}  (id: {record_id(record)})"


def select_record(table: RecordTable) -> Record | None:
    """Display a single-choice prompt over the table's current view.

    Args:
        table: Record table whose filtered rows are offered.

    Returns:
        The chosen record, or None if the prompt was cancelled or empty.
    """
    records = table.records
    if not records:
        return None

    labels = [_truncate(_row_label(table, r), _MAX_LABEL_WIDTH) for r in records]
    label_width = max((len(label) for label in labels), default=0)

    choices = [
        questionary.Choice(
            title=_row_choice_title(label, record, label_width=label_width),
            value=record,
        )
        for label, record in zip(labels, records)
    ]

    return questionary.select(
        "Open record:",
        choices=choices,
        style=QUESTIONARY_STYLE_PICK,
    ).ask()
