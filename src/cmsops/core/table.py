"""Generic record table: search, truncation and row activation.

This module holds the frontend-agnostic part of the record table. It keeps
no store of its own: the caller hands in the full record list, the table
derives a filtered view from it and renders cells by their tag. Rendering
to an actual terminal lives in the CLI output layer.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Iterator, Sequence

from cmsops.core.models import CellValue, Column, ImageCell, Record, TextCell, record_id

DEFAULT_WORD_LIMIT = 20
ELLIPSIS = "..."
PLACEHOLDER = "-"

_WS = re.compile(r"\s+")


class CellKind(str, Enum):
    """How a single cell is drawn."""

    IMAGE = "image"
    TEXT = "text"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class CellView:
    """Display-ready form of one cell."""

    kind: CellKind
    text: str


def limit_words(text: str, limit: int = DEFAULT_WORD_LIMIT) -> str:
    """Return text capped at `limit` words, marking the cut with an ellipsis."""
    words = _WS.split(text.strip()) if text.strip() else []
    if len(words) <= limit:
        return text
    return " ".join(words[:limit]) + ELLIPSIS


def cell_matches(value: CellValue, needle: str) -> bool:
    """
    Check whether a single cell matches a lower-cased search needle.

    Tagged text cells match on their value, image cells never match and
    anything else matches on its string conversion.
    """
    if isinstance(value, TextCell):
        return needle in value.value.lower()
    if isinstance(value, ImageCell):
        return False
    return needle in str(value).lower()


def filter_records(records: Sequence[Record], query: str) -> list[Record]:
    """
    Return the records where any cell matches the query (case-insensitive).

    An empty query keeps every record. Order is preserved and the input is
    never modified, so filtering twice with the same query is a no-op.
    """
    if not query:
        return list(records)
    needle = query.lower()
    return [r for r in records if any(cell_matches(v, needle) for v in r.values())]


def render_cell(value: CellValue, word_limit: int = DEFAULT_WORD_LIMIT) -> CellView:
    """Render one cell according to its tag; missing values become a dash."""
    if value is None:
        return CellView(CellKind.PLACEHOLDER, PLACEHOLDER)
    if isinstance(value, ImageCell):
        return CellView(CellKind.IMAGE, value.url)
    if isinstance(value, TextCell):
        return CellView(CellKind.TEXT, limit_words(value.value, word_limit))
    return CellView(CellKind.TEXT, limit_words(str(value), word_limit))


class RecordTable:
    """
    Searchable, clickable view over a caller-supplied list of records.

    Every record is expected to carry an `id`, which is used to build the
    detail route when a row is activated.
    """

    def __init__(
        self,
        columns: Sequence[Column],
        records: Iterable[Record],
        *,
        base_url: str,
        word_limit: int = DEFAULT_WORD_LIMIT,
        navigate: Callable[[str], None] | None = None,
    ) -> None:
        if not columns:
            raise ValueError("A record table needs at least one column.")
        if word_limit < 1:
            raise ValueError("word_limit must be >= 1")
        self.columns = list(columns)
        self.base_url = base_url.rstrip("/")
        self.word_limit = word_limit
        self.navigate = navigate
        self.query = ""
        self._records: list[Record] = list(records)
        self._view: list[Record] = list(self._records)

    @property
    def records(self) -> list[Record]:
        """Records currently visible after filtering."""
        return list(self._view)

    def set_records(self, records: Iterable[Record]) -> None:
        """Replace the input list and recompute the filtered view."""
        self._records = list(records)
        self._view = filter_records(self._records, self.query)

    def search(self, query: str) -> list[Record]:
        """Apply a new search text and return the filtered view."""
        self.query = query
        self._view = filter_records(self._records, query)
        return self.records

    def render_row(self, record: Record) -> list[CellView]:
        """Render a record against the column schema."""
        return [render_cell(record.get(c.key), self.word_limit) for c in self.columns]

    def rows(self) -> Iterator[tuple[Record, list[CellView]]]:
        """Yield (record, rendered cells) for the current view."""
        for record in self._view:
            yield record, self.render_row(record)

    def route_for(self, record: Record) -> str:
        """Return the detail route for a record."""
        return f"{self.base_url}/{record_id(record)}"

    def activate(self, record: Record) -> None:
        """Navigate to the detail route of the given record."""
        if self.navigate is None:
            raise RuntimeError("No navigate callback configured for this table.")
        self.navigate(self.route_for(record))
