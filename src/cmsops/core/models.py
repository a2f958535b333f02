"""Core record and cell models for the content tables.

A table is described by an ordered list of Column entries and fed with
records: plain mappings from column key to a cell value. A cell value is
either one of the two tagged variants (TextCell / ImageCell), a raw scalar,
or absent. The table never infers the variant from content.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union


@dataclass(frozen=True)
class Column:
    """
    One displayable column of a record table.

    Attributes:
        key: Key used to look the cell up in each record.
        label: Header text shown for the column.
        class_name: Optional style hint passed through to the renderer.
    """

    key: str
    label: str
    class_name: str | None = None


@dataclass(frozen=True)
class TextCell:
    """A cell rendered as (truncated) plain text."""

    value: str


@dataclass(frozen=True)
class ImageCell:
    """A cell rendered as a fixed-size image thumbnail."""

    url: str


Scalar = Union[str, int, float]
CellValue = Union[TextCell, ImageCell, Scalar, None]

Record = Mapping[str, Any]


def record_id(record: Record) -> str:
    """Return the record id as a string (raises KeyError when absent)."""
    return str(record["id"])
