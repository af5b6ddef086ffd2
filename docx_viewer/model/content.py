"""Normalized, enriched content elements consumed by renderers and search.

All classes are frozen; sequences are tuples so that a built document can be
shared between readers without copying.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class MarkerKind(str, Enum):
    """Visible marker style of a list item."""

    BULLET = "bullet"
    LETTERED = "lettered"
    ROMAN = "roman"
    NUMERIC = "numeric"


class DataType(str, Enum):
    """Inferred type of a table cell or column."""

    TEXT = "text"
    NUMBER = "number"
    CURRENCY = "currency"
    PERCENTAGE = "percentage"
    DATE = "date"
    BOOLEAN = "boolean"
    EMPTY = "empty"


class Alignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class HeadingSource(str, Enum):
    """Which detector classified a heading."""

    STYLE = "style"
    NUMBERING = "numbering"
    TEXT = "text"


@dataclass(frozen=True, slots=True)
class TextFormatting:
    """Inline formatting shared by all runs of an element."""

    bold: bool = False
    italic: bool = False
    underline: bool = False
    color: Optional[str] = None


PLAIN = TextFormatting()


@dataclass(frozen=True, slots=True)
class Heading:
    level: int
    text: str
    number: Optional[str] = None
    source: HeadingSource = HeadingSource.STYLE
    formatting: TextFormatting = PLAIN

    @property
    def display_text(self) -> str:
        """Heading text with its number prefix, if any."""
        return f"{self.number} {self.text}" if self.number else self.text


@dataclass(frozen=True, slots=True)
class Paragraph:
    text: str
    formatting: TextFormatting = PLAIN


@dataclass(frozen=True, slots=True)
class ListItem:
    text: str
    level: int = 0
    marker: MarkerKind = MarkerKind.BULLET


@dataclass(frozen=True, slots=True)
class ListGroup:
    """Consecutive list items merged into one element."""

    items: Tuple[ListItem, ...]
    native: bool = False
    formatting: TextFormatting = PLAIN


@dataclass(frozen=True, slots=True)
class TableCell:
    text: str
    data_type: DataType = DataType.TEXT


@dataclass(frozen=True, slots=True)
class TableRow:
    cells: Tuple[TableCell, ...]


@dataclass(frozen=True, slots=True)
class TableMetadata:
    column_count: int
    row_count: int
    has_header: bool
    alignments: Tuple[Alignment, ...] = ()
    widths: Tuple[int, ...] = ()
    column_types: Tuple[DataType, ...] = ()


@dataclass(frozen=True, slots=True)
class TableData:
    """Enriched table; ``rows[0]`` is the header row when ``metadata.has_header``."""

    rows: Tuple[TableRow, ...]
    metadata: TableMetadata
    formatting: TextFormatting = PLAIN

    @property
    def header(self) -> Optional[TableRow]:
        if self.metadata.has_header and self.rows:
            return self.rows[0]
        return None

    @property
    def body(self) -> Tuple[TableRow, ...]:
        return self.rows[1:] if self.header is not None else self.rows


@dataclass(frozen=True, slots=True)
class ImageReference:
    identifier: str
    caption: Optional[str] = None
    width_emu: Optional[int] = None
    height_emu: Optional[int] = None
    formatting: TextFormatting = PLAIN


Element = Heading | Paragraph | ListGroup | TableData | ImageReference
