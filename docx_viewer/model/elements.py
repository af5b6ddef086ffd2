"""Raw paragraph/run/table tree produced by the DOCX parser.

These objects mirror WordprocessingML closely and carry no inferred
structure; the structure package turns them into the Document Model.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class DrawingReference:
    """A drawing (usually an image) embedded inside a run."""

    r_id: str
    target: Optional[str] = None
    description: Optional[str] = None
    width_emu: Optional[int] = None
    height_emu: Optional[int] = None


@dataclass(slots=True)
class RunFragment:
    """Contiguous run of text with its inline formatting."""

    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False
    color: Optional[str] = None
    drawing: Optional[DrawingReference] = None


@dataclass(slots=True)
class NumberingInfo:
    """Native numbering reference attached to a paragraph (``w:numPr``)."""

    num_id: int
    level: int
    paragraph_style: Optional[str] = None
    list_name: Optional[str] = None


@dataclass(slots=True)
class ParagraphElement:
    """Paragraph in the document body."""

    runs: List[RunFragment]
    style_id: Optional[str] = None
    style_name: Optional[str] = None
    outline_level: Optional[int] = None
    numbering: Optional[NumberingInfo] = None

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)

    @property
    def drawings(self) -> List[DrawingReference]:
        return [run.drawing for run in self.runs if run.drawing is not None]


@dataclass(slots=True)
class TableCell:
    """Single table cell; nested tables are flattened into its paragraphs."""

    paragraphs: List[ParagraphElement] = field(default_factory=list)
    grid_span: int = 1

    @property
    def text(self) -> str:
        parts = [paragraph.text.strip() for paragraph in self.paragraphs]
        return " ".join(part for part in parts if part)


@dataclass(slots=True)
class TableRow:
    """Row with a sequence of cells."""

    cells: List[TableCell] = field(default_factory=list)


@dataclass(slots=True)
class TableElement:
    """Tabular structure extracted from Word tables."""

    rows: List[TableRow] = field(default_factory=list)

    def text_grid(self) -> List[List[str]]:
        """Cell text per row, with horizontally merged cells expanded to empty cells."""
        grid: List[List[str]] = []
        for row in self.rows:
            values: List[str] = []
            for cell in row.cells:
                values.append(cell.text)
                values.extend("" for _ in range(max(cell.grid_span, 1) - 1))
            grid.append(values)
        return grid


BlockElement = ParagraphElement | TableElement


@dataclass(slots=True)
class CoreProperties:
    """Package metadata from ``docProps/core.xml``."""

    title: Optional[str] = None
    author: Optional[str] = None
    created: Optional[str] = None
    modified: Optional[str] = None


@dataclass(slots=True)
class DocumentTree:
    """Raw block sequence prior to structural normalization."""

    blocks: List[BlockElement] = field(default_factory=list)
    properties: CoreProperties = field(default_factory=CoreProperties)
