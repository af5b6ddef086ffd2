"""Markdown export."""
from __future__ import annotations

from typing import List

from docx_viewer.model.content import (
    Alignment,
    Element,
    Heading,
    ImageReference,
    ListGroup,
    MarkerKind,
    Paragraph,
    TableData,
    TableRow,
    TextFormatting,
)
from docx_viewer.model.document_model import Document
from docx_viewer.renderer.utils import item_ordinals
from docx_viewer.utils.units import emu_to_pixels

_ALIGNMENT_ROW = {Alignment.LEFT: ":--", Alignment.CENTER: ":-:", Alignment.RIGHT: "--:"}


def escape_cell(text: str) -> str:
    return " ".join(text.replace("|", "\\|").split())


def emphasize(text: str, formatting: TextFormatting) -> str:
    if not text.strip():
        return text
    if formatting.bold:
        text = f"**{text}**"
    if formatting.italic:
        text = f"*{text}*"
    return text


class MarkdownRenderer:
    """Render a document as GitHub-flavoured Markdown."""

    def __init__(self, include_metadata: bool = True) -> None:
        self._include_metadata = include_metadata

    def render(self, document: Document) -> str:
        if document.is_empty:
            return ""
        blocks: List[str] = []
        if self._include_metadata:
            blocks.append(self._front_matter(document))
        blocks.extend(self.render_element(element) for element in document.elements)
        return "\n\n".join(blocks) + "\n"

    @staticmethod
    def _front_matter(document: Document) -> str:
        metadata = document.metadata
        lines = [
            f"# {document.title}",
            "",
            "## Document Information",
            "",
            f"- **File**: {metadata.file_path}",
            f"- **Pages**: {metadata.page_count}",
            f"- **Words**: {metadata.word_count}",
        ]
        if metadata.author:
            lines.append(f"- **Author**: {metadata.author}")
        lines.extend(["", "---"])
        return "\n".join(lines)

    def render_element(self, element: Element) -> str:
        if isinstance(element, Heading):
            return f"{'#' * element.level} {element.display_text}"
        if isinstance(element, Paragraph):
            return emphasize(element.text, element.formatting)
        if isinstance(element, ListGroup):
            return self._list(element)
        if isinstance(element, TableData):
            return self._table(element)
        if isinstance(element, ImageReference):
            return self._image(element)
        raise TypeError(f"Unsupported element: {type(element).__name__}")

    @staticmethod
    def _image(image: ImageReference) -> str:
        width, height = emu_to_pixels(image.width_emu), emu_to_pixels(image.height_emu)
        dimensions = f" <!-- {width}x{height} -->" if width and height else ""
        return f"![{image.caption or ''}]({image.identifier}){dimensions}"

    @staticmethod
    def _list(group: ListGroup) -> str:
        lines = []
        # columns[k] is where the text of the latest level-k item starts
        columns: List[int] = []
        for item, ordinal in zip(group.items, item_ordinals(group.items)):
            marker = "-" if item.marker is MarkerKind.BULLET else f"{ordinal}."
            del columns[item.level:]
            while len(columns) < item.level:
                columns.append((columns[-1] if columns else 0) + 2)
            indent = columns[-1] if columns else 0
            lines.append(f"{' ' * indent}{marker} {item.text}")
            columns.append(indent + len(marker) + 1)
        return "\n".join(lines)

    @staticmethod
    def _row(row: TableRow) -> str:
        return "| " + " | ".join(escape_cell(cell.text) for cell in row.cells) + " |"

    def _table(self, table: TableData) -> str:
        metadata = table.metadata
        if metadata.column_count == 0:
            return ""
        header = table.header
        if header is not None:
            lines = [self._row(header)]
        else:
            lines = ["|" + "|".join("   " for _ in range(metadata.column_count)) + "|"]
        lines.append("| " + " | ".join(_ALIGNMENT_ROW[alignment] for alignment in metadata.alignments) + " |")
        lines.extend(self._row(row) for row in table.body)
        return "\n".join(lines)
