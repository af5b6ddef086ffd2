"""Pre-formatted display lines for the interactive viewer."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple

from docx_viewer.model.content import Element, Heading, ImageReference, ListGroup, Paragraph, TableData
from docx_viewer.model.document_model import Document
from docx_viewer.renderer.utils import boxed_table_lines, item_ordinals, list_marker
from docx_viewer.utils.unicode_text import display_width

HEADING_PREFIXES = ("■ ", "  ▶ ", "    ◦ ", "      • ")
HEADING_UNDERLINES = {1: "═", 2: "─"}
LIST_INDENT = "  "


@dataclass(frozen=True, slots=True)
class DisplayLine:
    text: str
    element_index: int


class DisplayLines:
    """Lazy line sequence; every iteration re-renders from the start."""

    def __init__(self, document: Document) -> None:
        self._document = document

    def __iter__(self) -> Iterator[str]:
        for line in self.with_index():
            yield line.text

    def with_index(self) -> Iterator[DisplayLine]:
        for index, element in enumerate(self._document.elements):
            for text in render_element(element):
                yield DisplayLine(text, index)
            yield DisplayLine("", index)

    def element_index_map(self) -> List[int]:
        """Element index for every line, parallel to the line sequence."""
        return [line.element_index for line in self.with_index()]


def heading_lines(heading: Heading) -> List[str]:
    prefix = HEADING_PREFIXES[min(heading.level, len(HEADING_PREFIXES)) - 1]
    line = prefix + heading.display_text
    lines = [line]
    underline = HEADING_UNDERLINES.get(heading.level)
    if underline:
        lines.append(underline * display_width(line))
    return lines


def list_lines(group: ListGroup) -> List[str]:
    ordinals = item_ordinals(group.items)
    return [
        LIST_INDENT * item.level + list_marker(item.marker, ordinal) + " " + item.text
        for item, ordinal in zip(group.items, ordinals)
    ]


def render_element(element: Element) -> List[str]:
    if isinstance(element, Heading):
        return heading_lines(element)
    if isinstance(element, Paragraph):
        return element.text.split("\n")
    if isinstance(element, ListGroup):
        return list_lines(element)
    if isinstance(element, TableData):
        return boxed_table_lines(element)
    if isinstance(element, ImageReference):
        return [f"[Image: {element.caption or element.identifier}]"]
    raise TypeError(f"Unsupported element: {type(element).__name__}")


class DisplayRenderer:
    """Produce the display view of a document."""

    def render(self, document: Document) -> DisplayLines:
        return DisplayLines(document)

    def render_with_index(self, document: Document) -> Tuple[List[str], List[int]]:
        """Materialize lines together with the line to element index."""
        lines = DisplayLines(document)
        pairs = list(lines.with_index())
        return [pair.text for pair in pairs], [pair.element_index for pair in pairs]
