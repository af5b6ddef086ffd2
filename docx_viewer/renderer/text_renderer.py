"""Plain-text export with underlined headings and boxed tables."""
from __future__ import annotations

from typing import List

from docx_viewer.model.content import Heading, ImageReference, ListGroup, Paragraph, TableData
from docx_viewer.model.document_model import Document
from docx_viewer.renderer.utils import boxed_table_lines, item_ordinals, list_marker
from docx_viewer.utils.unicode_text import display_width

_UNDERLINES = {1: "=", 2: "-"}


class TextRenderer:
    def render(self, document: Document) -> str:
        if document.is_empty:
            return ""
        lines: List[str] = [document.title, "=" * display_width(document.title), ""]
        for element in document.elements:
            if isinstance(element, Heading):
                text = element.display_text
                lines.extend([text, _UNDERLINES.get(element.level, "~") * display_width(text)])
            elif isinstance(element, Paragraph):
                lines.append(element.text)
            elif isinstance(element, ListGroup):
                for item, ordinal in zip(element.items, item_ordinals(element.items)):
                    lines.append(f"{'  ' * item.level}{list_marker(item.marker, ordinal)} {item.text}")
            elif isinstance(element, TableData):
                lines.extend(boxed_table_lines(element))
            elif isinstance(element, ImageReference):
                lines.append(f"[Image: {element.caption or element.identifier}]")
            lines.append("")
        return "\n".join(lines)
