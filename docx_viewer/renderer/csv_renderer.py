"""Delimited-data export of document tables."""
from __future__ import annotations

import csv
import io
import re
from typing import List

from docx_viewer.model.content import TableData
from docx_viewer.model.document_model import Document

_LINE_BREAK_RE = re.compile(r"\r\n?")


class CsvRenderer:
    """Emit every table as a CSV record set, separated by a blank line."""

    def __init__(self, delimiter: str = ",") -> None:
        self._delimiter = delimiter

    def render(self, document: Document) -> str:
        blocks: List[str] = []
        for element in document.elements:
            if isinstance(element, TableData) and element.metadata.column_count:
                blocks.append(self.render_table(element))
        return "\n".join(blocks)

    def render_table(self, table: TableData) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, delimiter=self._delimiter, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
        for row in table.rows:
            # A bare carriage return is not quoted against a "\n" terminator
            writer.writerow(_LINE_BREAK_RE.sub("\n", cell.text) for cell in row.cells)
        return buffer.getvalue()
