"""Dispatch a document to the requested export format."""
from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Union

from docx_viewer.model.document_model import Document
from docx_viewer.renderer.csv_renderer import CsvRenderer
from docx_viewer.renderer.json_renderer import JsonRenderer
from docx_viewer.renderer.markdown_renderer import MarkdownRenderer
from docx_viewer.renderer.text_renderer import TextRenderer
from docx_viewer.utils.logger import get_logger

LOGGER = get_logger(__name__)


class ExportFormat(str, Enum):
    MARKDOWN = "markdown"
    TEXT = "text"
    CSV = "csv"
    JSON = "json"

    @property
    def suffix(self) -> str:
        return {"markdown": ".md", "text": ".txt", "csv": ".csv", "json": ".json"}[self.value]


def export_document(document: Document, export_format: Union[ExportFormat, str]) -> str:
    """Serialize ``document``; an empty document yields an empty but valid artifact."""
    export_format = ExportFormat(export_format)
    if export_format is ExportFormat.MARKDOWN:
        return MarkdownRenderer().render(document)
    if export_format is ExportFormat.TEXT:
        return TextRenderer().render(document)
    if export_format is ExportFormat.CSV:
        return CsvRenderer().render(document)
    return JsonRenderer().render(document)


def write_export(document: Document, export_format: Union[ExportFormat, str], output_path: Path) -> Path:
    export_format = ExportFormat(export_format)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(export_document(document, export_format), encoding="utf-8")
    LOGGER.info("Wrote %s export to %s", export_format.value, output_path)
    return output_path
