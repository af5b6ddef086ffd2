"""JSON export of the full document model."""
from __future__ import annotations

import json

from docx_viewer.model.document_model import Document
from docx_viewer.model.serialization import document_from_dict, document_to_dict


class JsonRenderer:
    def __init__(self, indent: int = 2) -> None:
        self._indent = indent

    def render(self, document: Document) -> str:
        return json.dumps(document_to_dict(document), indent=self._indent, ensure_ascii=False) + "\n"


def load_document_json(payload: str) -> Document:
    """Rebuild a document from :class:`JsonRenderer` output."""
    return document_from_dict(json.loads(payload))
