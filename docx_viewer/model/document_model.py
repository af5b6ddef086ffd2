"""Aggregate model handed to renderers, exporters and search."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from docx_viewer.model.content import Element


@dataclass(frozen=True, slots=True)
class DocumentMetadata:
    file_path: str = ""
    file_size: int = 0
    word_count: int = 0
    page_count: int = 0
    author: Optional[str] = None
    created: Optional[str] = None
    modified: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Document:
    """Immutable, normalized document representation."""

    title: str
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)
    elements: Tuple[Element, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.elements
