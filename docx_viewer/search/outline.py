"""Heading outline used for navigation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from docx_viewer.model.content import Heading
from docx_viewer.model.document_model import Document


@dataclass(frozen=True, slots=True)
class OutlineEntry:
    title: str
    level: int
    element_index: int


def generate_outline(document: Document) -> List[OutlineEntry]:
    return [
        OutlineEntry(element.display_text, element.level, index)
        for index, element in enumerate(document.elements)
        if isinstance(element, Heading)
    ]
