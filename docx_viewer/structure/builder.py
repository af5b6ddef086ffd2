"""Assemble the immutable Document from a raw tree."""
from __future__ import annotations

import math
from typing import List, Optional

from docx_viewer.model.content import (
    Element,
    Heading,
    HeadingSource,
    ImageReference,
    ListGroup,
    Paragraph,
)
from docx_viewer.model.document_model import Document, DocumentMetadata
from docx_viewer.model.elements import DocumentTree
from docx_viewer.structure.heading_numbering import HeadingNumberTracker
from docx_viewer.structure.intake import HeadingCandidate, ImageItem, IntakeAdapter, ParagraphItem, RawTable
from docx_viewer.structure.list_grouping import ListGroupingEngine
from docx_viewer.structure.table_enrichment import TableEnricher
from docx_viewer.utils.errors import check_limit
from docx_viewer.utils.logger import get_logger
from docx_viewer.utils.settings import DEFAULT_SETTINGS, EngineSettings

LOGGER = get_logger(__name__)

WORDS_PER_PAGE = 250


def estimate_page_count(word_count: int) -> int:
    return math.ceil(word_count / WORDS_PER_PAGE)


class DocumentBuilder:
    """Runs intake, numbering, list grouping and table enrichment in order."""

    def __init__(self, settings: Optional[EngineSettings] = None) -> None:
        self._settings = settings or DEFAULT_SETTINGS

    def build(
        self,
        tree: DocumentTree,
        title: Optional[str] = None,
        file_path: str = "",
        file_size: int = 0,
    ) -> Document:
        intake = IntakeAdapter(self._settings).adapt(tree)
        grouped = ListGroupingEngine(self._settings).group(intake.items)
        tracker = HeadingNumberTracker()
        enricher = TableEnricher(self._settings)

        elements: List[Element] = []
        for item in grouped:
            if isinstance(item, HeadingCandidate):
                number = item.number
                # Heuristic headings and manually numbered headings leave the counters alone
                if number is None and item.source is not HeadingSource.TEXT:
                    number = tracker.next_number(item.level)
                elements.append(Heading(item.level, item.text, number, item.source, item.formatting))
            elif isinstance(item, ParagraphItem):
                if not item.is_blank:
                    elements.append(Paragraph(item.text, item.formatting))
            elif isinstance(item, ListGroup):
                elements.append(item)
            elif isinstance(item, RawTable):
                elements.append(enricher.enrich(item.grid))
            elif isinstance(item, ImageItem):
                elements.append(ImageReference(item.identifier, item.caption, item.width_emu, item.height_emu))
            else:
                LOGGER.debug("Dropping list candidate outside a group: %r", item)

        check_limit("max_elements", self._settings.max_elements, len(elements))
        properties = tree.properties
        metadata = DocumentMetadata(
            file_path=file_path,
            file_size=file_size,
            word_count=intake.word_count,
            page_count=estimate_page_count(intake.word_count),
            author=properties.author,
            created=properties.created,
            modified=properties.modified,
        )
        document = Document(
            title=title or properties.title or "Untitled",
            metadata=metadata,
            elements=tuple(elements),
        )
        LOGGER.info("Built document with %d elements (%d words)", len(elements), intake.word_count)
        return document
