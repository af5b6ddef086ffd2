"""Substring search over document text with boundary-safe context windows."""
from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from docx_viewer.model.content import Heading, ImageReference, ListGroup, Paragraph, TableData
from docx_viewer.model.document_model import Document
from docx_viewer.utils.settings import DEFAULT_SETTINGS, EngineSettings
from docx_viewer.utils.unicode_text import ELLIPSIS, snap_backward, snap_forward, utf8_offset


@dataclass(frozen=True, slots=True)
class SearchResult:
    """One match; byte offsets index the UTF-8 encoding of ``text``."""

    element_index: int
    text: str
    start: int
    end: int
    start_byte: int
    end_byte: int
    context: str
    item_index: Optional[int] = None
    row: Optional[int] = None
    column: Optional[int] = None

    @property
    def matched_text(self) -> str:
        return self.text[self.start:self.end]


@dataclass(frozen=True, slots=True)
class _TextField:
    element_index: int
    text: str
    item_index: Optional[int] = None
    row: Optional[int] = None
    column: Optional[int] = None


def fold_case(text: str) -> Tuple[str, List[int]]:
    """Case-fold ``text`` per character, returning the folded text and an index map.

    ``index_map[i]`` is the position in ``text`` of the character that produced
    folded position ``i``; one extra entry maps the end of the string.
    """
    parts: List[str] = []
    index_map: List[int] = []
    for position, char in enumerate(text):
        folded = char.casefold()
        parts.append(folded)
        index_map.extend([position] * len(folded))
    index_map.append(len(text))
    return "".join(parts), index_map


def _iter_fields(document: Document) -> Iterator[_TextField]:
    for index, element in enumerate(document.elements):
        if isinstance(element, (Heading, Paragraph)):
            yield _TextField(index, element.text)
        elif isinstance(element, ListGroup):
            for item_index, item in enumerate(element.items):
                yield _TextField(index, item.text, item_index=item_index)
        elif isinstance(element, TableData):
            for row_index, row in enumerate(element.rows):
                for column_index, cell in enumerate(row.cells):
                    yield _TextField(index, cell.text, row=row_index, column=column_index)
        elif isinstance(element, ImageReference) and element.caption:
            yield _TextField(index, element.caption)


class SearchEngine:
    """Read-only search over a built document; results are in document order."""

    def __init__(self, document: Document, settings: Optional[EngineSettings] = None) -> None:
        self._document = document
        self._settings = settings or DEFAULT_SETTINGS

    def search(self, query: str, case_sensitive: bool = False) -> List[SearchResult]:
        if not query:
            return []
        results: List[SearchResult] = []
        for text_field in _iter_fields(self._document):
            results.extend(self._search_field(text_field, query, case_sensitive))
        return results

    def _search_field(self, text_field: _TextField, query: str, case_sensitive: bool) -> Iterator[SearchResult]:
        text = text_field.text
        if case_sensitive:
            haystack, needle = text, query
            index_map = list(range(len(text) + 1))
        else:
            haystack, index_map = fold_case(text)
            needle = fold_case(query)[0]
        if not needle:
            return

        position = haystack.find(needle)
        while position != -1:
            found_end = position + len(needle)
            start = snap_backward(text, index_map[position])
            end = snap_forward(text, index_map[found_end - 1] + 1)
            yield SearchResult(
                element_index=text_field.element_index,
                text=text,
                start=start,
                end=end,
                start_byte=utf8_offset(text, start),
                end_byte=utf8_offset(text, end),
                context=self._context(text, start, end),
                item_index=text_field.item_index,
                row=text_field.row,
                column=text_field.column,
            )
            # Folding may expand one character into several; resume past the reported range.
            position = haystack.find(needle, max(found_end, bisect.bisect_left(index_map, end)))

    def _context(self, text: str, start: int, end: int) -> str:
        budget = self._settings.search_context_chars
        window_start = snap_backward(text, start - budget)
        window_end = snap_forward(text, end + budget)
        prefix = ELLIPSIS if window_start > 0 else ""
        suffix = ELLIPSIS if window_end < len(text) else ""
        return prefix + text[window_start:window_end] + suffix


def search_document(
    document: Document,
    query: str,
    case_sensitive: bool = False,
    settings: Optional[EngineSettings] = None,
) -> List[SearchResult]:
    return SearchEngine(document, settings).search(query, case_sensitive)
