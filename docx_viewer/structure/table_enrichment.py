"""Type inference, header detection and layout for raw table grids."""
from __future__ import annotations

import re
from collections import Counter
from typing import List, Optional, Sequence

from docx_viewer.model.content import (
    PLAIN,
    Alignment,
    DataType,
    TableCell,
    TableData,
    TableMetadata,
    TableRow,
    TextFormatting,
)
from docx_viewer.utils.errors import check_limit
from docx_viewer.utils.logger import get_logger
from docx_viewer.utils.settings import DEFAULT_SETTINGS, EngineSettings
from docx_viewer.utils.unicode_text import collapse_whitespace, display_width

LOGGER = get_logger(__name__)

_AMOUNT = r"(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?"
_CURRENCY_RE = re.compile(r"^[-+]?[$€£¥₹]\s?" + _AMOUNT + r"$")
_PERCENT_RE = re.compile(r"^[-+]?" + _AMOUNT + r"\s?%$")
_NUMBER_RE = re.compile(r"^[-+]?(?:" + _AMOUNT + r"|\.\d+)$")
_MONTHS = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?"
_DATE_RES = (
    re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$"),
    re.compile(r"^\d{4}/\d{1,2}/\d{1,2}$"),
    re.compile(r"^\d{1,2}[/.-]\d{1,2}[/.-]\d{2,4}$"),
    re.compile(r"^\d{1,2}\s+" + _MONTHS + r",?\s+\d{4}$", re.IGNORECASE),
    re.compile(r"^" + _MONTHS + r"\s+\d{1,2},?\s+\d{4}$", re.IGNORECASE),
)
_BOOLEANS = {"true", "false", "yes", "no", "y", "n"}

_NUMERIC_TYPES = {DataType.NUMBER, DataType.CURRENCY, DataType.PERCENTAGE}
_HEADER_PUNCTUATION = (".", ",", ";", ":", "!", "?")
_HEADER_VOCABULARY = {
    "name", "date", "amount", "type", "status", "id", "description", "count",
    "total", "price", "qty", "quantity", "value", "title", "category", "item",
}

_ALIGNMENT_BY_TYPE = {
    DataType.NUMBER: Alignment.RIGHT,
    DataType.CURRENCY: Alignment.RIGHT,
    DataType.PERCENTAGE: Alignment.RIGHT,
    DataType.BOOLEAN: Alignment.CENTER,
}


def classify_cell(text: str) -> DataType:
    """Classify cell text; the first matching pattern wins."""
    value = text.strip()
    if not value:
        return DataType.EMPTY
    if _CURRENCY_RE.match(value):
        return DataType.CURRENCY
    if _PERCENT_RE.match(value):
        return DataType.PERCENTAGE
    if value.lower() in _BOOLEANS:
        return DataType.BOOLEAN
    if any(pattern.match(value) for pattern in _DATE_RES):
        return DataType.DATE
    if _NUMBER_RE.match(value):
        return DataType.NUMBER
    return DataType.TEXT


def alignment_for(data_type: DataType) -> Alignment:
    return _ALIGNMENT_BY_TYPE.get(data_type, Alignment.LEFT)


def _majority(count: int, total: int) -> bool:
    return total > 0 and count * 2 > total


def column_type(values: Sequence[str]) -> DataType:
    """Strict-majority type over the non-empty cells; ties and no majority give text."""
    types = [classify_cell(value) for value in values]
    typed = [value for value in types if value is not DataType.EMPTY]
    if not typed:
        return DataType.TEXT
    best, count = Counter(typed).most_common(1)[0]
    return best if _majority(count, len(typed)) else DataType.TEXT


class TableEnricher:
    """Turns a raw, possibly ragged text grid into :class:`TableData`."""

    def __init__(self, settings: Optional[EngineSettings] = None) -> None:
        self._settings = settings or DEFAULT_SETTINGS

    def enrich(self, grid: Sequence[Sequence[str]], formatting: TextFormatting = PLAIN) -> TableData:
        column_count = max((len(row) for row in grid), default=0)
        check_limit("max_table_cells", self._settings.max_table_cells, column_count * len(grid))
        rows = [list(row) + [""] * (column_count - len(row)) for row in grid]

        has_header = self.detect_header(rows)
        body = rows[1:] if has_header else rows
        column_types = [column_type([row[col] for row in body]) for col in range(column_count)]

        enriched: List[TableRow] = []
        for index, row in enumerate(rows):
            if has_header and index == 0:
                cells = tuple(TableCell(text, DataType.EMPTY if not text.strip() else DataType.TEXT) for text in row)
            else:
                cells = tuple(TableCell(text, classify_cell(text)) for text in row)
            enriched.append(TableRow(cells))

        metadata = TableMetadata(
            column_count=column_count,
            row_count=len(rows),
            has_header=has_header,
            alignments=tuple(alignment_for(value) for value in column_types),
            widths=tuple(self._column_width(rows, col) for col in range(column_count)),
            column_types=tuple(column_types),
        )
        LOGGER.debug(
            "Enriched table %dx%d (header=%s, types=%s)",
            len(rows), column_count, has_header, [value.value for value in column_types],
        )
        return TableData(rows=tuple(enriched), metadata=metadata, formatting=formatting)

    def _column_width(self, rows: Sequence[Sequence[str]], col: int) -> int:
        widest = max((display_width(collapse_whitespace(row[col])) for row in rows), default=0)
        return max(self._settings.min_column_width, min(widest, self._settings.max_column_width))

    # ------------------------------------------------------------------
    # Header detection
    def detect_header(self, rows: Sequence[Sequence[str]]) -> bool:
        """Decide whether the first row labels the columns."""
        if len(rows) < 2:
            return False
        first_types = [classify_cell(text) for text in rows[0]]
        first_typed = [value for value in first_types if value is not DataType.EMPTY]
        if not first_typed:
            return False

        second_typed = [value for value in map(classify_cell, rows[1]) if value is not DataType.EMPTY]
        first_textual = sum(1 for value in first_typed if value not in _NUMERIC_TYPES)
        second_numeric = sum(1 for value in second_typed if value in _NUMERIC_TYPES)
        if _majority(first_textual, len(first_typed)) and _majority(second_numeric, len(second_typed)):
            return True
        return self._looks_like_label_row(rows[0], first_types, rows[1:])

    def _looks_like_label_row(self, header: Sequence[str], header_types: Sequence[DataType], body: Sequence[Sequence[str]]) -> bool:
        settings = self._settings
        if sum(1 for value in header_types if value is DataType.EMPTY) > 1:
            return False
        labels = [text.strip() for text in header if text.strip()]
        for label, data_type in zip(header, header_types):
            label = label.strip()
            if not label:
                continue
            if data_type is not DataType.TEXT:
                return False
            if len(label) > settings.header_max_length or len(label.split()) > settings.header_max_words:
                return False
            if label.endswith(_HEADER_PUNCTUATION):
                return False

        body_types = [column_type([row[col] for row in body]) for col in range(len(header))]
        if any(header_types[col] is DataType.TEXT and body_types[col] is not DataType.TEXT for col in range(len(header))):
            return True

        vocabulary_hits = sum(
            1 for label in labels if any(word in _HEADER_VOCABULARY for word in re.findall(r"\w+", label.casefold()))
        )
        if _majority(vocabulary_hits, len(labels)):
            return True

        body_cased = [text for row in body for text in row if any(char.isalpha() for char in text)]
        header_caps = all(label.isupper() for label in labels)
        return header_caps and bool(body_cased) and not all(text.isupper() for text in body_cased)
