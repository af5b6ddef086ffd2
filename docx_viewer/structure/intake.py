"""Flatten the raw paragraph/table tree into typed intake items."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union

from docx_viewer.model.content import PLAIN, HeadingSource, MarkerKind, TextFormatting
from docx_viewer.model.elements import DocumentTree, ParagraphElement, RunFragment, TableElement
from docx_viewer.structure.detectors import (
    HEADING_DETECTORS,
    detect_native_list,
    detect_text_heading,
    detect_text_list,
    has_meaningful_word,
    run_detectors,
    split_manual_number,
)
from docx_viewer.utils.errors import check_limit
from docx_viewer.utils.logger import get_logger
from docx_viewer.utils.settings import DEFAULT_SETTINGS, EngineSettings

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class HeadingCandidate:
    text: str
    level: int
    source: HeadingSource
    number: Optional[str] = None
    formatting: TextFormatting = PLAIN


@dataclass(frozen=True, slots=True)
class ParagraphItem:
    """Body paragraph; blank ones are kept so list grouping can bridge them."""

    text: str
    formatting: TextFormatting = PLAIN

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()


@dataclass(frozen=True, slots=True)
class ListItemCandidate:
    text: str
    level: int
    marker: MarkerKind
    native: bool
    list_id: Optional[int] = None
    formatting: TextFormatting = PLAIN


@dataclass(frozen=True, slots=True)
class RawTable:
    """Verbatim cell text grid; rows may be ragged."""

    grid: Tuple[Tuple[str, ...], ...]


@dataclass(frozen=True, slots=True)
class ImageItem:
    identifier: str
    caption: Optional[str] = None
    width_emu: Optional[int] = None
    height_emu: Optional[int] = None


IntakeItem = Union[HeadingCandidate, ParagraphItem, ListItemCandidate, RawTable, ImageItem]


@dataclass(slots=True)
class IntakeResult:
    items: List[IntakeItem] = field(default_factory=list)
    word_count: int = 0


def shared_formatting(formattings: Iterable[TextFormatting]) -> TextFormatting:
    """Formatting flags common to every input; color only when all agree."""
    values = list(formattings)
    if not values:
        return PLAIN
    colors = {value.color for value in values}
    return TextFormatting(
        bold=all(value.bold for value in values),
        italic=all(value.italic for value in values),
        underline=all(value.underline for value in values),
        color=colors.pop() if len(colors) == 1 else None,
    )


def run_formatting(runs: Iterable[RunFragment]) -> TextFormatting:
    visible = [
        TextFormatting(bold=run.bold, italic=run.italic, underline=run.underline, color=run.color)
        for run in runs
        if run.text.strip()
    ]
    return shared_formatting(visible)


class IntakeAdapter:
    """Walks the raw tree once and classifies every block."""

    def __init__(self, settings: Optional[EngineSettings] = None) -> None:
        self._settings = settings or DEFAULT_SETTINGS

    def adapt(self, tree: DocumentTree) -> IntakeResult:
        result = IntakeResult()
        for block in tree.blocks:
            if isinstance(block, TableElement):
                grid = tuple(tuple(row) for row in block.text_grid())
                if grid:
                    result.items.append(RawTable(grid))
                continue
            result.word_count += len(block.text.split())
            result.items.extend(self._paragraph_items(block))

        result.items = self._filter_heading_noise(result.items)
        check_limit("max_elements", self._settings.max_elements, len(result.items))
        LOGGER.debug("Intake produced %d items", len(result.items))
        return result

    def _paragraph_items(self, paragraph: ParagraphElement) -> List[IntakeItem]:
        items: List[IntakeItem] = []
        text = paragraph.text
        if text.strip():
            items.append(self._classify(paragraph, text))
        elif not paragraph.drawings:
            items.append(ParagraphItem(text=""))
        for drawing in paragraph.drawings:
            items.append(
                ImageItem(
                    identifier=drawing.target or drawing.r_id,
                    caption=drawing.description,
                    width_emu=drawing.width_emu,
                    height_emu=drawing.height_emu,
                )
            )
        return items

    def _classify(self, paragraph: ParagraphElement, text: str) -> IntakeItem:
        formatting = run_formatting(paragraph.runs)
        stripped = text.strip()

        match = run_detectors(paragraph, HEADING_DETECTORS)
        if match is not None:
            number, heading_text = split_manual_number(stripped)
            return HeadingCandidate(heading_text, match.level, match.source, number, formatting)

        native = detect_native_list(paragraph)
        if native is not None:
            return ListItemCandidate(
                native.text, native.level, native.marker, True, paragraph.numbering.num_id, formatting
            )

        heuristic = detect_text_list(text, self._settings.list_indent_unit)
        if heuristic is not None:
            return ListItemCandidate(heuristic.text, heuristic.level, heuristic.marker, False, None, formatting)

        guess = detect_text_heading(stripped, bold=formatting.bold)
        if guess is not None and self._passes_length_filter(stripped):
            return HeadingCandidate(stripped, guess.level, guess.source, None, formatting)

        return ParagraphItem(text=stripped, formatting=formatting)

    def _passes_length_filter(self, text: str) -> bool:
        settings = self._settings
        if not settings.heading_min_length <= len(text) <= settings.heading_max_length:
            return False
        return has_meaningful_word(text)

    def _filter_heading_noise(self, items: List[IntakeItem]) -> List[IntakeItem]:
        """Demote text-heuristic headings that repeat too often to be real headings."""
        counts = Counter(
            item.text.casefold()
            for item in items
            if isinstance(item, HeadingCandidate) and item.source is HeadingSource.TEXT
        )
        repeated = {text for text, count in counts.items() if count > self._settings.heading_repeat_limit}
        if not repeated:
            return items
        LOGGER.debug("Demoting %d repeated heuristic headings", len(repeated))
        filtered: List[IntakeItem] = []
        for item in items:
            if (
                isinstance(item, HeadingCandidate)
                and item.source is HeadingSource.TEXT
                and item.text.casefold() in repeated
            ):
                filtered.append(ParagraphItem(text=item.text, formatting=item.formatting))
            else:
                filtered.append(item)
        return filtered
