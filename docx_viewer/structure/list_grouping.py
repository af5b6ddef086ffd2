"""Merge consecutive list candidates into list groups."""
from __future__ import annotations

from typing import List, Optional, Sequence, Union

from docx_viewer.model.content import ListGroup, ListItem
from docx_viewer.structure.intake import IntakeItem, ListItemCandidate, ParagraphItem, shared_formatting
from docx_viewer.utils.logger import get_logger
from docx_viewer.utils.settings import DEFAULT_SETTINGS, EngineSettings

LOGGER = get_logger(__name__)

GroupedItem = Union[IntakeItem, ListGroup]


def _same_origin(previous: ListItemCandidate, current: ListItemCandidate) -> bool:
    if previous.native != current.native:
        return False
    return not current.native or previous.list_id == current.list_id


def clamp_levels(levels: Sequence[int]) -> List[int]:
    """Clamp each level to at most one deeper than its predecessor.

    The first level is measured against a virtual level-0 predecessor.
    """
    clamped: List[int] = []
    previous = 0
    for level in levels:
        level = max(0, min(level, previous + 1))
        clamped.append(level)
        previous = level
    return clamped


class ListGroupingEngine:
    """Groups list-item candidates, bridging short runs of blank paragraphs."""

    def __init__(self, settings: Optional[EngineSettings] = None) -> None:
        self._settings = settings or DEFAULT_SETTINGS

    def group(self, items: Sequence[IntakeItem]) -> List[GroupedItem]:
        result: List[GroupedItem] = []
        current: List[ListItemCandidate] = []
        blanks: List[ParagraphItem] = []

        def flush() -> None:
            if current:
                result.append(self._build_group(current))
                current.clear()
            result.extend(blanks)
            blanks.clear()

        for item in items:
            if isinstance(item, ListItemCandidate):
                if current and not _same_origin(current[-1], item):
                    flush()
                # Blank separators inside a list are discarded
                blanks.clear()
                current.append(item)
            elif isinstance(item, ParagraphItem) and item.is_blank and current:
                blanks.append(item)
                if len(blanks) > self._settings.max_blank_list_gap:
                    flush()
            else:
                flush()
                result.append(item)
        flush()
        return result

    @staticmethod
    def _build_group(candidates: Sequence[ListItemCandidate]) -> ListGroup:
        levels = clamp_levels([candidate.level for candidate in candidates])
        items = tuple(
            ListItem(text=candidate.text, level=level, marker=candidate.marker)
            for candidate, level in zip(candidates, levels)
        )
        LOGGER.debug("Grouped %d list items", len(items))
        return ListGroup(
            items=items,
            native=candidates[0].native,
            formatting=shared_formatting(candidate.formatting for candidate in candidates),
        )
