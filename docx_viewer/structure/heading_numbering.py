"""Hierarchical heading number state machine."""
from __future__ import annotations

from typing import List, Tuple

from docx_viewer.structure.detectors import MAX_HEADING_LEVEL


class HeadingNumberTracker:
    """Per-level counters producing numbers like ``1``, ``1.1``, ``1.2``, ``2``.

    One tracker is created per document; there is no reset.
    """

    def __init__(self) -> None:
        self._counters: List[int] = [0] * MAX_HEADING_LEVEL

    @property
    def counters(self) -> Tuple[int, ...]:
        return tuple(self._counters)

    def next_number(self, level: int) -> str:
        """Advance the counter for ``level`` and return the dotted number."""
        if not 1 <= level <= MAX_HEADING_LEVEL:
            raise ValueError(f"heading level must be between 1 and {MAX_HEADING_LEVEL}, got {level}")
        index = level - 1
        self._counters[index] += 1
        for deeper in range(index + 1, MAX_HEADING_LEVEL):
            self._counters[deeper] = 0
        return ".".join(str(value) for value in self._counters[:level] if value)
