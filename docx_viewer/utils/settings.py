"""Tunable thresholds shared by the normalization, enrichment and search engines."""
from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Heuristic thresholds and defensive size bounds.

    The defaults are deliberately conservative: structure that cannot be
    inferred with confidence is left as plain paragraphs or text columns.
    """

    # List grouping
    max_blank_list_gap: int = 1
    list_indent_unit: int = 2

    # Heuristic heading noise filter
    heading_min_length: int = 4
    heading_max_length: int = 80
    heading_repeat_limit: int = 2

    # Table header detection and layout
    header_max_length: int = 40
    header_max_words: int = 4
    min_column_width: int = 3
    max_column_width: int = 40

    # Search context window, in characters on each side of a match
    search_context_chars: int = 40

    # Resource bounds
    max_elements: int = 200_000
    max_table_cells: int = 250_000
    max_package_bytes: int = 256 * 1024 * 1024

    def with_overrides(self, **overrides: int) -> "EngineSettings":
        """Return a copy with the given fields replaced."""
        return replace(self, **overrides)


DEFAULT_SETTINGS = EngineSettings()
