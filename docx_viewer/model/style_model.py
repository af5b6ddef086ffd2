"""Style model captures the Word style attributes structure inference needs."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional


@dataclass(slots=True)
class StyleDefinition:
    """Style information after resolving ``basedOn`` inheritance."""

    style_id: str
    style_type: str
    name: Optional[str] = None
    based_on: Optional[str] = None
    outline_level: Optional[int] = None
    num_id: Optional[int] = None
    num_level: Optional[int] = None


class StylesCatalog:
    """Collection of resolved styles keyed by identifier."""

    def __init__(self, styles: Mapping[str, StyleDefinition]):
        self._styles: Dict[str, StyleDefinition] = dict(styles)

    def get(self, style_id: Optional[str]) -> Optional[StyleDefinition]:
        """Return the resolved style definition given its identifier."""
        if style_id is None:
            return None
        return self._styles.get(style_id)

    def name_of(self, style_id: Optional[str]) -> Optional[str]:
        """Human-readable name of a style, falling back to its identifier."""
        style = self.get(style_id)
        if style is None:
            return style_id
        return style.name or style.style_id

    def __len__(self) -> int:
        return len(self._styles)
