"""Helper functions to work with OpenXML namespaces and parsing."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional
from xml.etree import ElementTree as ET


@dataclass(frozen=True)
class Namespaces:
    """Common OpenXML namespace prefixes used across parsers."""

    WORD: Dict[str, str] = None  # type: ignore[assignment]
    RELS: Dict[str, str] = None  # type: ignore[assignment]
    DRAWING: Dict[str, str] = None  # type: ignore[assignment]
    CORE: Dict[str, str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:  # pragma: no cover
        raise RuntimeError("Namespaces should not be instantiated")


Namespaces.WORD = {  # type: ignore[attr-defined]
    "w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
    "r": "http://schemas.openxmlformats.org/officeDocument/2006/relationships",
}
Namespaces.RELS = {  # type: ignore[attr-defined]
    "rel": "http://schemas.openxmlformats.org/package/2006/relationships",
}
Namespaces.DRAWING = {  # type: ignore[attr-defined]
    "a": "http://schemas.openxmlformats.org/drawingml/2006/main",
    "wp": "http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing",
}
Namespaces.CORE = {  # type: ignore[attr-defined]
    "cp": "http://schemas.openxmlformats.org/package/2006/metadata/core-properties",
    "dc": "http://purl.org/dc/elements/1.1/",
    "dcterms": "http://purl.org/dc/terms/",
}


def parse_xml(data: bytes) -> ET.ElementTree:
    """Parse XML from raw bytes with sane defaults."""
    return ET.ElementTree(ET.fromstring(data))


def qualify(name: str, namespaces: Optional[Dict[str, str]] = None) -> str:
    """Expand ``prefix:local`` into Clark notation; bare names pass through."""
    if ":" not in name:
        return name
    prefix, local = name.split(":", 1)
    namespace = (namespaces or Namespaces.WORD)[prefix]
    return f"{{{namespace}}}{local}"


def local_name(tag: str) -> str:
    """Strip the namespace from a Clark-notation tag."""
    return tag.split("}", 1)[-1]


def find_text(element: ET.Element, xpath: str, namespaces: Optional[Dict[str, str]] = None) -> Optional[str]:
    """Return trimmed text from the first element that matches the xpath."""
    found = element.find(xpath, namespaces or {})
    if found is None or found.text is None:
        return None
    return found.text.strip() or None


def get_attr(element: Optional[ET.Element], child_name: Optional[str], attr_name: str) -> Optional[str]:
    """Read a WordprocessingML attribute from ``element`` or one of its children."""
    if element is None:
        return None
    target = element.find(child_name, Namespaces.WORD) if child_name else element
    if target is None:
        return None
    return target.attrib.get(qualify(attr_name))


def get_int_attr(element: Optional[ET.Element], child_name: Optional[str], attr_name: str) -> Optional[int]:
    """Integer variant of :func:`get_attr`; malformed values read as ``None``."""
    value = get_attr(element, child_name, attr_name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None
