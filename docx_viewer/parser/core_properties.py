"""Read document metadata from docProps/core.xml."""
from __future__ import annotations

from typing import Optional
from xml.etree import ElementTree as ET

from docx_viewer.model.elements import CoreProperties
from docx_viewer.utils.xml_utils import Namespaces, find_text


class CorePropertiesParser:
    """Extract title, author and timestamps from the core properties part."""

    def __init__(self, core_xml: Optional[ET.ElementTree]) -> None:
        self._core_xml = core_xml

    def parse(self) -> CoreProperties:
        if self._core_xml is None:
            return CoreProperties()
        root = self._core_xml.getroot()
        return CoreProperties(
            title=find_text(root, "dc:title", Namespaces.CORE),
            author=find_text(root, "dc:creator", Namespaces.CORE),
            created=find_text(root, "dcterms:created", Namespaces.CORE),
            modified=find_text(root, "dcterms:modified", Namespaces.CORE),
        )
