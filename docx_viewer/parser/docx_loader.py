"""DOCX package loader responsible for unpacking the XML parts the viewer reads."""
from __future__ import annotations

import posixpath
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional
from xml.etree import ElementTree as ET

from docx_viewer.utils.errors import check_limit
from docx_viewer.utils.logger import get_logger
from docx_viewer.utils.settings import DEFAULT_SETTINGS
from docx_viewer.utils.xml_utils import Namespaces, parse_xml

LOGGER = get_logger(__name__)

DOCUMENT_XML_PATH = "word/document.xml"
STYLES_XML_PATH = "word/styles.xml"
NUMBERING_XML_PATH = "word/numbering.xml"
DOCUMENT_RELS_PATH = "word/_rels/document.xml.rels"
CORE_PROPS_PATH = "docProps/core.xml"


@dataclass(slots=True)
class DocxPackage:
    """Container for the XML parts extracted from a DOCX archive."""

    raw_parts: Mapping[str, bytes]
    xml_cache: Dict[str, ET.ElementTree] = field(default_factory=dict)
    document_relationships: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls, docx_path: Path, max_bytes: int = DEFAULT_SETTINGS.max_package_bytes) -> "DocxPackage":
        """Open a DOCX archive, refusing archives that inflate beyond ``max_bytes``."""
        with zipfile.ZipFile(docx_path) as docx_zip:
            infos = docx_zip.infolist()
            check_limit("max_package_bytes", max_bytes, sum(info.file_size for info in infos))
            parts = {info.filename: docx_zip.read(info.filename) for info in infos}

        LOGGER.debug("Loaded %d parts from %s", len(parts), Path(docx_path).name)
        return cls.from_parts(parts)

    @classmethod
    def from_parts(cls, parts: Mapping[str, bytes]) -> "DocxPackage":
        package = cls(raw_parts=dict(parts))
        package.document_relationships = package._parse_document_relationships()
        return package

    # ------------------------------------------------------------------
    # Public helpers
    def require_document_xml(self) -> ET.ElementTree:
        tree = self.get_xml_part(DOCUMENT_XML_PATH)
        if tree is None:
            raise KeyError(f"Required DOCX part missing: {DOCUMENT_XML_PATH}")
        return tree

    def get_styles_xml(self) -> Optional[ET.ElementTree]:
        return self.get_xml_part(STYLES_XML_PATH)

    def get_numbering_xml(self) -> Optional[ET.ElementTree]:
        return self.get_xml_part(NUMBERING_XML_PATH)

    def get_core_properties_xml(self) -> Optional[ET.ElementTree]:
        return self.get_xml_part(CORE_PROPS_PATH)

    def resolve_target(self, r_id: str) -> Optional[str]:
        """Package path of a relationship declared by the main document part."""
        return self.document_relationships.get(r_id)

    def get_xml_part(self, name: str) -> Optional[ET.ElementTree]:
        if name in self.xml_cache:
            return self.xml_cache[name]
        data = self.raw_parts.get(name)
        if data is None:
            return None
        tree = parse_xml(data)
        self.xml_cache[name] = tree
        return tree

    # ------------------------------------------------------------------
    def _parse_document_relationships(self) -> Dict[str, str]:
        tree = self.get_xml_part(DOCUMENT_RELS_PATH)
        if tree is None:
            return {}
        base_dir = posixpath.dirname(DOCUMENT_XML_PATH)
        targets: Dict[str, str] = {}
        for rel_el in tree.getroot().findall("rel:Relationship", Namespaces.RELS):
            r_id = rel_el.attrib.get("Id")
            target = rel_el.attrib.get("Target")
            if not r_id or not target:
                continue
            if rel_el.attrib.get("TargetMode") == "External":
                targets[r_id] = target
            else:
                targets[r_id] = posixpath.normpath(posixpath.join(base_dir, target))
        return targets
