"""Extract style definitions from styles.xml and produce a catalog."""
from __future__ import annotations

from dataclasses import replace
from typing import Dict, Optional
from xml.etree import ElementTree as ET

from docx_viewer.model.style_model import StyleDefinition, StylesCatalog
from docx_viewer.utils.logger import get_logger
from docx_viewer.utils.xml_utils import Namespaces, get_attr, get_int_attr, qualify

LOGGER = get_logger(__name__)


class StylesParser:
    """Parse Word styles and resolve inheritance of the structural attributes."""

    def __init__(self, styles_xml: Optional[ET.ElementTree]) -> None:
        self._styles_xml = styles_xml

    def parse(self) -> StylesCatalog:
        """Parse the XML tree and return a resolved catalog."""
        if self._styles_xml is None:
            LOGGER.warning("styles.xml missing; style-based detection disabled")
            return StylesCatalog({})
        raw_styles = self._collect_styles()
        return StylesCatalog(self._resolve_inheritance(raw_styles))

    def _collect_styles(self) -> Dict[str, StyleDefinition]:
        styles: Dict[str, StyleDefinition] = {}
        for style_el in self._styles_xml.getroot().findall("w:style", Namespaces.WORD):
            style_id = style_el.attrib.get(qualify("w:styleId"))
            if not style_id:
                continue
            p_pr = style_el.find("w:pPr", Namespaces.WORD)
            num_pr = p_pr.find("w:numPr", Namespaces.WORD) if p_pr is not None else None
            styles[style_id] = StyleDefinition(
                style_id=style_id,
                style_type=style_el.attrib.get(qualify("w:type"), "paragraph"),
                name=get_attr(style_el, "w:name", "w:val"),
                based_on=get_attr(style_el, "w:basedOn", "w:val"),
                outline_level=get_int_attr(p_pr, "w:outlineLvl", "w:val"),
                num_id=get_int_attr(num_pr, "w:numId", "w:val"),
                num_level=get_int_attr(num_pr, "w:ilvl", "w:val"),
            )
        return styles

    def _resolve_inheritance(self, raw_styles: Dict[str, StyleDefinition]) -> Dict[str, StyleDefinition]:
        resolved: Dict[str, StyleDefinition] = {}

        def resolve(style_id: str, stack: list[str]) -> StyleDefinition:
            if style_id in resolved:
                return resolved[style_id]
            style = raw_styles[style_id]
            if style_id in stack or not style.based_on or style.based_on not in raw_styles:
                resolved[style_id] = style
                return style
            stack.append(style_id)
            parent = resolve(style.based_on, stack)
            stack.pop()
            merged = replace(
                style,
                outline_level=style.outline_level if style.outline_level is not None else parent.outline_level,
                num_id=style.num_id if style.num_id is not None else parent.num_id,
                num_level=style.num_level if style.num_level is not None else parent.num_level,
            )
            resolved[style_id] = merged
            return merged

        for style_id in raw_styles:
            resolve(style_id, [])
        return resolved
