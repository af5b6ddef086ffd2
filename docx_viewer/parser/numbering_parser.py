"""Parse numbering.xml into numbering model definitions."""
from __future__ import annotations

from typing import Dict, Optional
from xml.etree import ElementTree as ET

from docx_viewer.model.numbering_model import (
    AbstractNumberingDefinition,
    NumberingCatalog,
    NumberingInstance,
    NumberingLevel,
)
from docx_viewer.utils.xml_utils import Namespaces, get_attr, get_int_attr


class NumberingParser:
    """Parser for numbering definitions defined in numbering.xml."""

    def __init__(self, numbering_xml: Optional[ET.ElementTree]) -> None:
        self._numbering_xml = numbering_xml

    def parse(self) -> NumberingCatalog:
        if self._numbering_xml is None:
            return NumberingCatalog()

        root = self._numbering_xml.getroot()
        return NumberingCatalog(
            abstracts=self._parse_abstract_nums(root),
            instances=self._parse_nums(root),
        )

    # ------------------------------------------------------------------
    def _parse_abstract_nums(self, root: ET.Element) -> Dict[int, AbstractNumberingDefinition]:
        abstracts: Dict[int, AbstractNumberingDefinition] = {}
        for abstract_el in root.findall("w:abstractNum", Namespaces.WORD):
            abstract_id = get_int_attr(abstract_el, None, "w:abstractNumId")
            if abstract_id is None:
                continue
            abstracts[abstract_id] = AbstractNumberingDefinition(
                abstract_num_id=abstract_id,
                name=get_attr(abstract_el, "w:name", "w:val"),
                style_link=get_attr(abstract_el, "w:styleLink", "w:val"),
                levels=self._parse_levels(abstract_el),
            )
        return abstracts

    def _parse_levels(self, abstract_el: ET.Element) -> Dict[int, NumberingLevel]:
        levels: Dict[int, NumberingLevel] = {}
        for lvl_el in abstract_el.findall("w:lvl", Namespaces.WORD):
            level_index = get_int_attr(lvl_el, None, "w:ilvl")
            if level_index is None:
                continue
            levels[level_index] = NumberingLevel(
                level_index=level_index,
                paragraph_style=get_attr(lvl_el, "w:pStyle", "w:val"),
            )
        return levels

    def _parse_nums(self, root: ET.Element) -> Dict[int, NumberingInstance]:
        instances: Dict[int, NumberingInstance] = {}
        for num_el in root.findall("w:num", Namespaces.WORD):
            num_id = get_int_attr(num_el, None, "w:numId")
            abstract_num_id = get_int_attr(num_el, "w:abstractNumId", "w:val")
            if num_id is None or abstract_num_id is None:
                continue
            instances[num_id] = NumberingInstance(num_id=num_id, abstract_num_id=abstract_num_id)
        return instances
