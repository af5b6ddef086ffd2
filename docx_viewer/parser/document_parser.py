"""Parse document.xml into the raw paragraph/run/table tree."""
from __future__ import annotations

from typing import List, Optional
from xml.etree import ElementTree as ET

from docx_viewer.model.elements import (
    BlockElement,
    CoreProperties,
    DocumentTree,
    DrawingReference,
    NumberingInfo,
    ParagraphElement,
    RunFragment,
    TableCell,
    TableElement,
    TableRow,
)
from docx_viewer.model.numbering_model import NumberingCatalog
from docx_viewer.model.style_model import StylesCatalog
from docx_viewer.parser.docx_loader import DocxPackage
from docx_viewer.utils.logger import get_logger
from docx_viewer.utils.text_normalizer import TextNormalizer
from docx_viewer.utils.xml_utils import Namespaces, get_attr, get_int_attr, local_name

LOGGER = get_logger(__name__)

_FALSE_TOGGLES = {"0", "false", "off"}
_CONTAINER_TAGS = {"hyperlink", "ins", "smartTag", "fldSimple", "customXml"}


class DocumentParser:
    """Transforms Word body XML into raw block elements."""

    def __init__(
        self,
        package: DocxPackage,
        styles: StylesCatalog,
        numbering: NumberingCatalog,
        properties: Optional[CoreProperties] = None,
    ) -> None:
        self._package = package
        self._styles = styles
        self._numbering = numbering
        self._properties = properties or CoreProperties()
        self._normalizer = TextNormalizer(preserve_whitespace=True)

    def parse(self) -> DocumentTree:
        """Parse the document body into block elements in source order."""
        root = self._package.require_document_xml().getroot()
        body = root.find("w:body", Namespaces.WORD)
        if body is None:
            LOGGER.warning("document.xml missing body element")
            return DocumentTree(blocks=[], properties=self._properties)
        return DocumentTree(blocks=self._parse_blocks(body), properties=self._properties)

    def _parse_blocks(self, container: ET.Element) -> List[BlockElement]:
        blocks: List[BlockElement] = []
        for child in list(container):
            tag = local_name(child.tag)
            if tag == "p":
                blocks.append(self._parse_paragraph(child))
            elif tag == "tbl":
                blocks.append(self._parse_table(child))
            elif tag == "sdt":
                content = child.find("w:sdtContent", Namespaces.WORD)
                if content is not None:
                    blocks.extend(self._parse_blocks(content))
            elif tag in ("sectPr", "tcPr"):
                continue
            else:
                LOGGER.debug("Skipping unsupported element: %s", tag)
        return blocks

    # ------------------------------------------------------------------
    # Paragraphs and runs
    def _parse_paragraph(self, paragraph_el: ET.Element) -> ParagraphElement:
        p_pr = paragraph_el.find("w:pPr", Namespaces.WORD)
        style_id = get_attr(p_pr, "w:pStyle", "w:val")
        style = self._styles.get(style_id)
        outline_level = get_int_attr(p_pr, "w:outlineLvl", "w:val")
        if outline_level is None and style is not None:
            outline_level = style.outline_level
        return ParagraphElement(
            runs=self._collect_runs(paragraph_el),
            style_id=style_id,
            style_name=self._styles.name_of(style_id),
            outline_level=outline_level,
            numbering=self._extract_numbering_info(p_pr, style_id),
        )

    def _collect_runs(self, container: ET.Element) -> List[RunFragment]:
        runs: List[RunFragment] = []
        for child in list(container):
            tag = local_name(child.tag)
            if tag == "r":
                runs.extend(self._parse_run(child))
            elif tag in _CONTAINER_TAGS:
                runs.extend(self._collect_runs(child))
            elif tag in ("pPr", "del", "bookmarkStart", "bookmarkEnd", "proofErr", "moveFrom"):
                continue
            else:
                LOGGER.debug("Skipping paragraph child element: %s", tag)
        return runs

    def _parse_run(self, run_el: ET.Element) -> List[RunFragment]:
        """Parse a run, splitting it around embedded drawings."""
        fragments: List[RunFragment] = []
        template = self._run_formatting(run_el.find("w:rPr", Namespaces.WORD))
        text_parts: List[str] = []

        def flush() -> None:
            if text_parts:
                fragments.append(self._fragment(template, "".join(text_parts)))
                text_parts.clear()

        for child in list(run_el):
            tag = local_name(child.tag)
            if tag == "t":
                text_parts.append(self._normalizer.normalize_text(child.text or ""))
            elif tag == "tab":
                text_parts.append("\t")
            elif tag in ("br", "cr"):
                text_parts.append("\n")
            elif tag == "noBreakHyphen":
                text_parts.append("-")
            elif tag == "drawing":
                flush()
                drawing = self._parse_drawing(child)
                if drawing is not None:
                    fragment = self._fragment(template, "")
                    fragment.drawing = drawing
                    fragments.append(fragment)
            elif tag in ("rPr", "softHyphen", "lastRenderedPageBreak", "delText", "fldChar", "instrText"):
                continue
            else:
                LOGGER.debug("Skipping run child element: %s", tag)
        flush()
        return fragments

    def _run_formatting(self, r_pr: Optional[ET.Element]) -> RunFragment:
        if r_pr is None:
            return RunFragment(text="")
        underline = get_attr(r_pr, "w:u", "w:val")
        color = get_attr(r_pr, "w:color", "w:val")
        return RunFragment(
            text="",
            bold=self._is_on(r_pr, "w:b"),
            italic=self._is_on(r_pr, "w:i"),
            underline=r_pr.find("w:u", Namespaces.WORD) is not None and underline != "none",
            color=self._normalize_color(color),
        )

    @staticmethod
    def _fragment(template: RunFragment, text: str) -> RunFragment:
        return RunFragment(
            text=text,
            bold=template.bold,
            italic=template.italic,
            underline=template.underline,
            color=template.color,
        )

    @staticmethod
    def _is_on(r_pr: ET.Element, toggle: str) -> bool:
        element = r_pr.find(toggle, Namespaces.WORD)
        if element is None:
            return False
        value = get_attr(element, None, "w:val")
        return value is None or value.lower() not in _FALSE_TOGGLES

    @staticmethod
    def _normalize_color(value: Optional[str]) -> Optional[str]:
        if not value or value.lower() == "auto":
            return None
        value = value.lstrip("#")
        if len(value) != 6:
            return None
        try:
            int(value, 16)
        except ValueError:
            return None
        return f"#{value.upper()}"

    def _parse_drawing(self, drawing_el: ET.Element) -> Optional[DrawingReference]:
        """Extract the image reference of an inline or anchored drawing."""
        frame = drawing_el.find("wp:inline", Namespaces.DRAWING)
        if frame is None:
            frame = drawing_el.find("wp:anchor", Namespaces.DRAWING)
        if frame is None:
            return None

        blip = frame.find(".//a:blip", Namespaces.DRAWING)
        r_id = get_attr(blip, None, "r:embed") if blip is not None else None
        if not r_id:
            LOGGER.debug("Drawing without embedded image skipped")
            return None

        extent = frame.find("wp:extent", Namespaces.DRAWING)
        doc_pr = frame.find("wp:docPr", Namespaces.DRAWING)
        description = None
        if doc_pr is not None:
            description = doc_pr.attrib.get("descr") or doc_pr.attrib.get("title") or doc_pr.attrib.get("name")
        return DrawingReference(
            r_id=r_id,
            target=self._package.resolve_target(r_id),
            description=description,
            width_emu=self._int_or_none(extent.attrib.get("cx")) if extent is not None else None,
            height_emu=self._int_or_none(extent.attrib.get("cy")) if extent is not None else None,
        )

    @staticmethod
    def _int_or_none(value: Optional[str]) -> Optional[int]:
        try:
            return int(value) if value is not None else None
        except ValueError:
            return None

    # ------------------------------------------------------------------
    # Numbering
    def _extract_numbering_info(self, p_pr: Optional[ET.Element], style_id: Optional[str]) -> Optional[NumberingInfo]:
        """Resolve the paragraph's numbering reference, falling back to its style's."""
        num_pr = p_pr.find("w:numPr", Namespaces.WORD) if p_pr is not None else None
        if num_pr is not None:
            num_id = get_int_attr(num_pr, "w:numId", "w:val")
            level = get_int_attr(num_pr, "w:ilvl", "w:val")
            if num_id is None:
                LOGGER.debug("Ignoring numPr without a usable numId")
                return None
            if level is None:
                level = 0 if get_attr(num_pr, "w:ilvl", "w:val") is None else -1
        else:
            style = self._styles.get(style_id)
            if style is None or style.num_id is None:
                return None
            num_id, level = style.num_id, style.num_level or 0

        # numId 0 explicitly removes numbering
        if num_id == 0:
            return None
        if level < 0 or level > 8:
            LOGGER.debug("Ignoring numbering level %s for numId %s", level, num_id)
            return None

        instance = self._numbering.get_instance(num_id)
        abstract = self._numbering.get_abstract(instance.abstract_num_id) if instance else None
        level_def = self._numbering.resolve_level(num_id, level)
        return NumberingInfo(
            num_id=num_id,
            level=level,
            paragraph_style=self._styles.name_of(level_def.paragraph_style) if level_def else None,
            list_name=(abstract.name or abstract.style_link) if abstract else None,
        )

    # ------------------------------------------------------------------
    # Tables
    def _parse_table(self, table_el: ET.Element) -> TableElement:
        rows: List[TableRow] = []
        for row_el in table_el.findall("w:tr", Namespaces.WORD):
            cells: List[TableCell] = []
            for cell_el in self._iter_cells(row_el):
                tc_pr = cell_el.find("w:tcPr", Namespaces.WORD)
                span = get_int_attr(tc_pr, "w:gridSpan", "w:val") or 1
                cells.append(TableCell(paragraphs=self._cell_paragraphs(cell_el), grid_span=max(span, 1)))
            rows.append(TableRow(cells=cells))
        return TableElement(rows=rows)

    def _iter_cells(self, row_el: ET.Element) -> List[ET.Element]:
        cells: List[ET.Element] = []
        for child in list(row_el):
            tag = local_name(child.tag)
            if tag == "tc":
                cells.append(child)
            elif tag == "sdt":
                content = child.find("w:sdtContent", Namespaces.WORD)
                if content is not None:
                    cells.extend(self._iter_cells(content))
        return cells

    def _cell_paragraphs(self, cell_el: ET.Element) -> List[ParagraphElement]:
        paragraphs: List[ParagraphElement] = []
        for block in self._parse_blocks(cell_el):
            if isinstance(block, ParagraphElement):
                paragraphs.append(block)
            else:
                # Nested tables are flattened into the enclosing cell's text
                for row in block.rows:
                    for cell in row.cells:
                        paragraphs.extend(cell.paragraphs)
        return paragraphs
