"""Tests for document parser functionality."""
import unittest

from docx_viewer.model.elements import ParagraphElement, TableElement
from docx_viewer.model.numbering_model import (
    AbstractNumberingDefinition,
    NumberingCatalog,
    NumberingInstance,
    NumberingLevel,
)
from docx_viewer.model.style_model import StyleDefinition, StylesCatalog
from docx_viewer.parser.document_parser import DocumentParser
from docx_viewer.parser.docx_loader import DocxPackage

NS = (
    'xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main" '
    'xmlns:r="http://schemas.openxmlformats.org/officeDocument/2006/relationships" '
    'xmlns:wp="http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing" '
    'xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main"'
)

RELS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
  <Relationship Id="rId5" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/image" Target="media/image1.png"/>
</Relationships>
"""


def make_package(body: str) -> DocxPackage:
    xml = f"<w:document {NS}><w:body>{body}</w:body></w:document>"
    return DocxPackage.from_parts({
        "word/document.xml": xml.encode("utf-8"),
        "word/_rels/document.xml.rels": RELS_XML.encode("utf-8"),
    })


class DocumentParserTest(unittest.TestCase):
    """Test document parsing functionality."""

    def setUp(self) -> None:
        self.styles = StylesCatalog({
            "Heading1": StyleDefinition("Heading1", "paragraph", name="heading 1", outline_level=0),
            "ListPara": StyleDefinition("ListPara", "paragraph", name="List Paragraph", num_id=5, num_level=0),
        })
        self.numbering = NumberingCatalog(
            abstracts={
                1: AbstractNumberingDefinition(
                    abstract_num_id=1,
                    name="Bullets",
                    levels={
                        0: NumberingLevel(0),
                        1: NumberingLevel(1),
                    },
                ),
            },
            instances={5: NumberingInstance(num_id=5, abstract_num_id=1)},
        )

    def parse(self, body: str):
        return DocumentParser(make_package(body), self.styles, self.numbering).parse()

    def test_parse_basic_paragraph(self) -> None:
        tree = self.parse("<w:p><w:r><w:t>Hello World</w:t></w:r></w:p>")
        self.assertEqual(len(tree.blocks), 1)
        paragraph = tree.blocks[0]
        self.assertIsInstance(paragraph, ParagraphElement)
        self.assertEqual(len(paragraph.runs), 1)
        self.assertEqual(paragraph.text, "Hello World")

    def test_parse_paragraph_with_style(self) -> None:
        tree = self.parse(
            '<w:p><w:pPr><w:pStyle w:val="Heading1"/></w:pPr><w:r><w:t>Title</w:t></w:r></w:p>'
        )
        paragraph = tree.blocks[0]
        self.assertEqual(paragraph.style_id, "Heading1")
        self.assertEqual(paragraph.style_name, "heading 1")
        self.assertEqual(paragraph.outline_level, 0)

    def test_run_formatting(self) -> None:
        tree = self.parse(
            "<w:p><w:r><w:rPr><w:b/><w:i w:val=\"0\"/><w:u w:val=\"single\"/>"
            "<w:color w:val=\"ff0000\"/></w:rPr><w:t>Styled</w:t></w:r>"
            "<w:r><w:rPr><w:u w:val=\"none\"/><w:color w:val=\"auto\"/></w:rPr><w:t>plain</w:t></w:r></w:p>"
        )
        styled, plain = tree.blocks[0].runs
        self.assertTrue(styled.bold)
        self.assertFalse(styled.italic)
        self.assertTrue(styled.underline)
        self.assertEqual(styled.color, "#FF0000")
        self.assertFalse(plain.underline)
        self.assertIsNone(plain.color)

    def test_tabs_breaks_and_preserved_spaces(self) -> None:
        tree = self.parse(
            '<w:p><w:r><w:t xml:space="preserve">  - a</w:t><w:tab/><w:t>b</w:t><w:br/><w:t>c</w:t></w:r></w:p>'
        )
        self.assertEqual(tree.blocks[0].text, "  - a\tb\nc")

    def test_hyperlinks_included_and_deletions_skipped(self) -> None:
        tree = self.parse(
            "<w:p><w:r><w:t>see </w:t></w:r>"
            '<w:hyperlink r:id="rId9"><w:r><w:t>link</w:t></w:r></w:hyperlink>'
            "<w:del><w:r><w:delText>gone</w:delText></w:r></w:del>"
            "<w:ins><w:r><w:t> now</w:t></w:r></w:ins></w:p>"
        )
        self.assertEqual(tree.blocks[0].text, "see link now")

    def test_direct_numbering(self) -> None:
        tree = self.parse(
            '<w:p><w:pPr><w:numPr><w:ilvl w:val="1"/><w:numId w:val="5"/></w:numPr></w:pPr>'
            "<w:r><w:t>item</w:t></w:r></w:p>"
        )
        info = tree.blocks[0].numbering
        assert info
        self.assertEqual(info.num_id, 5)
        self.assertEqual(info.level, 1)
        self.assertEqual(info.list_name, "Bullets")

    def test_numbering_from_style(self) -> None:
        tree = self.parse(
            '<w:p><w:pPr><w:pStyle w:val="ListPara"/></w:pPr><w:r><w:t>item</w:t></w:r></w:p>'
        )
        info = tree.blocks[0].numbering
        assert info
        self.assertEqual((info.num_id, info.level), (5, 0))
        self.assertEqual(info.list_name, "Bullets")

    def test_num_id_zero_and_malformed_values_drop_numbering(self) -> None:
        tree = self.parse(
            '<w:p><w:pPr><w:numPr><w:ilvl w:val="0"/><w:numId w:val="0"/></w:numPr></w:pPr><w:r><w:t>a</w:t></w:r></w:p>'
            '<w:p><w:pPr><w:numPr><w:ilvl w:val="x"/><w:numId w:val="5"/></w:numPr></w:pPr><w:r><w:t>b</w:t></w:r></w:p>'
            '<w:p><w:pPr><w:numPr><w:ilvl w:val="0"/><w:numId w:val="bad"/></w:numPr></w:pPr><w:r><w:t>c</w:t></w:r></w:p>'
        )
        self.assertEqual([block.numbering for block in tree.blocks], [None, None, None])

    def test_unknown_numbering_instance_keeps_reference(self) -> None:
        tree = self.parse(
            '<w:p><w:pPr><w:numPr><w:ilvl w:val="0"/><w:numId w:val="42"/></w:numPr></w:pPr><w:r><w:t>a</w:t></w:r></w:p>'
        )
        info = tree.blocks[0].numbering
        assert info
        self.assertEqual(info.num_id, 42)
        self.assertIsNone(info.list_name)

    def test_table_with_grid_span_and_nested_table(self) -> None:
        tree = self.parse(
            "<w:tbl><w:tblPr><w:tblStyle w:val=\"Grid\"/></w:tblPr>"
            "<w:tr><w:tc><w:tcPr><w:gridSpan w:val=\"2\"/></w:tcPr><w:p><w:r><w:t>A</w:t></w:r></w:p></w:tc>"
            "<w:tc><w:p><w:r><w:t>B</w:t></w:r></w:p></w:tc></w:tr>"
            "<w:tr><w:tc><w:p><w:r><w:t>1</w:t></w:r></w:p></w:tc>"
            "<w:tc><w:tbl><w:tr><w:tc><w:p><w:r><w:t>inner</w:t></w:r></w:p></w:tc></w:tr></w:tbl></w:tc>"
            "<w:tc><w:p><w:r><w:t>3</w:t></w:r></w:p><w:p><w:r><w:t>more</w:t></w:r></w:p></w:tc></w:tr>"
            "</w:tbl>"
        )
        table = tree.blocks[0]
        self.assertIsInstance(table, TableElement)
        self.assertEqual(table.text_grid(), [["A", "", "B"], ["1", "inner", "3 more"]])

    def test_drawing_reference(self) -> None:
        tree = self.parse(
            "<w:p><w:r><w:t>Before</w:t><w:drawing><wp:inline>"
            '<wp:extent cx="914400" cy="457200"/><wp:docPr id="1" name="Picture 1" descr="Logo"/>'
            '<a:graphic><a:graphicData><a:blip r:embed="rId5"/></a:graphicData></a:graphic>'
            "</wp:inline></w:drawing></w:r></w:p>"
        )
        paragraph = tree.blocks[0]
        self.assertEqual(paragraph.text, "Before")
        self.assertEqual(len(paragraph.drawings), 1)
        drawing = paragraph.drawings[0]
        self.assertEqual(drawing.r_id, "rId5")
        self.assertEqual(drawing.target, "word/media/image1.png")
        self.assertEqual(drawing.description, "Logo")
        self.assertEqual((drawing.width_emu, drawing.height_emu), (914400, 457200))

    def test_content_controls_and_section_properties(self) -> None:
        tree = self.parse(
            "<w:sdt><w:sdtContent><w:p><w:r><w:t>inside</w:t></w:r></w:p></w:sdtContent></w:sdt>"
            "<w:sectPr/>"
        )
        self.assertEqual([block.text for block in tree.blocks], ["inside"])

    def test_missing_body(self) -> None:
        package = DocxPackage.from_parts({"word/document.xml": f"<w:document {NS}/>".encode("utf-8")})
        tree = DocumentParser(package, self.styles, self.numbering).parse()
        self.assertEqual(tree.blocks, [])

    def test_missing_document_part(self) -> None:
        package = DocxPackage.from_parts({})
        with self.assertRaises(KeyError):
            DocumentParser(package, self.styles, self.numbering).parse()


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
