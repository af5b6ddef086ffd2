"""Tests for numbering parser behavior."""
import unittest
from xml.etree import ElementTree as ET

from docx_viewer.parser.numbering_parser import NumberingParser


NUMBERING_XML = """
<w:numbering xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">
  <w:abstractNum w:abstractNumId="1">
    <w:multiLevelType w:val="multilevel"/>
    <w:name w:val="List Bullet"/>
    <w:lvl w:ilvl="0">
      <w:start w:val="1"/>
      <w:numFmt w:val="bullet"/>
      <w:lvlText w:val="•"/>
      <w:lvlJc w:val="left"/>
      <w:pPr>
        <w:ind w:left="720" w:hanging="360"/>
      </w:pPr>
    </w:lvl>
    <w:lvl w:ilvl="1">
      <w:start w:val="1"/>
      <w:numFmt w:val="decimal"/>
      <w:lvlText w:val="%2."/>
    </w:lvl>
  </w:abstractNum>
  <w:abstractNum w:abstractNumId="2">
    <w:styleLink w:val="HeadingNumbering"/>
    <w:lvl w:ilvl="0">
      <w:numFmt w:val="decimal"/>
      <w:pStyle w:val="Heading1"/>
    </w:lvl>
  </w:abstractNum>
  <w:abstractNum w:abstractNumId="oops"/>
  <w:num w:numId="5">
    <w:abstractNumId w:val="1"/>
    <w:lvlOverride w:ilvl="0">
      <w:startOverride w:val="3"/>
    </w:lvlOverride>
  </w:num>
  <w:num w:numId="6">
    <w:abstractNumId w:val="2"/>
  </w:num>
</w:numbering>
"""


class NumberingParserTest(unittest.TestCase):
    """Ensure numbering parser captures definitions correctly."""

    def setUp(self) -> None:
        self.tree = ET.ElementTree(ET.fromstring(NUMBERING_XML))
        self.catalog = NumberingParser(self.tree).parse()

    def test_abstracts_parsed(self) -> None:
        abstract = self.catalog.get_abstract(1)
        self.assertIsNotNone(abstract)
        assert abstract
        self.assertEqual(abstract.name, "List Bullet")
        self.assertIn(0, abstract.levels)
        level0 = abstract.levels[0]
        self.assertEqual(level0.level_index, 0)
        self.assertIsNone(level0.paragraph_style)

    def test_malformed_abstract_skipped(self) -> None:
        self.assertEqual(sorted(self.catalog.abstracts), [1, 2])

    def test_heading_link_recorded(self) -> None:
        abstract = self.catalog.get_abstract(2)
        assert abstract
        self.assertEqual(abstract.style_link, "HeadingNumbering")
        self.assertEqual(abstract.levels[0].paragraph_style, "Heading1")

    def test_instances(self) -> None:
        instance = self.catalog.get_instance(5)
        self.assertIsNotNone(instance)
        assert instance
        self.assertEqual(instance.abstract_num_id, 1)

    def test_resolve_level(self) -> None:
        level = self.catalog.resolve_level(5, 1)
        assert level
        self.assertEqual(level.level_index, 1)
        self.assertIsNone(self.catalog.resolve_level(5, 4))
        self.assertIsNone(self.catalog.resolve_level(99, 0))

    def test_missing_numbering_part(self) -> None:
        catalog = NumberingParser(None).parse()
        self.assertEqual(catalog.abstracts, {})
        self.assertIsNone(catalog.get_instance(5))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
