"""Tests for table type inference, header detection and layout."""
import unittest

from docx_viewer.model.content import Alignment, DataType
from docx_viewer.structure.table_enrichment import TableEnricher, classify_cell, column_type
from docx_viewer.utils.errors import ResourceLimitError
from docx_viewer.utils.settings import DEFAULT_SETTINGS

PRICE_GRID = [["Name", "Price"], ["Widget", "$12.50"], ["Gadget", "$7.00"]]


class ClassifyCellTest(unittest.TestCase):
    def test_patterns(self) -> None:
        cases = {
            "$1,200.00": DataType.CURRENCY,
            "€50": DataType.CURRENCY,
            "-£3.5": DataType.CURRENCY,
            "12%": DataType.PERCENTAGE,
            "4.5 %": DataType.PERCENTAGE,
            "Yes": DataType.BOOLEAN,
            "n": DataType.BOOLEAN,
            "2024-01-15": DataType.DATE,
            "03/04/2024": DataType.DATE,
            "Jan 5, 2024": DataType.DATE,
            "5 March 2024": DataType.DATE,
            "1,234.5": DataType.NUMBER,
            "-7": DataType.NUMBER,
            ".25": DataType.NUMBER,
            "": DataType.EMPTY,
            "   ": DataType.EMPTY,
            "abc": DataType.TEXT,
            "12 apples": DataType.TEXT,
            "1,23": DataType.TEXT,
        }
        for text, expected in cases.items():
            self.assertEqual(classify_cell(text), expected, text)

    def test_column_majority(self) -> None:
        self.assertEqual(column_type(["$5", "$6", "abc"]), DataType.CURRENCY)
        self.assertEqual(column_type(["1", "abc"]), DataType.TEXT)
        self.assertEqual(column_type(["1", "", ""]), DataType.NUMBER)
        self.assertEqual(column_type(["", ""]), DataType.TEXT)


class TableEnricherTest(unittest.TestCase):
    def setUp(self) -> None:
        self.enricher = TableEnricher()

    def test_price_table(self) -> None:
        table = self.enricher.enrich(PRICE_GRID)
        metadata = table.metadata
        self.assertTrue(metadata.has_header)
        self.assertEqual(metadata.column_types, (DataType.TEXT, DataType.CURRENCY))
        self.assertEqual(metadata.alignments, (Alignment.LEFT, Alignment.RIGHT))
        self.assertEqual(metadata.widths, (6, 6))
        self.assertEqual(metadata.row_count, 3)
        self.assertEqual(table.header.cells[1].text, "Price")
        self.assertEqual([cell.data_type for cell in table.body[0].cells], [DataType.TEXT, DataType.CURRENCY])

    def test_ragged_rows_padded(self) -> None:
        table = self.enricher.enrich([["a", "b", "c"], ["d"], ["e", "f"]])
        self.assertEqual(table.metadata.column_count, 3)
        for row in table.rows:
            self.assertEqual(len(row.cells), 3)
        self.assertEqual(table.rows[1].cells[2].data_type, DataType.EMPTY)

    def test_numeric_second_row_header(self) -> None:
        table = self.enricher.enrich([["Q1", "Q2"], ["10", "20"], ["30", "40"]])
        self.assertTrue(table.metadata.has_header)
        self.assertEqual(table.metadata.alignments, (Alignment.RIGHT, Alignment.RIGHT))

    def test_boolean_column_centered(self) -> None:
        table = self.enricher.enrich([["Item", "Active"], ["A", "yes"], ["B", "no"]])
        self.assertTrue(table.metadata.has_header)
        self.assertEqual(table.metadata.alignments, (Alignment.LEFT, Alignment.CENTER))

    def test_all_caps_header_over_text(self) -> None:
        table = self.enricher.enrich([["FRUIT", "COLOR"], ["apple", "red"], ["pear", "green"]])
        self.assertTrue(table.metadata.has_header)

    def test_header_vocabulary(self) -> None:
        table = self.enricher.enrich([["Name", "Status"], ["Alice", "active"], ["Bob", "away"]])
        self.assertTrue(table.metadata.has_header)

    def test_plain_text_table_has_no_header(self) -> None:
        table = self.enricher.enrich([["Fruit", "Colour"], ["Apple", "Red"]])
        self.assertFalse(table.metadata.has_header)
        self.assertIsNone(table.header)
        self.assertEqual(len(table.body), 2)

    def test_punctuated_labels_fail_label_rule(self) -> None:
        table = self.enricher.enrich([["This is a long note.", "x"], ["1", "2"]])
        self.assertTrue(table.metadata.has_header)
        table = self.enricher.enrich([["Totals so far.", "Done."], ["a", "b"]])
        self.assertFalse(table.metadata.has_header)

    def test_single_row_has_no_header(self) -> None:
        self.assertFalse(self.enricher.enrich([["Name", "Price"]]).metadata.has_header)

    def test_widths_use_display_width_and_bounds(self) -> None:
        table = self.enricher.enrich([["a", "日本語", "x" * 60]])
        self.assertEqual(table.metadata.widths, (3, 6, 40))

    def test_widths_measure_collapsed_cell_text(self) -> None:
        table = self.enricher.enrich([["Notes", "Qty"], ["Line one\nLine two", "3"]])
        self.assertEqual(table.metadata.widths, (17, 3))

    def test_tie_defaults_to_text(self) -> None:
        table = self.enricher.enrich([["1", "abc"], ["x", "2"]])
        self.assertEqual(table.metadata.column_types, (DataType.TEXT, DataType.TEXT))
        self.assertEqual(table.metadata.alignments, (Alignment.LEFT, Alignment.LEFT))

    def test_empty_grid(self) -> None:
        table = self.enricher.enrich([])
        self.assertEqual(table.metadata.column_count, 0)
        self.assertEqual(table.rows, ())

    def test_cell_limit(self) -> None:
        enricher = TableEnricher(DEFAULT_SETTINGS.with_overrides(max_table_cells=4))
        with self.assertRaises(ResourceLimitError) as context:
            enricher.enrich(PRICE_GRID)
        self.assertEqual(context.exception.limit_name, "max_table_cells")
        self.assertEqual(context.exception.actual, 6)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
