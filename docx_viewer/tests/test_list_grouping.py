"""Tests for list grouping."""
import unittest

from docx_viewer.model.content import ListGroup, MarkerKind, TextFormatting
from docx_viewer.structure.intake import ListItemCandidate, ParagraphItem
from docx_viewer.structure.list_grouping import ListGroupingEngine, clamp_levels
from docx_viewer.utils.settings import DEFAULT_SETTINGS

BLANK = ParagraphItem(text="")


def heuristic(text, level=0, marker=MarkerKind.BULLET):
    return ListItemCandidate(text, level, marker, native=False)


def native(text, level=0, list_id=1):
    return ListItemCandidate(text, level, MarkerKind.BULLET, native=True, list_id=list_id)


class ListGroupingTest(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = ListGroupingEngine()

    def test_single_blank_is_bridged_and_dropped(self) -> None:
        result = self.engine.group([heuristic("a"), heuristic("b"), BLANK, heuristic("c")])
        self.assertEqual(len(result), 1)
        self.assertEqual([item.text for item in result[0].items], ["a", "b", "c"])

    def test_too_many_blanks_split_the_list(self) -> None:
        result = self.engine.group([heuristic("a"), heuristic("b"), BLANK, BLANK, heuristic("c")])
        self.assertEqual([type(item) for item in result], [ListGroup, ParagraphItem, ParagraphItem, ListGroup])

    def test_gap_is_configurable(self) -> None:
        engine = ListGroupingEngine(DEFAULT_SETTINGS.with_overrides(max_blank_list_gap=2))
        result = engine.group([heuristic("a"), BLANK, BLANK, heuristic("b")])
        self.assertEqual(len(result), 1)

    def test_paragraph_interrupts(self) -> None:
        body = ParagraphItem(text="body")
        result = self.engine.group([heuristic("a"), body, heuristic("b")])
        self.assertEqual(len(result), 3)
        self.assertIs(result[1], body)

    def test_origin_change_starts_new_group(self) -> None:
        result = self.engine.group([native("a", list_id=1), native("b", list_id=2), heuristic("c")])
        self.assertEqual(len(result), 3)
        self.assertEqual([group.native for group in result], [True, True, False])

    def test_same_native_list_merges(self) -> None:
        result = self.engine.group([native("a"), BLANK, native("b", level=1), native("c")])
        self.assertEqual(len(result), 1)
        self.assertEqual([item.level for item in result[0].items], [0, 1, 0])

    def test_trailing_blank_is_kept(self) -> None:
        result = self.engine.group([heuristic("a"), BLANK])
        self.assertEqual([type(item) for item in result], [ListGroup, ParagraphItem])

    def test_single_sub_item(self) -> None:
        result = self.engine.group([heuristic("Sub item", level=1)])
        item = result[0].items[0]
        self.assertEqual((item.text, item.level, item.marker), ("Sub item", 1, MarkerKind.BULLET))

    def test_levels_clamped(self) -> None:
        self.assertEqual(clamp_levels([0, 3, 1, 2]), [0, 1, 1, 2])
        self.assertEqual(clamp_levels([2]), [1])
        self.assertEqual(clamp_levels([0, 2, 4, 0]), [0, 1, 2, 0])
        result = self.engine.group([heuristic("a"), heuristic("b", level=4)])
        self.assertEqual([item.level for item in result[0].items], [0, 1])

    def test_shared_formatting(self) -> None:
        bold = TextFormatting(bold=True)
        items = [
            ListItemCandidate("a", 0, MarkerKind.BULLET, False, formatting=bold),
            ListItemCandidate("b", 0, MarkerKind.BULLET, False, formatting=TextFormatting(bold=True, italic=True)),
        ]
        group = self.engine.group(items)[0]
        self.assertTrue(group.formatting.bold)
        self.assertFalse(group.formatting.italic)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
