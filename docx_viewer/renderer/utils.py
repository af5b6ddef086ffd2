"""Common helpers shared by renderer implementations."""
from __future__ import annotations

from typing import Dict, List, Sequence

from docx_viewer.model.content import Alignment, ListItem, MarkerKind, TableData, TableRow
from docx_viewer.utils.unicode_text import collapse_whitespace, pad_to_width

_ROMAN_NUMERALS = (
    (1000, "m"), (900, "cm"), (500, "d"), (400, "cd"),
    (100, "c"), (90, "xc"), (50, "l"), (40, "xl"),
    (10, "x"), (9, "ix"), (5, "v"), (4, "iv"), (1, "i"),
)


def to_roman(value: int) -> str:
    parts: List[str] = []
    for amount, numeral in _ROMAN_NUMERALS:
        while value >= amount:
            parts.append(numeral)
            value -= amount
    return "".join(parts)


def to_letters(value: int) -> str:
    """1 -> a, 26 -> z, 27 -> aa."""
    letters = ""
    while value > 0:
        value, remainder = divmod(value - 1, 26)
        letters = chr(ord("a") + remainder) + letters
    return letters


def item_ordinals(items: Sequence[ListItem]) -> List[int]:
    """1-based position of each item among its siblings at the same level."""
    counters: Dict[int, int] = {}
    ordinals: List[int] = []
    for item in items:
        for level in [level for level in counters if level > item.level]:
            del counters[level]
        counters[item.level] = counters.get(item.level, 0) + 1
        ordinals.append(counters[item.level])
    return ordinals


def list_marker(kind: MarkerKind, ordinal: int) -> str:
    if kind is MarkerKind.NUMERIC:
        return f"{ordinal}."
    if kind is MarkerKind.LETTERED:
        return f"{to_letters(ordinal)})"
    if kind is MarkerKind.ROMAN:
        return f"{to_roman(ordinal)}."
    return "•"


# ----------------------------------------------------------------------
# Box-drawn tables

def table_border(widths: Sequence[int], left: str, middle: str, right: str, fill: str) -> str:
    return left + middle.join(fill * (width + 2) for width in widths) + right


def table_row_line(row: TableRow, widths: Sequence[int], alignments: Sequence[Alignment]) -> str:
    cells = []
    for cell, width, alignment in zip(row.cells, widths, alignments):
        cells.append(" " + pad_to_width(collapse_whitespace(cell.text), width, alignment.value) + " ")
    return "│" + "│".join(cells) + "│"


def boxed_table_lines(table: TableData) -> List[str]:
    """Bordered grid with a double rule under the header and single rules between body rows."""
    widths = table.metadata.widths
    alignments = table.metadata.alignments
    if not widths:
        return []
    lines = [table_border(widths, "┌", "┬", "┐", "─")]
    header = table.header
    if header is not None:
        lines.append(table_row_line(header, widths, alignments))
        lines.append(table_border(widths, "╞", "╪", "╡", "═"))
    for index, row in enumerate(table.body):
        if index:
            lines.append(table_border(widths, "├", "┼", "┤", "─"))
        lines.append(table_row_line(row, widths, alignments))
    lines.append(table_border(widths, "└", "┴", "┘", "─"))
    return lines
