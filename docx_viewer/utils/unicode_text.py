"""Boundary-safe text primitives.

Every slicing, stripping and windowing operation in the viewer goes through
these helpers so that a cut never lands inside a user-perceived character.
Python strings are already code-point safe; the helpers additionally keep
combining marks, ZWJ emoji sequences, variation selectors and flag pairs
together, and translate between character indices and UTF-8 byte offsets.
"""
from __future__ import annotations

import unicodedata
from typing import Iterator, List

ZWJ = "\u200d"
ELLIPSIS = "\u2026"

_ZERO_WIDTH = {"\u200b", "\u200c", ZWJ, "\u2060", "\ufeff"}
_EMOJI_PRESENTATION = "\ufe0f"


def _is_regional_indicator(char: str) -> bool:
    return "\U0001f1e6" <= char <= "\U0001f1ff"


def is_extender(char: str) -> bool:
    """Return True for code points that attach to the preceding character."""
    if unicodedata.combining(char):
        return True
    if char == ZWJ:
        return True
    code = ord(char)
    if 0xFE00 <= code <= 0xFE0F or 0xE0100 <= code <= 0xE01EF:
        return True  # variation selectors
    if 0x1F3FB <= code <= 0x1F3FF:
        return True  # skin tone modifiers
    if 0xE0020 <= code <= 0xE007F:
        return True  # tag characters (subdivision flags)
    return unicodedata.category(char) in ("Mn", "Me", "Mc")


def is_cluster_boundary(text: str, index: int) -> bool:
    """Return True when ``index`` does not split a grapheme cluster of ``text``."""
    if index <= 0 or index >= len(text):
        return True
    current = text[index]
    previous = text[index - 1]
    if previous == "\r" and current == "\n":
        return False
    if is_extender(current) or previous == ZWJ:
        return False
    if _is_regional_indicator(current) and _is_regional_indicator(previous):
        run = 0
        cursor = index - 1
        while cursor >= 0 and _is_regional_indicator(text[cursor]):
            run += 1
            cursor -= 1
        return run % 2 == 0
    return True


def snap_backward(text: str, index: int) -> int:
    """Move ``index`` left until it sits on a cluster boundary."""
    index = max(0, min(index, len(text)))
    while not is_cluster_boundary(text, index):
        index -= 1
    return index


def snap_forward(text: str, index: int) -> int:
    """Move ``index`` right until it sits on a cluster boundary."""
    index = max(0, min(index, len(text)))
    while not is_cluster_boundary(text, index):
        index += 1
    return index


def iter_clusters(text: str) -> Iterator[str]:
    """Yield approximate extended grapheme clusters of ``text``."""
    start = 0
    for index in range(1, len(text)):
        if is_cluster_boundary(text, index):
            yield text[start:index]
            start = index
    if text:
        yield text[start:]


def cluster_width(cluster: str) -> int:
    """Terminal cell width of a single grapheme cluster."""
    if not cluster:
        return 0
    base = cluster[0]
    if base in _ZERO_WIDTH or (is_extender(base) and len(cluster) == 1):
        return 0
    if unicodedata.category(base) == "Cc":
        return 0
    if unicodedata.east_asian_width(base) in ("W", "F"):
        return 2
    if _EMOJI_PRESENTATION in cluster or _is_regional_indicator(base):
        return 2
    return 1


def display_width(text: str) -> int:
    """Visible width of ``text`` counting wide and combining characters correctly."""
    return sum(cluster_width(cluster) for cluster in iter_clusters(text))


def truncate_to_width(text: str, width: int, ellipsis: str = ELLIPSIS) -> str:
    """Cut ``text`` to at most ``width`` cells, marking the cut with ``ellipsis``."""
    if width <= 0:
        return ""
    if display_width(text) <= width:
        return text
    budget = width - display_width(ellipsis)
    if budget < 0:
        return ""
    kept: List[str] = []
    used = 0
    for cluster in iter_clusters(text):
        cells = cluster_width(cluster)
        if used + cells > budget:
            break
        kept.append(cluster)
        used += cells
    return "".join(kept) + ellipsis


def collapse_whitespace(text: str) -> str:
    """Single-line form of ``text`` as shown inside a table cell."""
    return " ".join(text.split())


def pad_to_width(text: str, width: int, alignment: str = "left") -> str:
    """Pad ``text`` with spaces to ``width`` cells; alignment is left, center or right."""
    text = truncate_to_width(text, width)
    gap = max(0, width - display_width(text))
    if alignment == "right":
        return " " * gap + text
    if alignment == "center":
        left = gap // 2
        return " " * left + text + " " * (gap - left)
    return text + " " * gap


def strip_prefix(text: str, prefix: str) -> str:
    """Remove ``prefix`` only when the cut lands on a cluster boundary."""
    if prefix and text.startswith(prefix) and is_cluster_boundary(text, len(prefix)):
        return text[len(prefix):]
    return text


def leading_whitespace_width(text: str, tab_width: int) -> int:
    """Width of the leading whitespace run, counting a tab as ``tab_width`` spaces."""
    width = 0
    for char in text:
        if char == "\t":
            width += tab_width
        elif char.isspace() and char not in "\r\n":
            width += 1
        else:
            break
    return width


def utf8_offset(text: str, char_index: int) -> int:
    """Translate a character index of ``text`` into a UTF-8 byte offset."""
    return len(text[:char_index].encode("utf-8"))
