"""Heading and list detectors applied to raw paragraphs.

Each detector is a pure function from raw paragraph metadata (or visible
text) to an optional classification. The intake adapter runs them in
priority order and keeps the first match.
"""
from __future__ import annotations

import re
import string
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from docx_viewer.model.content import HeadingSource, MarkerKind
from docx_viewer.model.elements import NumberingInfo, ParagraphElement
from docx_viewer.utils.unicode_text import leading_whitespace_width, strip_prefix

MAX_HEADING_LEVEL = 6

_HEADING_STYLE_RE = re.compile(r"^heading\s*(\d+)$", re.IGNORECASE)

# Bullet, hyphen, asterisk, triangular bullet, white bullet, small square, black circle
_BULLET_GLYPHS = "•-*‣◦▪●"
_LIST_GLYPH_RE = re.compile(
    r"^(?P<glyph>[" + re.escape(_BULLET_GLYPHS) + r"]|\d+[.)]|[ivxIVX]+[.)]|[A-Za-z][.)])\s+(?=\S)"
)
_ROMAN_RE = re.compile(r"^(?=[ivx])x{0,3}(?:ix|iv|v?i{0,3})$", re.IGNORECASE)

_MANUAL_NUMBER_RE = re.compile(
    r"^(?P<number>"
    r"\d+(?:\.\d+)+\.?"
    r"|\d+\."
    r"|(?:Chapter|Section|Part)\s+(?:\d+|[IVXLC]+)\.?"
    r"|[IVXLC]+\."
    r"|[A-Z]\."
    r")\s+(?=\S)"
)

_SENTENCE_CONNECTORS = (" and ", " but ", " however ", " therefore ")
_BODY_WORDS = (" the ", " and ", " with ", " for ")
_HEADING_KEYWORDS = ("Chapter ", "Section ", "Part ")
_NON_HEADING_SYMBOLS = ("⏺", "⎿", "☐", "☒")
_TRAILING_PUNCTUATION = (".", ",", ";", ":")


@dataclass(frozen=True, slots=True)
class HeadingMatch:
    level: int
    source: HeadingSource


@dataclass(frozen=True, slots=True)
class ListMatch:
    """List item classification with the visible text left after the marker."""

    level: int
    marker: MarkerKind
    text: str


HeadingDetector = Callable[[ParagraphElement], Optional[HeadingMatch]]


def _clamp_level(level: int) -> int:
    return max(1, min(level, MAX_HEADING_LEVEL))


def heading_level_from_style(name: Optional[str]) -> Optional[int]:
    """Return the level encoded in a ``Heading N`` style name or id."""
    if not name:
        return None
    match = _HEADING_STYLE_RE.match(name.strip())
    if match is None:
        return None
    return _clamp_level(int(match.group(1)))


def detect_style_heading(paragraph: ParagraphElement) -> Optional[HeadingMatch]:
    """Explicit heading style or outline level."""
    for candidate in (paragraph.style_name, paragraph.style_id):
        level = heading_level_from_style(candidate)
        if level is not None:
            return HeadingMatch(level, HeadingSource.STYLE)
    outline = paragraph.outline_level
    if outline is not None and 0 <= outline < MAX_HEADING_LEVEL:
        return HeadingMatch(outline + 1, HeadingSource.STYLE)
    return None


def is_heading_numbering(info: Optional[NumberingInfo]) -> bool:
    """True when native numbering belongs to a heading list rather than a body list."""
    if info is None:
        return False
    if heading_level_from_style(info.paragraph_style) is not None:
        return True
    return bool(info.list_name) and "heading" in info.list_name.lower()


def detect_numbering_heading(paragraph: ParagraphElement) -> Optional[HeadingMatch]:
    """Native numbering linked to a heading style."""
    info = paragraph.numbering
    if not is_heading_numbering(info):
        return None
    return HeadingMatch(_clamp_level(info.level + 1), HeadingSource.NUMBERING)


HEADING_DETECTORS: Tuple[HeadingDetector, ...] = (detect_style_heading, detect_numbering_heading)


def run_detectors(paragraph: ParagraphElement, detectors: Sequence[HeadingDetector] = HEADING_DETECTORS) -> Optional[HeadingMatch]:
    """Return the first detector match, or None."""
    for detector in detectors:
        match = detector(paragraph)
        if match is not None:
            return match
    return None


def split_manual_number(text: str) -> Tuple[Optional[str], str]:
    """Split a typed heading number such as ``1.2`` or ``Section 3`` off the text.

    A trailing dot is dropped from the number, so "1. Intro" gives ``("1", "Intro")``.
    """
    match = _MANUAL_NUMBER_RE.match(text)
    if match is None:
        return None, text
    remainder = strip_prefix(text, match.group(0))
    if remainder == text:
        return None, text
    return match.group("number").rstrip("."), remainder


# ----------------------------------------------------------------------
# Lists


def marker_for_native_level(level: int) -> MarkerKind:
    """Native list levels cycle bullet, lettered, roman."""
    return (MarkerKind.BULLET, MarkerKind.LETTERED, MarkerKind.ROMAN)[level % 3]


def detect_native_list(paragraph: ParagraphElement) -> Optional[ListMatch]:
    """Body list driven by native numbering; a typed glyph stays part of the text."""
    info = paragraph.numbering
    if info is None or is_heading_numbering(info):
        return None
    level = max(info.level, 0)
    return ListMatch(level, marker_for_native_level(level), paragraph.text.strip())


def _marker_for_glyph(glyph: str) -> MarkerKind:
    if glyph in _BULLET_GLYPHS:
        return MarkerKind.BULLET
    token = glyph[:-1]
    if token.isdigit():
        return MarkerKind.NUMERIC
    if _ROMAN_RE.match(token):
        return MarkerKind.ROMAN
    return MarkerKind.LETTERED


def detect_text_list(text: str, indent_unit: int = 2) -> Optional[ListMatch]:
    """Infer a list item from a leading glyph and the indentation before it."""
    indent_unit = max(indent_unit, 1)
    width = leading_whitespace_width(text, indent_unit)
    body = text.lstrip()
    match = _LIST_GLYPH_RE.match(body)
    if match is None:
        return None
    glyph = match.group("glyph")
    if len(glyph) > 2 and not glyph[:-1].isdigit() and not _ROMAN_RE.match(glyph[:-1]):
        return None
    visible = strip_prefix(body, match.group(0)).rstrip()
    if not visible:
        return None
    return ListMatch(width // indent_unit, _marker_for_glyph(glyph), visible)


# ----------------------------------------------------------------------
# Text heuristics


def looks_like_sentence(text: str) -> bool:
    text = text.strip()
    if text.count(". ") > 1:
        return True
    if len(text) > 80 and text.endswith((".", "!", "?")):
        return True
    return any(connector in text for connector in _SENTENCE_CONNECTORS)


def _heading_level_from_length(text: str) -> int:
    if len(text) < 20:
        return 1
    if len(text) < 40:
        return 2
    return 3


def _is_all_caps(text: str) -> bool:
    if not any(char.isalpha() for char in text):
        return False
    return all(
        char.isupper() or char.isspace() or char.isdigit() or char in string.punctuation
        for char in text
    )


def detect_text_heading(text: str, bold: bool = False) -> Optional[HeadingMatch]:
    """Low-confidence heading guess from the shape of the visible text."""
    text = text.strip()
    if not text or len(text) >= 100 or "\n" in text:
        return None
    if detect_text_list(text) is not None or looks_like_sentence(text):
        return None
    if text.startswith(_NON_HEADING_SYMBOLS) or any(word in text for word in _BODY_WORDS):
        return None

    if bold and 5 < len(text) < 60 and not text.endswith(_TRAILING_PUNCTUATION):
        return HeadingMatch(_heading_level_from_length(text), HeadingSource.TEXT)

    if 15 < len(text) < 50 and _is_all_caps(text):
        return HeadingMatch(1, HeadingSource.TEXT)

    if text.startswith(_HEADING_KEYWORDS):
        return HeadingMatch(_heading_level_from_length(text), HeadingSource.TEXT)

    if 10 < len(text) < 40 and not text.endswith(".") and not any(char in text for char in ",(:"):
        words = text.split()
        if 2 <= len(words) <= 5 and text[0].isupper() and has_meaningful_word(text):
            return HeadingMatch(_heading_level_from_length(text), HeadingSource.TEXT)
    return None


def has_meaningful_word(text: str, min_letters: int = 4) -> bool:
    return any(len(word) >= min_letters and word.isalpha() for word in text.split())
