"""
Text normalization for run text extracted from WordprocessingML.

Leading whitespace is significant downstream (list nesting is inferred from
it), so the normalizer only collapses whitespace when explicitly asked to.
"""

import re


class TextNormalizer:
    """Cleans invisible and layout-only characters out of document text."""

    # Characters Word emits for layout that carry no visible content
    SPECIAL_CHARS = {
        '\u00a0': ' ',      # Non-breaking space → regular space
        '\u2007': ' ',      # Figure space → regular space
        '\u2009': ' ',      # Thin space → regular space
        '\u202f': ' ',      # Narrow no-break space → regular space
        '\u200b': '',       # Zero-width space → remove
        '\u2060': '',       # Word joiner → remove
        '\ufeff': '',       # Byte order mark → remove
        '\u00ad': '',       # Soft hyphen → remove
        '\u2011': '-',      # Non-breaking hyphen → regular hyphen
    }

    WHITESPACE_PATTERN = re.compile(r'\s+')

    # Control characters except tab, newline and carriage return
    CONTROL_CHARS_PATTERN = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]')

    def __init__(self, preserve_whitespace: bool = True):
        """Initialize text normalizer.

        Args:
            preserve_whitespace: If True (the default), keep whitespace as-is.
                                If False, collapse runs of whitespace and trim.
        """
        self.preserve_whitespace = preserve_whitespace

    def normalize_text(self, text: str) -> str:
        """Normalize a run of document text."""
        if not text:
            return text

        normalized = self._replace_special_chars(text)
        normalized = self.CONTROL_CHARS_PATTERN.sub('', normalized)

        if not self.preserve_whitespace:
            normalized = self.WHITESPACE_PATTERN.sub(' ', normalized).strip()

        return normalized

    def _replace_special_chars(self, text: str) -> str:
        for original, replacement in self.SPECIAL_CHARS.items():
            text = text.replace(original, replacement)
        return text

