"""Test cases for text normalization functionality."""

import unittest

from docx_viewer.utils.text_normalizer import TextNormalizer


class TextNormalizerTest(unittest.TestCase):
    """Test text normalization utilities."""

    def setUp(self):
        """Set up test fixtures."""
        self.normalizer = TextNormalizer(preserve_whitespace=False)
        self.preserve_normalizer = TextNormalizer(preserve_whitespace=True)

    def test_special_character_replacement(self):
        """Test replacement of layout-only Unicode characters."""
        test_cases = [
            ('\u00a0text', 'text'),           # Non-breaking space, then trimmed
            ('text\u2009word', 'text word'),  # Thin space between words
            ('\u200b', ''),                   # Zero-width space
            ('soft\u00adhyphen', 'softhyphen'),
            ('non\u2011breaking', 'non-breaking'),
            ('\ufeffBOM', 'BOM'),
        ]

        for input_text, expected in test_cases:
            result = self.normalizer.normalize_text(input_text)
            self.assertEqual(result, expected, f"Failed for input: {repr(input_text)}")

    def test_whitespace_normalization(self):
        """Test whitespace collapsing and trimming."""
        test_cases = [
            ('  multiple   spaces  ', 'multiple spaces'),
            ('\t\ttabs\t\t', 'tabs'),
            ('\n\nnewlines\n\n', 'newlines'),
            ('', ''),
            ('   ', ''),
        ]

        for input_text, expected in test_cases:
            result = self.normalizer.normalize_text(input_text)
            self.assertEqual(result, expected, f"Failed for input: {repr(input_text)}")

    def test_preserve_whitespace_keeps_list_indentation(self):
        """Leading spaces survive so list nesting can be inferred later."""
        self.assertEqual(self.preserve_normalizer.normalize_text('  - Sub item'), '  - Sub item')
        self.assertEqual(self.preserve_normalizer.normalize_text('\u00a0\u00a0- Sub item'), '  - Sub item')

    def test_control_character_removal(self):
        """Test removal of control characters."""
        input_text = 'text\x00with\x08control\x1fchars'
        self.assertEqual(self.normalizer.normalize_text(input_text), 'textwithcontrolchars')

    def test_tab_and_newline_are_not_control_characters(self):
        self.assertEqual(self.preserve_normalizer.normalize_text('a\tb\nc'), 'a\tb\nc')

    def test_empty_and_none_handling(self):
        """Test handling of empty strings and None values."""
        self.assertEqual(self.normalizer.normalize_text(''), '')
        self.assertIsNone(self.normalizer.normalize_text(None))


if __name__ == '__main__':
    unittest.main()
