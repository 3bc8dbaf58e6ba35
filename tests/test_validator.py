"""
Tests for the SVG validator.
"""

import unittest

from svg_ninja.core.validator import SVGValidator


class TestSVGValidator(unittest.TestCase):
    """Tests for the SVGValidator class."""

    def setUp(self):
        """Set up test fixtures."""
        self.validator = SVGValidator()

    def test_namespaced_svg_root(self):
        self.assertTrue(self.validator.validate(b'<svg xmlns="http://www.w3.org/2000/svg"/>'))

    def test_prefixed_svg_root(self):
        content = b'<svg:svg xmlns:svg="http://www.w3.org/2000/svg"><svg:g/></svg:svg>'
        self.assertTrue(self.validator.validate(content))

    def test_root_name_is_case_insensitive(self):
        self.assertTrue(self.validator.validate(b"<SVG></SVG>"))

    def test_other_root_is_rejected(self):
        is_valid, reason = self.validator.check(b'<html xmlns="http://www.w3.org/1999/xhtml"/>')
        self.assertFalse(is_valid)
        self.assertIn("html", reason)

    def test_malformed_xml_is_not_an_error(self):
        self.assertFalse(self.validator.validate(b"<svg"))

    def test_jpeg_bytes(self):
        jpeg = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xdb"
        self.assertFalse(self.validator.validate(jpeg))

    def test_text_input(self):
        self.assertTrue(self.validator.validate('<svg width="1" height="1"></svg>'))


if __name__ == "__main__":
    unittest.main()
