"""
Tests for logging utilities.
"""

import json
import logging
import unittest

from svg_ninja.utils.logger import JsonFormatter, LogCapture, log_exception


class TestLogger(unittest.TestCase):
    """Tests for the logger helpers."""

    def test_json_formatter_includes_extra_fields(self):
        record = logging.LogRecord(
            "svg_ninja.pipeline", logging.WARNING, __file__, 10,
            "Rejected %s", ("icon.svg",), None,
        )
        record.kind = "invalid_svg"

        data = json.loads(JsonFormatter().format(record))

        self.assertEqual(data["message"], "Rejected icon.svg")
        self.assertEqual(data["level"], "WARNING")
        self.assertEqual(data["kind"], "invalid_svg")

    def test_log_exception_with_context(self):
        logger = logging.getLogger("svg_ninja.tests")

        with LogCapture("svg_ninja.tests") as capture:
            try:
                raise ValueError("bad size")
            except ValueError as e:
                log_exception(logger, e, context={"file": "icon.svg"})

        self.assertEqual(len(capture.records), 1)
        self.assertIn("ValueError: bad size", capture.logs[0])
        self.assertIn("file=icon.svg", capture.logs[0])


if __name__ == "__main__":
    unittest.main()
