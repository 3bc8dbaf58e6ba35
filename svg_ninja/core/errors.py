"""
Error Taxonomy Module
=====================
This module defines the failure kinds produced by the SVG processing pipeline.
"""

from enum import Enum


class ErrorKind(Enum):
    """Kinds of failure a pipeline component can report."""
    IO_ERROR = "io_error"
    EMPTY_CONTENT = "empty_content"
    DECOMPRESSION_FAILURE = "decompression_failure"
    MALFORMED_XML = "malformed_xml"
    INVALID_SVG = "invalid_svg"
    SERIALIZATION_FAILURE = "serialization_failure"
    COMPRESSION_FAILURE = "compression_failure"
    PERMISSION_DENIED = "permission_denied"
    UNSUPPORTED_TYPE = "unsupported_type"

    @property
    def default_message(self) -> str:
        """Host-facing wording for this failure."""
        return _DEFAULT_MESSAGES[self]


_DEFAULT_MESSAGES = {
    ErrorKind.IO_ERROR: "The uploaded SVG file could not be read.",
    ErrorKind.EMPTY_CONTENT: "The uploaded SVG file appears to be empty or could not be read.",
    ErrorKind.DECOMPRESSION_FAILURE: "The uploaded SVGZ file could not be decompressed.",
    ErrorKind.MALFORMED_XML: "The uploaded file is not well-formed XML.",
    ErrorKind.INVALID_SVG: "The uploaded file is not a valid SVG document.",
    ErrorKind.SERIALIZATION_FAILURE: "The processed SVG document could not be serialized.",
    ErrorKind.COMPRESSION_FAILURE: "Failed to compress the processed SVG file.",
    ErrorKind.PERMISSION_DENIED: "Sorry, you do not have permission to upload SVG files.",
    ErrorKind.UNSUPPORTED_TYPE: "The uploaded file is not an SVG or SVGZ file.",
}


class SvgNinjaError(Exception):
    """Raised when a failure value has to cross an exception boundary."""

    def __init__(self, failure):
        super().__init__(failure.message)
        self.failure = failure

    @property
    def kind(self) -> ErrorKind:
        return self.failure.kind
