"""
Core functionality for reading, parsing and validating SVG uploads.
"""

from svg_ninja.core.errors import ErrorKind, SvgNinjaError
from svg_ninja.core.models import (
    Dimensions, DecodedSvg, Failure, PipelineState, ProcessedBytes,
    RawUpload, ThumbnailBox, is_failure, unwrap
)
from svg_ninja.core.reader import ContentReader
from svg_ninja.core.validator import SVGValidator
from svg_ninja.core.xml_guard import ParsedDocument, XmlGuard

__all__ = [
    "ContentReader",
    "DecodedSvg",
    "Dimensions",
    "ErrorKind",
    "Failure",
    "ParsedDocument",
    "PipelineState",
    "ProcessedBytes",
    "RawUpload",
    "SVGValidator",
    "SvgNinjaError",
    "ThumbnailBox",
    "XmlGuard",
    "is_failure",
    "unwrap",
]
