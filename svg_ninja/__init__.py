"""
SVG Ninja - Safe SVG uploads.

This package sanitizes untrusted SVG and SVGZ uploads before they are stored:
XXE-safe parsing, validation, design-tool metadata stripping, viewBox
correction and dimension extraction for thumbnails.
"""

__version__ = "1.1.0"

from svg_ninja.core import Dimensions, ErrorKind, Failure, ProcessedBytes, SVGValidator
from svg_ninja.processing import DimensionResolver, MetadataStripper, ViewBoxNormalizer
from svg_ninja.pipeline import (
    ProcessedNotice,
    UploadPipeline,
    allowed_mime_types,
    describe_attachment,
    detect_svg_type,
    is_svg_payload,
    process_upload,
    resolve_dimensions,
)

__all__ = [
    "DimensionResolver",
    "Dimensions",
    "ErrorKind",
    "Failure",
    "MetadataStripper",
    "ProcessedBytes",
    "ProcessedNotice",
    "SVGValidator",
    "UploadPipeline",
    "ViewBoxNormalizer",
    "allowed_mime_types",
    "describe_attachment",
    "detect_svg_type",
    "is_svg_payload",
    "process_upload",
    "resolve_dimensions",
]
