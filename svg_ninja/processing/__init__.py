"""
SVG Ninja - Processing Package
==============================
Transformations applied to validated SVG documents.
"""

from svg_ninja.processing.dimensions import DimensionResolver, thumbnail_box
from svg_ninja.processing.metadata import MetadataStripper, StripReport
from svg_ninja.processing.viewbox import ViewBoxNormalizer

__all__ = [
    'DimensionResolver',
    'MetadataStripper',
    'StripReport',
    'ViewBoxNormalizer',
    'thumbnail_box',
]
