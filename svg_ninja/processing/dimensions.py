"""
Dimension resolution for SVG display and thumbnail metadata.
"""
import logging
import re
from typing import Any, Dict, Optional

from svg_ninja.core.models import THUMBNAIL_SIZE, Dimensions, ThumbnailBox, is_failure
from svg_ninja.core.reader import ContentReader, Source
from svg_ninja.core.xml_guard import XmlGuard
from svg_ninja.utils.numbers import coerce_length, leading_number, round_half_up

logger = logging.getLogger(__name__)

_VIEWBOX_SEPARATOR = re.compile(r"[\s,]+")


def dimensions_from_viewbox(viewbox: Optional[str]) -> Optional[Dimensions]:
    """Read width and height from the last two of exactly four viewBox numbers."""
    if viewbox is None:
        return None

    parts = _VIEWBOX_SEPARATOR.split(viewbox.strip())
    if len(parts) != 4:
        return None

    width = leading_number(parts[2])
    height = leading_number(parts[3])
    if width <= 0 or height <= 0:
        return None

    width, height = round_half_up(width), round_half_up(height)
    if width <= 0 or height <= 0:
        return None
    return Dimensions(width, height)


def dimensions_from_attributes(width: Optional[str], height: Optional[str]) -> Optional[Dimensions]:
    """Read dimensions from width and height attributes, ignoring units."""
    width_num = round_half_up(coerce_length(width))
    height_num = round_half_up(coerce_length(height))
    if width_num <= 0 or height_num <= 0:
        return None
    return Dimensions(width_num, height_num)


def thumbnail_box(dimensions: Optional[Dimensions], size: int = THUMBNAIL_SIZE) -> ThumbnailBox:
    """
    Fit dimensions proportionally into a square thumbnail box.

    Args:
        dimensions: Real dimensions, or None when unknown
        size: Side of the thumbnail box in pixels

    Returns:
        ThumbnailBox with the longer side equal to ``size``
    """
    if dimensions is None:
        return ThumbnailBox(size, size)

    ratio = dimensions.ratio
    if ratio >= 1:
        return ThumbnailBox(size, round_half_up(size / ratio))
    return ThumbnailBox(round_half_up(size * ratio), size)


class DimensionResolver:
    """
    Resolves the display size of an SVG document.

    Tries the viewBox first, then the width and height attributes, and falls
    back to a fixed default. Never fails.
    """

    def __init__(
        self,
        reader: Optional[ContentReader] = None,
        guard: Optional[XmlGuard] = None,
        thumbnail_size: int = THUMBNAIL_SIZE,
    ):
        self.reader = reader or ContentReader()
        self.guard = guard or XmlGuard(remove_comments=True)
        self.thumbnail_size = thumbnail_size

    def resolve(self, content: Source) -> Dimensions:
        """
        Resolve dimensions of an SVG or SVGZ document.

        Args:
            content: Raw bytes or a path to the file

        Returns:
            Resolved Dimensions, or the 300x300 default
        """
        decoded = self.reader.read(content)
        if is_failure(decoded):
            logger.debug(f"Using default dimensions: {decoded.message}")
            return Dimensions.default()

        document = self.guard.parse(decoded.data)
        if is_failure(document):
            logger.debug(f"Using default dimensions: {document.message}")
            return Dimensions.default()

        root = document.root
        dimensions = dimensions_from_viewbox(root.get("viewBox"))
        if dimensions is None:
            dimensions = dimensions_from_attributes(root.get("width"), root.get("height"))
        if dimensions is None:
            return Dimensions.default()
        return dimensions

    def thumbnail(self, dimensions: Dimensions) -> ThumbnailBox:
        """Thumbnail box for resolved dimensions."""
        return thumbnail_box(dimensions, self.thumbnail_size)

    def describe_attachment(self, url: str, content: Source) -> Dict[str, Any]:
        """
        Build display metadata for a stored SVG attachment.

        Args:
            url: Public URL of the stored file
            content: Raw bytes or a path to the file

        Returns:
            Dictionary with ``image``, ``thumb`` and ``sizes`` entries
        """
        dimensions = self.resolve(content)
        thumb = self.thumbnail(dimensions)

        return {
            "image": {"src": url, "width": dimensions.width, "height": dimensions.height},
            "thumb": {"src": url, "width": thumb.width, "height": thumb.height},
            "sizes": {
                "full": {
                    "url": url,
                    "width": dimensions.width,
                    "height": dimensions.height,
                    "orientation": dimensions.orientation,
                },
            },
        }
