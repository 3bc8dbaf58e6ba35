"""
ViewBox normalization so SVGs scale responsively.
"""
import logging
from typing import AnyStr, Optional

from lxml import etree

from svg_ninja.core.models import is_failure
from svg_ninja.core.xml_guard import XmlGuard
from svg_ninja.utils.numbers import coerce_length, format_length

logger = logging.getLogger(__name__)


def synthesize_viewbox(width: Optional[str], height: Optional[str]) -> Optional[str]:
    """
    Build a viewBox value from width and height attributes.

    Returns:
        ``"0 0 W H"``, or None when either side is missing or not positive
    """
    if not width or not height:
        return None

    width_num = coerce_length(width)
    height_num = coerce_length(height)
    if width_num <= 0 or height_num <= 0:
        return None

    return f"0 0 {format_length(width_num)} {format_length(height_num)}"


class ViewBoxNormalizer:
    """Adds a viewBox to SVG documents that only declare width and height."""

    def __init__(self, guard: Optional[XmlGuard] = None):
        self.guard = guard or XmlGuard()

    def ensure_viewbox(self, content: AnyStr) -> AnyStr:
        """
        Ensure the root element has a viewBox attribute.

        Never fails: on any problem the input is returned unchanged, and so
        it is when the document already has a viewBox or no usable size.

        Args:
            content: SVG document as bytes or text

        Returns:
            The document, of the same type as ``content``; re-serialized
            (UTF-8 for bytes, without a declaration for text) if a viewBox
            was added
        """
        document = self.guard.parse(content)
        if is_failure(document):
            logger.debug(f"Skipping viewBox normalization: {document.message}")
            return content

        root = document.root
        if root.get("viewBox") is not None:
            return content

        viewbox = synthesize_viewbox(root.get("width"), root.get("height"))
        if viewbox is None:
            return content

        root.set("viewBox", viewbox)

        try:
            result = document.to_text() if isinstance(content, str) else document.to_bytes()
        except (etree.SerialisationError, ValueError) as e:
            logger.warning(f"Failed to serialize SVG after adding viewBox: {e}")
            return content

        if not result:
            return content

        logger.debug(f"Added viewBox=\"{viewbox}\"")
        return result
