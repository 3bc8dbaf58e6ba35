"""
SVG validation utilities to ensure uploads are really SVG documents.
"""
import logging
from typing import Optional, Tuple, Union

from lxml import etree

from svg_ninja.core.models import is_failure
from svg_ninja.core.xml_guard import XmlGuard

logger = logging.getLogger(__name__)


def local_name(node) -> str:
    """Return the namespace-free name of an element."""
    return etree.QName(node).localname


class SVGValidator:
    """
    Validates that content is well-formed XML with an <svg> root element.

    The root check ignores the namespace and letter case, so a prefixed
    ``<svg:svg>`` or an upper-case ``<SVG>`` root is accepted.
    """

    def __init__(self, guard: Optional[XmlGuard] = None):
        """
        Initialize the SVG validator.

        Args:
            guard: XmlGuard used for parsing
        """
        self.guard = guard or XmlGuard(remove_comments=True)

    def check(self, content: Union[bytes, str]) -> Tuple[bool, Optional[str]]:
        """
        Validate content and explain a rejection.

        Args:
            content: Candidate SVG as bytes or text

        Returns:
            Tuple of (is_valid: bool, error_message: Optional[str])
        """
        document = self.guard.parse(content)
        if is_failure(document):
            return False, document.message

        name = local_name(document.root)
        if name.lower() != "svg":
            return False, f"Root element is <{name}>, expected <svg>"

        return True, None

    def validate(self, content: Union[bytes, str]) -> bool:
        """Return True if content is a valid SVG document."""
        is_valid, reason = self.check(content)
        if not is_valid:
            logger.debug(f"SVG validation failed: {reason}")
        return is_valid
