"""
Metadata Stripping Module
=========================
This module removes the editor bookkeeping that design tools (Illustrator,
Sketch, Figma) embed in exported SVG files, together with comments and
``<metadata>`` blocks. Processing instructions such as ``<?xml-stylesheet?>``
are kept.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from lxml import etree

from svg_ninja.core.errors import ErrorKind
from svg_ninja.core.models import Failure, is_failure
from svg_ninja.core.xml_guard import XmlGuard

logger = logging.getLogger(__name__)

XML_NS = "http://www.w3.org/XML/1998/namespace"

# Namespace URI -> conventional prefix
JUNK_NAMESPACES: Dict[str, str] = {
    "http://ns.adobe.com/AdobeSVGViewerExtensions/3.0/": "a",
    "http://ns.adobe.com/AdobeIllustrator/10.0/": "i",
    "http://ns.adobe.com/Graphs/1.0/": "graph",
    "http://ns.adobe.com/Extensibility/1.0/": "x",
    "http://www.bohemiancoding.com/sketch/ns": "sketch",
    "https://www.figma.com/figma/ns": "figma",
}

JUNK_PREFIXES = frozenset(["adobe", "a", "i", "graph", "x", "sketch", "figma"])

# Illustrator private data, removed whatever namespace it was declared in
JUNK_LOCAL_NAMES = frozenset(["pgf", "pgfRef", "metadata"])

JUNK_ROOT_ATTRIBUTES = ("enable-background", f"{{{XML_NS}}}space")


@dataclass
class StripReport:
    """Counts of what a strip pass removed."""
    elements: int = 0
    attributes: int = 0

    @property
    def total(self) -> int:
        return self.elements + self.attributes


def _detach(node) -> bool:
    """Remove a node from its parent, keeping its tail text in place."""
    parent = node.getparent()
    if parent is None:
        return False

    tail = node.tail
    if tail:
        previous = node.getprevious()
        if previous is not None:
            previous.tail = (previous.tail or "") + tail
        else:
            parent.text = (parent.text or "") + tail
    parent.remove(node)
    return True


def _is_junk_element(element) -> bool:
    qname = etree.QName(element)
    return qname.namespace in JUNK_NAMESPACES or qname.localname in JUNK_LOCAL_NAMES


class MetadataStripper:
    """
    Strips design-tool metadata from SVG documents.

    Comments are dropped by the parser. The document is then walked once to
    collect junk elements and junk attributes; removal happens after the walk
    so the traversal is never invalidated.
    """

    def __init__(self, guard: Optional[XmlGuard] = None):
        """
        Initialize the stripper.

        Args:
            guard: XmlGuard used for parsing; should drop comments
        """
        self.guard = guard or XmlGuard(remove_comments=True)

    def strip(self, content: Union[bytes, str]) -> Union[bytes, Failure]:
        """
        Remove metadata from an SVG document.

        Args:
            content: SVG document as bytes or text

        Returns:
            Cleaned document as UTF-8 bytes, or a Failure
        """
        result = self.strip_with_report(content)
        if is_failure(result):
            return result
        return result[0]

    def strip_with_report(self, content: Union[bytes, str]) -> Union[Tuple[bytes, StripReport], Failure]:
        """Remove metadata and report what was removed."""
        document = self.guard.parse(content)
        if is_failure(document):
            return document

        root = document.root
        report = StripReport()

        elements: List = []
        attributes: List[Tuple] = []

        # Junk subtrees are not descended into; they go as a whole.
        stack = [root]
        while stack:
            node = stack.pop()
            for name in node.attrib:
                if etree.QName(name).namespace in JUNK_NAMESPACES:
                    attributes.append((node, name))
            for child in node:
                if not isinstance(child.tag, str):
                    continue
                if _is_junk_element(child):
                    elements.append(child)
                else:
                    stack.append(child)

        for node in elements:
            if _detach(node):
                report.elements += 1

        for node, name in attributes:
            if name in node.attrib:
                del node.attrib[name]
                report.attributes += 1

        for name in JUNK_ROOT_ATTRIBUTES:
            if name in root.attrib:
                del root.attrib[name]
                report.attributes += 1

        etree.cleanup_namespaces(root, keep_ns_prefixes=self._kept_prefixes(root))

        try:
            cleaned = document.to_bytes()
        except (etree.SerialisationError, ValueError) as e:
            logger.warning(f"Failed to serialize stripped SVG: {e}")
            return Failure(ErrorKind.SERIALIZATION_FAILURE, f"Could not serialize stripped SVG: {e}")

        if not cleaned:
            return Failure(ErrorKind.SERIALIZATION_FAILURE)

        logger.debug(f"Stripped {report.elements} elements and {report.attributes} attributes")
        return cleaned, report

    @staticmethod
    def _kept_prefixes(root) -> List[str]:
        """Prefixes whose declarations survive even when unused."""
        kept = set()
        for element in root.iter(tag=etree.Element):
            for prefix, uri in element.nsmap.items():
                if prefix is None or prefix in JUNK_PREFIXES or uri in JUNK_NAMESPACES:
                    continue
                kept.add(prefix)
        return sorted(kept)
