"""
Hardened XML parsing for untrusted SVG documents.

Every document handled by the pipeline is parsed here. Parsing happens in two
stages, each configured per call so that no process-wide parser state is
touched:

1. defusedxml screens the payload. External references, parameter entities
   and entities built from other entities are rejected (XXE, billion laughs).
   Plain literal entities, such as the namespace shorthands Illustrator
   declares in every export, are allowed.
2. lxml builds the working tree with network access and DTD loading disabled,
   resolving only internal entities. lxml keeps namespace prefixes, comments
   and processing instructions.
"""
import logging
from typing import Optional, Union

import defusedxml
import defusedxml.ElementTree as DefusedET
from lxml import etree

from svg_ninja.core.errors import ErrorKind
from svg_ninja.core.models import Failure

logger = logging.getLogger(__name__)

MAX_ENTITY_LENGTH = 1024


class LiteralEntityParser(DefusedET.DefusedXMLParser):
    """defusedxml parser that lets through short literal internal entities."""

    def defused_entity_decl(self, name, is_parameter_entity, value, base, sysid, pubid, notation_name):
        if (
            is_parameter_entity
            or value is None
            or sysid or pubid or notation_name
            or "&" in value or "%" in value
            or len(value) > MAX_ENTITY_LENGTH
        ):
            super().defused_entity_decl(name, is_parameter_entity, value, base, sysid, pubid, notation_name)


class ParsedDocument:
    """An lxml tree produced by XmlGuard."""

    def __init__(self, tree: etree._ElementTree):
        self.tree = tree

    @property
    def root(self) -> etree._Element:
        return self.tree.getroot()

    @property
    def doctype(self) -> Optional[str]:
        return self.tree.docinfo.doctype or None

    def to_bytes(self) -> bytes:
        """Serialize the whole document, prolog included, as UTF-8."""
        return etree.tostring(self.tree, xml_declaration=True, encoding="UTF-8")

    def to_text(self) -> str:
        """Serialize the whole document as text, without an XML declaration."""
        return etree.tostring(self.tree, encoding="unicode")


class XmlGuard:
    """
    Parses untrusted XML without resolving external entities or touching the
    network.

    Parse errors are returned as Failure values, never raised.
    """

    def __init__(self, remove_comments: bool = False):
        """
        Initialize the guard.

        Args:
            remove_comments: Drop comment nodes while parsing
        """
        self.remove_comments = remove_comments

    def _make_parser(self) -> etree.XMLParser:
        return etree.XMLParser(
            resolve_entities="internal",
            no_network=True,
            load_dtd=False,
            dtd_validation=False,
            huge_tree=False,
            remove_comments=self.remove_comments,
        )

    @staticmethod
    def _screen(content: bytes) -> None:
        parser = LiteralEntityParser(forbid_dtd=False, forbid_entities=True, forbid_external=True)
        parser.feed(content)
        parser.close()

    def parse(self, content: Union[bytes, str]) -> Union[ParsedDocument, Failure]:
        """
        Parse XML content.

        Args:
            content: XML as bytes or text

        Returns:
            ParsedDocument on success, Failure(MALFORMED_XML) otherwise
        """
        if isinstance(content, str):
            content = content.encode("utf-8")

        if not content:
            return Failure(ErrorKind.MALFORMED_XML, "Invalid XML: document is empty")

        try:
            self._screen(content)
        except defusedxml.DefusedXmlException as e:
            logger.warning(f"Rejected XML with forbidden construct: {e}")
            return Failure(ErrorKind.MALFORMED_XML, f"Forbidden XML construct: {e}")
        except (DefusedET.ParseError, ValueError) as e:
            logger.debug(f"XML screening failed: {e}")
            return Failure(ErrorKind.MALFORMED_XML, f"Invalid XML: {e}")

        try:
            root = etree.fromstring(content, self._make_parser())
        except (etree.XMLSyntaxError, ValueError) as e:
            logger.debug(f"lxml parsing failed: {e}")
            return Failure(ErrorKind.MALFORMED_XML, f"Invalid XML: {e}")

        if root is None:
            return Failure(ErrorKind.MALFORMED_XML, "Invalid XML: no root element")

        return ParsedDocument(root.getroottree())
