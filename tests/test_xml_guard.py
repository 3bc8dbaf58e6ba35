"""
Tests for hardened XML parsing.
"""

import threading
import unittest

from svg_ninja.core.errors import ErrorKind
from svg_ninja.core.models import Failure
from svg_ninja.core.xml_guard import ParsedDocument, XmlGuard

XXE_FILE = (
    b'<?xml version="1.0"?>'
    b'<!DOCTYPE svg [<!ENTITY xxe SYSTEM "file:///etc/passwd">]>'
    b'<svg xmlns="http://www.w3.org/2000/svg">&xxe;</svg>'
)

XXE_NETWORK = (
    b'<!DOCTYPE svg [<!ENTITY remote SYSTEM "http://127.0.0.1:9/secret">]>'
    b'<svg xmlns="http://www.w3.org/2000/svg"><text>&remote;</text></svg>'
)

BILLION_LAUGHS = (
    b'<?xml version="1.0"?>'
    b'<!DOCTYPE lolz [<!ENTITY lol "lol">'
    b'<!ENTITY lol2 "&lol;&lol;&lol;&lol;&lol;&lol;&lol;&lol;&lol;&lol;">'
    b'<!ENTITY lol3 "&lol2;&lol2;&lol2;&lol2;&lol2;&lol2;&lol2;&lol2;&lol2;&lol2;">]>'
    b'<svg xmlns="http://www.w3.org/2000/svg">&lol3;</svg>'
)

SVG11_DOCTYPE = (
    b'<?xml version="1.0" encoding="UTF-8"?>\n'
    b'<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
    b'"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">\n'
    b'<svg xmlns="http://www.w3.org/2000/svg" width="20" height="20"><rect width="5" height="5"/></svg>'
)

ILLUSTRATOR_PROLOG = b'''<?xml version="1.0" encoding="utf-8"?>
<!-- Generator: Adobe Illustrator 16.0.0, SVG Export Plug-In . SVG Version: 6.00 Build 0)  -->
<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" "http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd" [
	<!ENTITY ns_extend "http://ns.adobe.com/Extensibility/1.0/">
	<!ENTITY ns_ai "http://ns.adobe.com/AdobeIllustrator/10.0/">
	<!ENTITY ns_graphs "http://ns.adobe.com/Graphs/1.0/">
	<!ENTITY ns_vars "http://ns.adobe.com/Variables/1.0/">
]>
<svg version="1.1" xmlns:x="&ns_extend;" xmlns:i="&ns_ai;" xmlns:graph="&ns_graphs;"
	 xmlns="http://www.w3.org/2000/svg" width="64px" height="32px">
<foreignObject requiredExtensions="&ns_ai;" width="1" height="1"/>
<g i:extraneous="self"><rect width="64" height="32"/></g>
</svg>
'''

PARAMETER_ENTITY = (
    b'<!DOCTYPE svg [<!ENTITY % remote SYSTEM "http://127.0.0.1:9/evil.dtd"> %remote;]>'
    b'<svg xmlns="http://www.w3.org/2000/svg"/>'
)

STYLESHEET_PI = b'<?xml-stylesheet href="a.css" type="text/css"?><svg xmlns="http://www.w3.org/2000/svg"/>'


class TestXmlGuard(unittest.TestCase):
    """Tests for the XmlGuard class."""

    def setUp(self):
        """Set up test fixtures."""
        self.guard = XmlGuard()

    def test_parses_well_formed_svg(self):
        document = self.guard.parse(b'<svg xmlns="http://www.w3.org/2000/svg"><g/></svg>')
        self.assertIsInstance(document, ParsedDocument)
        self.assertEqual(document.root.tag, "{http://www.w3.org/2000/svg}svg")

    def test_accepts_text_with_encoding_declaration(self):
        document = self.guard.parse('<?xml version="1.0" encoding="UTF-8"?><svg/>')
        self.assertIsInstance(document, ParsedDocument)

    def test_malformed_xml_is_a_failure_value(self):
        result = self.guard.parse(b"<svg><g></svg>")
        self.assertIsInstance(result, Failure)
        self.assertEqual(result.kind, ErrorKind.MALFORMED_XML)

    def test_empty_input(self):
        result = self.guard.parse(b"")
        self.assertEqual(result.kind, ErrorKind.MALFORMED_XML)

    def test_binary_garbage(self):
        result = self.guard.parse(b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01")
        self.assertEqual(result.kind, ErrorKind.MALFORMED_XML)

    def test_external_file_entity_is_rejected(self):
        result = self.guard.parse(XXE_FILE)
        self.assertIsInstance(result, Failure)
        self.assertEqual(result.kind, ErrorKind.MALFORMED_XML)
        self.assertNotIn("root:", result.message)

    def test_external_network_entity_is_rejected(self):
        result = self.guard.parse(XXE_NETWORK)
        self.assertEqual(result.kind, ErrorKind.MALFORMED_XML)

    def test_entity_expansion_is_rejected(self):
        result = self.guard.parse(BILLION_LAUGHS)
        self.assertEqual(result.kind, ErrorKind.MALFORMED_XML)

    def test_public_svg_doctype_is_allowed(self):
        document = self.guard.parse(SVG11_DOCTYPE)
        self.assertIsInstance(document, ParsedDocument)
        self.assertIn("svg11.dtd", document.doctype)

    def test_serialization_keeps_doctype(self):
        document = self.guard.parse(SVG11_DOCTYPE)
        output = document.to_bytes()
        self.assertTrue(output.startswith(b"<?xml"))
        self.assertIn(b"<!DOCTYPE svg", output)
        self.assertIn(b"<rect", output)

    def test_serialization_keeps_processing_instructions(self):
        output = self.guard.parse(STYLESHEET_PI).to_bytes()
        self.assertIn(b'<?xml-stylesheet href="a.css" type="text/css"?>', output)

    def test_text_serialization_has_no_declaration(self):
        text = self.guard.parse(b'<?xml version="1.0" encoding="UTF-8"?><svg width="1"/>').to_text()
        self.assertIsInstance(text, str)
        self.assertTrue(text.startswith("<svg"))

    def test_illustrator_namespace_entities_are_resolved(self):
        document = self.guard.parse(ILLUSTRATOR_PROLOG)

        self.assertIsInstance(document, ParsedDocument)
        self.assertEqual(document.root.nsmap["i"], "http://ns.adobe.com/AdobeIllustrator/10.0/")
        self.assertEqual(document.root.nsmap["x"], "http://ns.adobe.com/Extensibility/1.0/")
        foreign = document.root.find("{http://www.w3.org/2000/svg}foreignObject")
        self.assertEqual(foreign.get("requiredExtensions"), "http://ns.adobe.com/AdobeIllustrator/10.0/")

    def test_parameter_entity_is_rejected(self):
        result = self.guard.parse(PARAMETER_ENTITY)
        self.assertEqual(result.kind, ErrorKind.MALFORMED_XML)

    def test_oversized_literal_entity_is_rejected(self):
        content = (
            b'<!DOCTYPE svg [<!ENTITY big "' + b"a" * 5000 + b'">]>'
            b'<svg xmlns="http://www.w3.org/2000/svg"><text>&big;&big;</text></svg>'
        )
        self.assertEqual(self.guard.parse(content).kind, ErrorKind.MALFORMED_XML)

    def test_concurrent_parses_stay_isolated(self):
        results = {"valid": [], "hostile": []}
        lock = threading.Lock()

        def worker():
            for _ in range(20):
                valid = self.guard.parse(ILLUSTRATOR_PROLOG)
                hostile = self.guard.parse(XXE_FILE)
                with lock:
                    results["valid"].append(valid)
                    results["hostile"].append(hostile)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(results["valid"]), 160)
        for document in results["valid"]:
            self.assertIsInstance(document, ParsedDocument)
        for failure in results["hostile"]:
            self.assertIsInstance(failure, Failure)
            self.assertNotIn("root:", failure.message)

    def test_comments_kept_unless_requested(self):
        content = b'<svg xmlns="http://www.w3.org/2000/svg"><!-- note --><g/></svg>'
        self.assertIn(b"<!-- note -->", self.guard.parse(content).to_bytes())
        self.assertNotIn(b"note", XmlGuard(remove_comments=True).parse(content).to_bytes())


if __name__ == "__main__":
    unittest.main()
