"""
XML bridge for reading and writing POM documents safely.

Parsing is hardened against entity injection: no DOCTYPE is accepted, no
entity is ever resolved or expanded, no DTD is loaded and no network access
is allowed. XInclude is never processed. Serialization re-indents the whole
document so output is deterministic whatever the input formatting was.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, TextIO

from lxml import etree as ET

from ..core.exceptions import MalformedPomError, PomSerializationError

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Leading declaration (and BOM) of already-decoded text
DECLARATION_RE = re.compile(r"^\ufeff?<\?xml\s.*?\?>", re.DOTALL)


@dataclass(frozen=True)
class XMLSettings:
    """Read-only parser and serializer settings."""

    forbid_dtd: bool = True
    resolve_entities: bool = False
    load_dtd: bool = False
    no_network: bool = True
    huge_tree: bool = False
    indent: str = "  "
    encoding: str = "UTF-8"

    def parser(self) -> ET.XMLParser:
        """Build a fresh parser; lxml parsers are not safe to share between threads."""
        return ET.XMLParser(
            encoding="utf-8",
            resolve_entities=self.resolve_entities,
            load_dtd=self.load_dtd,
            dtd_validation=False,
            attribute_defaults=False,
            no_network=self.no_network,
            huge_tree=self.huge_tree,
            remove_blank_text=False,
            remove_comments=False,
            remove_pis=False,
        )


DEFAULT_SETTINGS = XMLSettings()


def parse_pom(source: TextIO, settings: XMLSettings = DEFAULT_SETTINGS) -> ET._ElementTree:
    """
    Parse a POM from a character stream.

    The stream is read to the end. Its XML declaration is dropped before
    parsing since the text is already decoded; ``serialize_pom`` always
    writes a fresh UTF-8 declaration. A ``standalone`` pseudo-attribute is
    not carried over: it only affects external DTD markup, and a DOCTYPE is
    never accepted.

    Raises:
        MalformedPomError: if the text is not well-formed XML or declares
            a DOCTYPE while ``settings.forbid_dtd`` is set.
    """
    text = DECLARATION_RE.sub("", source.read(), count=1)
    try:
        root = ET.fromstring(text.encode("utf-8"), settings.parser())
    except (ET.XMLSyntaxError, ValueError) as e:
        raise MalformedPomError(f"Unable to parse POM: {e}") from e

    tree = root.getroottree()
    if settings.forbid_dtd and _has_doctype(tree):
        raise MalformedPomError("DOCTYPE is disallowed in POM documents")

    logger.debug("Parsed POM with root element %s", root.tag)
    return tree


def _has_doctype(tree: ET._ElementTree) -> bool:
    docinfo = tree.docinfo
    return bool(docinfo.doctype) or docinfo.internalDTD is not None


def serialize_pom(
    tree: ET._ElementTree,
    target: TextIO,
    settings: XMLSettings = DEFAULT_SETTINGS,
) -> None:
    """
    Re-indent ``tree`` and write it to ``target`` with an XML declaration.

    The document is rendered to a string before anything is written, so a
    serialization failure never leaves partial output behind. A failure of
    ``target.write`` itself may.

    Raises:
        PomSerializationError: if rendering or writing fails.
    """
    if settings.encoding.upper() != "UTF-8":
        raise PomSerializationError(f"Unsupported output encoding: {settings.encoding}")

    try:
        ET.indent(tree, space=settings.indent)
        body = ET.tostring(tree, encoding="unicode", pretty_print=True)
    except (ET.LxmlError, ValueError, TypeError) as e:
        raise PomSerializationError(f"Unable to serialize POM: {e}") from e

    try:
        target.write(XML_DECLARATION)
        target.write(body)
    except (OSError, ValueError) as e:
        raise PomSerializationError(f"Unable to write POM: {e}") from e


def local_name(node: ET._Element) -> Optional[str]:
    """Tag name without namespace; ``None`` for comments, PIs and entities."""
    if not isinstance(node.tag, str):
        return None
    return ET.QName(node).localname


def qualified_name(namespace: Optional[str], name: str) -> str:
    """Clark-notation tag in ``namespace`` (or a bare tag when there is none)."""
    if namespace:
        return f"{{{namespace}}}{name}"
    return name


def namespace_of(node: ET._Element) -> Optional[str]:
    return ET.QName(node).namespace


def iter_child_elements(parent: ET._Element, name: str) -> Iterator[ET._Element]:
    namespace = namespace_of(parent)
    for child in parent:
        if local_name(child) == name and namespace_of(child) == namespace:
            yield child


def child_elements(parent: ET._Element, name: str) -> List[ET._Element]:
    """Direct element children named ``name`` in the parent's namespace, in document order."""
    return list(iter_child_elements(parent, name))


def first_child(parent: ET._Element, name: str) -> Optional[ET._Element]:
    return next(iter_child_elements(parent, name), None)


def text_content(element: ET._Element) -> str:
    """All descendant text of ``element``, comments excluded, untrimmed."""
    return str(element.xpath("string()"))
