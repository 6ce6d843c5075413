"""
Generic XML node view over lxml.

lxml folds character data into ``.text`` / ``.tail`` of elements. The
dispatcher wants a DOM-like tree in which text, comments and processing
instructions are ordinary children, so this module flattens the lxml model
into ``XmlNode`` objects exposing one node kind per item.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import lxml.etree as ET

from .errors import XmlSyntaxError


logger = logging.getLogger(__name__)


class NodeKind(Enum):
    DOCUMENT = "document"
    ELEMENT = "element"
    TEXT = "text"
    PROCESSING_INSTRUCTION = "processing-instruction"
    COMMENT = "comment"


@dataclass(frozen=True)
class XmlAttribute:
    namespace: Optional[str]
    name: str
    value: str


@dataclass(frozen=True)
class XmlNode:
    """One node of the parsed document.

    ``source`` is the lxml object backing the node: an ``_ElementTree`` for
    the document, an element, comment or PI for the other kinds. Text nodes
    carry their character data in ``content`` instead.
    """
    kind: NodeKind
    source: object = None
    content: Optional[str] = None
    line: Optional[int] = None

    @property
    def tag_name(self) -> Optional[str]:
        """Local name of an element, without namespace."""
        if self.kind is not NodeKind.ELEMENT:
            return None
        return ET.QName(self.source).localname

    @property
    def namespace(self) -> Optional[str]:
        if self.kind is not NodeKind.ELEMENT:
            return None
        return ET.QName(self.source).namespace

    @property
    def attributes(self) -> List[XmlAttribute]:
        if self.kind is not NodeKind.ELEMENT:
            return []
        result = []
        for key, value in self.source.attrib.items():
            qname = ET.QName(key)
            result.append(XmlAttribute(qname.namespace, qname.localname, value))
        return result

    def attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Value of a namespace-less attribute."""
        if self.kind is not NodeKind.ELEMENT:
            return default
        return self.source.get(name, default)

    @property
    def text(self) -> Optional[str]:
        """Character data of a text node, or the leading text of an element."""
        if self.kind is NodeKind.TEXT:
            return self.content
        if self.kind is NodeKind.ELEMENT:
            return self.source.text
        if self.kind is NodeKind.COMMENT:
            return self.source.text or ''
        return None

    @property
    def target(self) -> Optional[str]:
        if self.kind is not NodeKind.PROCESSING_INSTRUCTION:
            return None
        return self.source.target

    @property
    def value(self) -> Optional[str]:
        if self.kind is not NodeKind.PROCESSING_INSTRUCTION:
            return None
        return self.source.text or None

    def children(self) -> List['XmlNode']:
        """Child nodes in document order."""
        if self.kind is NodeKind.DOCUMENT:
            root = self.source.getroot()
            preceding = list(root.itersiblings(preceding=True))
            preceding.reverse()
            return [_wrap(node) for node in preceding + [root] + list(root.itersiblings())]

        if self.kind is not NodeKind.ELEMENT:
            return []

        nodes = []
        element = self.source
        if element.text is not None:
            nodes.append(XmlNode(NodeKind.TEXT, content=element.text, line=element.sourceline))
        for child in element:
            nodes.append(_wrap(child))
            if child.tail is not None:
                nodes.append(XmlNode(NodeKind.TEXT, content=child.tail, line=child.sourceline))
        return nodes

    def document_element(self) -> 'XmlNode':
        if self.kind is not NodeKind.DOCUMENT:
            raise ValueError("document_element() is only defined for documents")
        return _wrap(self.source.getroot())

    def __repr__(self):
        if self.kind is NodeKind.ELEMENT:
            return f"XmlNode(<{self.tag_name}>, line={self.line})"
        if self.kind is NodeKind.TEXT:
            return f"XmlNode(text={self.content!r})"
        return f"XmlNode({self.kind.value})"


def _wrap(node) -> XmlNode:
    if isinstance(node, ET._Comment):
        return XmlNode(NodeKind.COMMENT, source=node, line=node.sourceline)
    if isinstance(node, ET._ProcessingInstruction):
        return XmlNode(NodeKind.PROCESSING_INSTRUCTION, source=node, line=node.sourceline)
    if isinstance(node.tag, str):
        return XmlNode(NodeKind.ELEMENT, source=node, line=node.sourceline)

    # Entity references only survive when the parser leaves them unresolved.
    raise XmlSyntaxError(f"Unresolved entity reference {node.text}", node.sourceline)


def _make_parser() -> ET.XMLParser:
    # The input is always re-encoded as UTF-8, so any declared encoding is ignored.
    return ET.XMLParser(
        encoding='utf-8',
        no_network=True,
        huge_tree=False,
        recover=False,
        resolve_entities=False,
    )


def parse_xml(text: str) -> XmlNode:
    """Parse XML text into a document node."""
    if not text.strip():
        raise XmlSyntaxError("Document is empty", 1)

    try:
        data = text.encode('utf-8')
    except UnicodeEncodeError as e:
        raise XmlSyntaxError(f"Input is not encodable as UTF-8: {e.reason}") from e

    try:
        root = ET.fromstring(data, parser=_make_parser())
    except ET.XMLSyntaxError as e:
        logger.debug(f"XML syntax error: {e}")
        raise XmlSyntaxError(str(e), e.lineno) from e

    return XmlNode(NodeKind.DOCUMENT, source=root.getroottree())
