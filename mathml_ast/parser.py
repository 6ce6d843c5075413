"""
Content MathML to AST conversion.

    raw text -> sanitizer -> lxml tree -> structural dispatch -> MathNode
"""

import logging
from typing import Callable, Dict, List, Optional

from .config import ParserConfig
from .errors import MathMLError, MaxDepthExceededError, MissingRequiredAttributeError, UnsupportedTagError
from .models import Apply, Ci, Comment, Csymbol, MathNode, Op, PI, Root, Text
from .numeric import DEFINITION_URL_ATTRIBUTES, NumericLiteralDecoder, find_definition_url
from .operators import classify_operator
from .sanitizer import ENTITY_REGISTRY, EntitySanitizer, get_default_sanitizer
from .xml_tree import NodeKind, XmlNode, parse_xml


logger = logging.getLogger(__name__)


def _has_text(node: MathNode) -> bool:
    return not (isinstance(node, Text) and node.value == '')


class MathMLContentParser:
    """Convert Content MathML documents or SBML fragments into ``MathNode`` trees."""

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()

        if self.config.extra_entities:
            self.sanitizer = EntitySanitizer(ENTITY_REGISTRY + tuple(self.config.extra_entities))
        else:
            self.sanitizer = get_default_sanitizer()

        self.number_decoder = NumericLiteralDecoder()
        self._element_handlers: Dict[str, Callable[[XmlNode, int], MathNode]] = {
            'apply': self._convert_apply,
            'ci': self._convert_ci,
            'csymbol': self._convert_csymbol,
            'cn': self._convert_cn,
        }

        # Setup logging
        if self.config.verbose:
            logging.basicConfig(level=logging.INFO)
        if self.config.debug:
            logging.basicConfig(level=logging.DEBUG)

    def parse(self, text: str) -> MathNode:
        """Parse one document.

        Raises a ``MathMLError`` subclass for any problem; a document is
        either converted completely or rejected.
        """
        logger.debug(f"Parsing MathML document ({len(text)} chars)")
        sanitized = self.sanitizer.sanitize(text)

        try:
            document = parse_xml(sanitized)
            result = self.convert(document)
        except RecursionError as e:
            logger.debug("Rejected document: interpreter recursion limit reached")
            raise MaxDepthExceededError(self.config.max_depth) from e
        except MathMLError as e:
            logger.debug(f"Rejected document: {e}")
            raise

        logger.debug(f"Parsed MathML document into {type(result).__name__}")
        return result

    def convert(self, node: XmlNode, depth: int = 0) -> MathNode:
        """Convert a single XML node (and its subtree) into an AST node."""
        if depth > self.config.max_depth:
            raise MaxDepthExceededError(self.config.max_depth)

        kind = node.kind
        if kind is NodeKind.TEXT:
            return Text(node.content.strip())
        if kind is NodeKind.DOCUMENT:
            return self.convert(node.document_element(), depth)
        if kind is NodeKind.ELEMENT:
            return self._convert_element(node, depth)
        if kind is NodeKind.PROCESSING_INSTRUCTION:
            return PI(node.target, node.value)
        if kind is NodeKind.COMMENT:
            return Comment(node.text)

        raise ValueError(f"Unknown node kind: {kind}")

    def convert_children(self, node: XmlNode, depth: int) -> List[MathNode]:
        """Convert children in document order, dropping empty text."""
        result = []
        for child in node.children():
            converted = self.convert(child, depth + 1)
            if _has_text(converted):
                result.append(converted)
        return result

    def _convert_element(self, node: XmlNode, depth: int) -> MathNode:
        tag = node.tag_name

        if tag == self.config.root_tag:
            return Root(self.convert_children(node, depth))

        # Operators are leaves, whatever they contain.
        op = classify_operator(tag)
        if op is not None:
            return Op(op)

        handler = self._element_handlers.get(tag)
        if handler is None:
            raise UnsupportedTagError(tag, node.line)
        return handler(node, depth)

    def _convert_apply(self, node: XmlNode, depth: int) -> MathNode:
        return Apply(self.convert_children(node, depth))

    def _convert_ci(self, node: XmlNode, depth: int) -> MathNode:
        return Ci(self.convert_children(node, depth))

    def _convert_csymbol(self, node: XmlNode, depth: int) -> MathNode:
        definition_url = find_definition_url(node)
        if definition_url is None:
            raise MissingRequiredAttributeError(DEFINITION_URL_ATTRIBUTES[0], 'csymbol')

        return Csymbol(
            definition_url=definition_url,
            encoding=node.attribute('encoding'),
            children=self.convert_children(node, depth)
        )

    def _convert_cn(self, node: XmlNode, depth: int) -> MathNode:
        return self.number_decoder.decode(node)


def parse_document(text: str, config: Optional[ParserConfig] = None) -> MathNode:
    """Convert Content MathML text into an AST.

    Accepts a full ``<math>`` document or a bare ``apply`` / ``ci`` / ``cn`` /
    ``csymbol`` fragment as found in SBML.
    """
    return MathMLContentParser(config).parse(text)
