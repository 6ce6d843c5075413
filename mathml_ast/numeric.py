"""
Decoder for ``<cn>`` numeric literals.

Supported ``type`` values::

    real                 <cn> 12345.7 </cn>
    integer              <cn type="integer" base="16"> AB3 </cn>
    rational             <cn type="rational"> 1 <sep/> 3 </cn>
    complex-cartesian    <cn type="complex-cartesian"> 12.3 <sep/> 5 </cn>
    complex-polar        <cn type="complex-polar"> 2 <sep/> 3.1415 </cn>
    constant             <cn type="constant"> $FIXED_tau </cn>
    e-notation           <cn type="e-notation"> 2 <sep/> -5 </cn>
                         <cn type="e-notation"> 2e-5 </cn>    (SBML)
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

import regex

from .errors import (
    InvalidBaseError,
    MalformedNumericLiteralError,
    UnexpectedChildCountError,
    UnsupportedNumericTypeError,
)
from .models import (
    Cn,
    ComplexCartesian,
    ComplexPolar,
    Constant,
    ENotation,
    Integer,
    NumType,
    Rational,
    Real,
)
from .xml_tree import NodeKind, XmlNode


logger = logging.getLogger(__name__)

DEFAULT_TYPE = 'real'
DEFAULT_BASE = 10
MIN_BASE = 2
MAX_BASE = 36

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

DEFINITION_URL_ATTRIBUTES = ('definitionUrl', 'definitionURL')

SEPARATOR_TAG = 'sep'

_DIGITS = '0123456789abcdefghijklmnopqrstuvwxyz'
_BASE_PATTERN = regex.compile(r'\+?[0-9]+')
_INTEGER_PATTERN = regex.compile(r'([+-]?)([0-9A-Za-z]+)')
_FLOAT_PATTERN = regex.compile(
    r'[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)',
    regex.IGNORECASE
)
_EXPONENT_SPLIT_PATTERN = regex.compile(r'[eE]')


def parse_base(text: str) -> int:
    """Parse the ``base`` attribute as an unsigned decimal integer."""
    if not _BASE_PATTERN.fullmatch(text):
        raise InvalidBaseError(text)
    return int(text)


def parse_integer(text: str, base: int = 10) -> int:
    """Parse a signed 64-bit integer written in ``base``."""
    if not MIN_BASE <= base <= MAX_BASE:
        raise InvalidBaseError(str(base))

    text = text.strip()
    match = _INTEGER_PATTERN.fullmatch(text)
    if not match:
        raise MalformedNumericLiteralError(f"{text!r} is not an integer")

    valid_digits = _DIGITS[:base]
    if any(c not in valid_digits for c in match.group(2).lower()):
        raise MalformedNumericLiteralError(f"{text!r} is not an integer in base {base}")

    value = int(text, base)
    if not INT64_MIN <= value <= INT64_MAX:
        raise MalformedNumericLiteralError(f"{text!r} does not fit in 64 bits")
    return value


def parse_float(text: str) -> float:
    text = text.strip()
    if not _FLOAT_PATTERN.fullmatch(text):
        raise MalformedNumericLiteralError(f"{text!r} is not a floating point number")
    return float(text)


def harvest_attributes(node: XmlNode) -> Optional[Dict[str, str]]:
    """Collect namespace-qualified attributes keyed ``"<namespace>:<name>"``.

    Vendor extensions (SBML units and the like) always arrive namespaced,
    so namespace presence is what separates them from plain MathML
    attributes such as type, base, encoding, definitionUrl or units.
    Returns None when nothing was collected.
    """
    harvested = {}
    for attribute in node.attributes:
        if attribute.namespace is None:
            continue
        harvested[f"{attribute.namespace}:{attribute.name}"] = attribute.value
    return harvested or None


def find_definition_url(node: XmlNode) -> Optional[str]:
    for name in DEFINITION_URL_ATTRIBUTES:
        value = node.attribute(name)
        if value is not None:
            return value
    return None


def _text_of(node: XmlNode) -> str:
    if node.kind is not NodeKind.TEXT:
        raise MalformedNumericLiteralError(f"expected text, found {node!r}")
    return node.content


def _sole_text(node: XmlNode) -> str:
    children = node.children()
    if len(children) != 1:
        raise UnexpectedChildCountError(1, len(children))
    return _text_of(children[0])


def _separated_pair(children: List[XmlNode]) -> Tuple[str, str]:
    """Split ``text <sep/> text`` children into the two texts."""
    if len(children) != 3:
        raise UnexpectedChildCountError(3, len(children))

    first, separator, last = children
    if separator.kind is not NodeKind.ELEMENT or separator.tag_name != SEPARATOR_TAG:
        raise MalformedNumericLiteralError(f"expected <{SEPARATOR_TAG}/>, found {separator!r}")
    return _text_of(first), _text_of(last)


class NumericLiteralDecoder:
    """Turns a ``<cn>`` element into a ``Cn`` node."""

    def __init__(self):
        self._decoders: Dict[str, Callable[[XmlNode, int], NumType]] = {
            'real': self._decode_real,
            'integer': self._decode_integer,
            'rational': self._decode_rational,
            'complex-cartesian': self._decode_complex_cartesian,
            'complex-polar': self._decode_complex_polar,
            'constant': self._decode_constant,
            'e-notation': self._decode_e_notation,
        }

    @property
    def supported_types(self) -> Tuple[str, ...]:
        return tuple(self._decoders)

    def decode(self, node: XmlNode) -> Cn:
        type_name = node.attribute('type', DEFAULT_TYPE)
        base = parse_base(node.attribute('base', str(DEFAULT_BASE)))

        decoder = self._decoders.get(type_name)
        if decoder is None:
            raise UnsupportedNumericTypeError(type_name)

        num_type = decoder(node, base)
        logger.debug(f"Decoded <cn type={type_name!r}> at line {node.line}: {num_type}")

        return Cn(
            num_type=num_type,
            base=base,
            definition_url=find_definition_url(node),
            encoding=node.attribute('encoding'),
            attributes=harvest_attributes(node)
        )

    def _decode_real(self, node: XmlNode, base: int) -> NumType:
        return Real(parse_float(_sole_text(node)))

    def _decode_integer(self, node: XmlNode, base: int) -> NumType:
        return Integer(parse_integer(_sole_text(node), base))

    def _decode_rational(self, node: XmlNode, base: int) -> NumType:
        numerator, denominator = _separated_pair(node.children())
        return Rational(parse_integer(numerator, base), parse_integer(denominator, base))

    def _decode_complex_cartesian(self, node: XmlNode, base: int) -> NumType:
        real, imaginary = _separated_pair(node.children())
        return ComplexCartesian(parse_float(real), parse_float(imaginary))

    def _decode_complex_polar(self, node: XmlNode, base: int) -> NumType:
        modulus, argument = _separated_pair(node.children())
        return ComplexPolar(parse_float(modulus), parse_float(argument))

    def _decode_constant(self, node: XmlNode, base: int) -> NumType:
        return Constant(_sole_text(node).strip())

    def _decode_e_notation(self, node: XmlNode, base: int) -> NumType:
        children = node.children()

        if len(children) == 3:
            mantissa, exponent = _separated_pair(children)
        elif len(children) == 1:
            # SBML writes the whole literal as a single "<number>e<exponent>"
            parts = _EXPONENT_SPLIT_PATTERN.split(_text_of(children[0]))
            if len(parts) != 2:
                raise MalformedNumericLiteralError(
                    f"{children[0].content.strip()!r} is not of the form <number>e<exponent>"
                )
            mantissa, exponent = parts
        else:
            raise UnexpectedChildCountError((1, 3), len(children))

        return ENotation(parse_float(mantissa), parse_integer(exponent, 10))
