"""
AST data model for Content MathML expressions.

All nodes are frozen dataclasses; child sequences are tuples and the foreign
attribute bag of ``Cn`` is a read-only mapping, so a tree cannot change once
the parser has built it.
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from .operators import OperatorTag


DEFAULT_EPSILON = 1e-9


# ---------------------------------------------------------------------------
# Numeric types
# ---------------------------------------------------------------------------

class NumType:
    """Base class of the numeric literal variants."""
    type_name = ''

    def to_dict(self) -> Dict[str, Any]:
        raise NotImplementedError


@dataclass(frozen=True)
class Real(NumType):
    value: float
    type_name = 'real'

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type_name, 'value': self.value}


@dataclass(frozen=True)
class Integer(NumType):
    value: int
    type_name = 'integer'

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type_name, 'value': self.value}


@dataclass(frozen=True)
class Rational(NumType):
    """Numerator / denominator pair exactly as written; never reduced."""
    numerator: int
    denominator: int
    type_name = 'rational'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type_name,
            'numerator': self.numerator,
            'denominator': self.denominator
        }


@dataclass(frozen=True)
class ComplexCartesian(NumType):
    real: float
    imaginary: float
    type_name = 'complex-cartesian'

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type_name, 'real': self.real, 'imaginary': self.imaginary}


@dataclass(frozen=True)
class ComplexPolar(NumType):
    modulus: float
    argument: float
    type_name = 'complex-polar'

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type_name, 'modulus': self.modulus, 'argument': self.argument}


@dataclass(frozen=True)
class Constant(NumType):
    """Symbolic constant name, e.g. ``$FIXED_tau`` for a sanitized ``&tau;``."""
    name: str
    type_name = 'constant'

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type_name, 'name': self.name}


@dataclass(frozen=True)
class ENotation(NumType):
    mantissa: float
    exponent: int
    type_name = 'e-notation'

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type_name, 'mantissa': self.mantissa, 'exponent': self.exponent}


_NUM_TYPES = {cls.type_name: cls for cls in (
    Real, Integer, Rational, ComplexCartesian, ComplexPolar, Constant, ENotation
)}


def num_type_from_dict(data: Dict[str, Any]) -> NumType:
    """Rebuild a numeric type from its ``to_dict()`` form."""
    cls = _NUM_TYPES.get(data.get('type'))
    if cls is None:
        raise ValueError(f"Unknown numeric type: {data.get('type')!r}")
    values = {k: v for k, v in data.items() if k != 'type'}
    return cls(**values)


# ---------------------------------------------------------------------------
# Tree nodes
# ---------------------------------------------------------------------------

class MathNode:
    """Base class of all AST nodes."""
    node_type = ''

    def to_dict(self) -> Dict[str, Any]:
        raise NotImplementedError


def _freeze_children(node, children: Sequence[MathNode]):
    object.__setattr__(node, 'children', tuple(children))


def _children_to_dict(node_type: str, children: Tuple[MathNode, ...]) -> Dict[str, Any]:
    return {'type': node_type, 'children': [c.to_dict() for c in children]}


@dataclass(frozen=True)
class Apply(MathNode):
    """N-ary operator application; the operator is normally the first child."""
    children: Tuple[MathNode, ...] = ()
    node_type = 'apply'

    def __post_init__(self):
        _freeze_children(self, self.children)

    def to_dict(self) -> Dict[str, Any]:
        return _children_to_dict(self.node_type, self.children)


@dataclass(frozen=True)
class Op(MathNode):
    tag: OperatorTag
    node_type = 'op'

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.node_type, 'tag': self.tag.value}


@dataclass(frozen=True)
class Text(MathNode):
    value: str
    node_type = 'text'

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.node_type, 'value': self.value}


@dataclass(frozen=True)
class Root(MathNode):
    """Top-level ``<math>`` wrapper."""
    children: Tuple[MathNode, ...] = ()
    node_type = 'root'

    def __post_init__(self):
        _freeze_children(self, self.children)

    def to_dict(self) -> Dict[str, Any]:
        return _children_to_dict(self.node_type, self.children)


@dataclass(frozen=True)
class Ci(MathNode):
    """Content identifier."""
    children: Tuple[MathNode, ...] = ()
    node_type = 'ci'

    def __post_init__(self):
        _freeze_children(self, self.children)

    def to_dict(self) -> Dict[str, Any]:
        return _children_to_dict(self.node_type, self.children)


@dataclass(frozen=True)
class Csymbol(MathNode):
    """Externally defined symbol referenced by ``definition_url``."""
    definition_url: str
    encoding: Optional[str] = None
    children: Tuple[MathNode, ...] = ()
    node_type = 'csymbol'

    def __post_init__(self):
        _freeze_children(self, self.children)

    def to_dict(self) -> Dict[str, Any]:
        result = _children_to_dict(self.node_type, self.children)
        result['definition_url'] = self.definition_url
        if self.encoding is not None:
            result['encoding'] = self.encoding
        return result


@dataclass(frozen=True)
class Cn(MathNode):
    """Numeric literal.

    ``attributes`` holds namespace-qualified foreign attributes (such as
    SBML units) keyed ``"<namespace>:<localName>"`` in document order, or
    None when the element had none.
    """
    num_type: NumType
    base: int = 10
    definition_url: Optional[str] = None
    encoding: Optional[str] = None
    attributes: Optional[Mapping[str, str]] = field(default=None, hash=False)
    node_type = 'cn'

    def __post_init__(self):
        if self.attributes is not None:
            object.__setattr__(self, 'attributes', MappingProxyType(dict(self.attributes)))

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'type': self.node_type,
            'num_type': self.num_type.to_dict(),
            'base': self.base
        }
        if self.definition_url is not None:
            result['definition_url'] = self.definition_url
        if self.encoding is not None:
            result['encoding'] = self.encoding
        if self.attributes is not None:
            result['attributes'] = dict(self.attributes)
        return result


@dataclass(frozen=True)
class Comment(MathNode):
    text: str
    node_type = 'comment'

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.node_type, 'text': self.text}


@dataclass(frozen=True)
class PI(MathNode):
    """Processing instruction."""
    target: str
    value: Optional[str] = None
    node_type = 'pi'

    def to_dict(self) -> Dict[str, Any]:
        result = {'type': self.node_type, 'target': self.target}
        if self.value is not None:
            result['value'] = self.value
        return result


def node_from_dict(data: Dict[str, Any]) -> MathNode:
    """Rebuild an AST from its ``to_dict()`` form."""
    node_type = data.get('type')

    if node_type in ('apply', 'root', 'ci'):
        children = [node_from_dict(c) for c in data.get('children', [])]
        return {'apply': Apply, 'root': Root, 'ci': Ci}[node_type](children)
    if node_type == 'op':
        return Op(OperatorTag(data['tag']))
    if node_type == 'text':
        return Text(data['value'])
    if node_type == 'csymbol':
        return Csymbol(
            definition_url=data['definition_url'],
            encoding=data.get('encoding'),
            children=[node_from_dict(c) for c in data.get('children', [])]
        )
    if node_type == 'cn':
        return Cn(
            num_type=num_type_from_dict(data['num_type']),
            base=data.get('base', 10),
            definition_url=data.get('definition_url'),
            encoding=data.get('encoding'),
            attributes=data.get('attributes')
        )
    if node_type == 'comment':
        return Comment(data['text'])
    if node_type == 'pi':
        return PI(data['target'], data.get('value'))

    raise ValueError(f"Unknown node type: {node_type!r}")


# ---------------------------------------------------------------------------
# Tolerant comparison
# ---------------------------------------------------------------------------

def _floats_close(a: float, b: float, epsilon: float) -> bool:
    return math.isclose(a, b, rel_tol=0.0, abs_tol=epsilon)


def num_types_close(a: NumType, b: NumType, epsilon: float = DEFAULT_EPSILON) -> bool:
    """Compare numeric literals, allowing ``epsilon`` on float components.

    Integer, Rational, Constant and the ENotation exponent compare exactly.
    Values of different variants are never close.
    """
    if type(a) is not type(b):
        return False

    if isinstance(a, Real):
        return _floats_close(a.value, b.value, epsilon)
    if isinstance(a, ComplexCartesian):
        return (_floats_close(a.real, b.real, epsilon)
                and _floats_close(a.imaginary, b.imaginary, epsilon))
    if isinstance(a, ComplexPolar):
        return (_floats_close(a.modulus, b.modulus, epsilon)
                and _floats_close(a.argument, b.argument, epsilon))
    if isinstance(a, ENotation):
        return _floats_close(a.mantissa, b.mantissa, epsilon) and a.exponent == b.exponent

    return a == b


def nodes_close(a: MathNode, b: MathNode, epsilon: float = DEFAULT_EPSILON) -> bool:
    """Structural tree comparison using ``num_types_close`` for literals."""
    if type(a) is not type(b):
        return False

    if isinstance(a, Cn):
        return (num_types_close(a.num_type, b.num_type, epsilon)
                and a.base == b.base
                and a.definition_url == b.definition_url
                and a.encoding == b.encoding
                and a.attributes == b.attributes)

    if isinstance(a, (Apply, Root, Ci, Csymbol)):
        if isinstance(a, Csymbol) and (a.definition_url, a.encoding) != (b.definition_url, b.encoding):
            return False
        if len(a.children) != len(b.children):
            return False
        return all(nodes_close(x, y, epsilon) for x, y in zip(a.children, b.children))

    return a == b
