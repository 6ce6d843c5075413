"""
MathML AST

Converts MathML Content Markup (including SBML-embedded fragments) into a
strongly-typed, immutable abstract syntax tree.
"""

__version__ = "0.1.0"
__author__ = "MathML AST Team"

# Import models
from .models import (
    MathNode,
    Apply,
    Op,
    Text,
    Root,
    Ci,
    Csymbol,
    Cn,
    Comment,
    PI,
    NumType,
    Real,
    Integer,
    Rational,
    ComplexCartesian,
    ComplexPolar,
    Constant,
    ENotation,
    DEFAULT_EPSILON,
    num_types_close,
    nodes_close,
    node_from_dict,
    num_type_from_dict
)

# Import errors
from .errors import (
    MathMLError,
    XmlSyntaxError,
    UnsupportedTagError,
    UnsupportedNumericTypeError,
    MalformedNumericLiteralError,
    MissingRequiredAttributeError,
    UnexpectedChildCountError,
    InvalidBaseError,
    MaxDepthExceededError
)

# Import configuration
from .config import ParserConfig

# Import core components
from .operators import OperatorTag, classify_operator
from .sanitizer import EntitySanitizer, sanitize_xml
from .numeric import NumericLiteralDecoder
from .parser import MathMLContentParser, parse_document

__all__ = [
    # Version
    "__version__",

    # Models
    "MathNode",
    "Apply",
    "Op",
    "Text",
    "Root",
    "Ci",
    "Csymbol",
    "Cn",
    "Comment",
    "PI",
    "NumType",
    "Real",
    "Integer",
    "Rational",
    "ComplexCartesian",
    "ComplexPolar",
    "Constant",
    "ENotation",
    "DEFAULT_EPSILON",
    "num_types_close",
    "nodes_close",
    "node_from_dict",
    "num_type_from_dict",

    # Errors
    "MathMLError",
    "XmlSyntaxError",
    "UnsupportedTagError",
    "UnsupportedNumericTypeError",
    "MalformedNumericLiteralError",
    "MissingRequiredAttributeError",
    "UnexpectedChildCountError",
    "InvalidBaseError",
    "MaxDepthExceededError",

    # Configuration
    "ParserConfig",

    # Core components
    "OperatorTag",
    "classify_operator",
    "EntitySanitizer",
    "sanitize_xml",
    "NumericLiteralDecoder",
    "MathMLContentParser",
    "parse_document"
]

# Convenience function
def create_parser(**kwargs):
    """Create a configured Content MathML parser instance."""
    config = ParserConfig(**kwargs)
    return MathMLContentParser(config)
