"""
Exceptions raised while converting Content MathML into an AST.

Every error is terminal for the parse call that raised it: no partial tree is
ever returned.
"""

from typing import Optional, Tuple, Union


class MathMLError(Exception):
    """Base class for all conversion errors."""


class XmlSyntaxError(MathMLError):
    """The (sanitized) input is not well-formed XML."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.message = message
        self.line = line
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)


class UnsupportedTagError(MathMLError):
    """An element outside the supported vocabulary was found."""

    def __init__(self, tag: str, line: Optional[int] = None):
        self.tag = tag
        self.line = line
        location = f" at line {line}" if line is not None else ""
        super().__init__(f"Unsupported tag <{tag}>{location}")


class UnsupportedNumericTypeError(MathMLError):
    def __init__(self, type_string: str):
        self.type_string = type_string
        super().__init__(f"Unsupported numeric type: {type_string!r}")


class MalformedNumericLiteralError(MathMLError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Malformed numeric literal: {reason}")


class MissingRequiredAttributeError(MathMLError):
    def __init__(self, attribute: str, tag: str):
        self.attribute = attribute
        self.tag = tag
        super().__init__(f"<{tag}> is missing required attribute {attribute!r}")


class UnexpectedChildCountError(MathMLError):
    """A numeric literal has the wrong number of child nodes."""

    def __init__(self, expected: Union[int, Tuple[int, ...]], actual: int):
        self.expected = expected
        self.actual = actual
        if isinstance(expected, tuple):
            wanted = " or ".join(str(e) for e in expected)
        else:
            wanted = str(expected)
        super().__init__(f"Expected {wanted} child nodes, found {actual}")


class InvalidBaseError(MathMLError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid numeric base: {value!r}")


class MaxDepthExceededError(MathMLError):
    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"Document nesting exceeds maximum depth of {max_depth}")
