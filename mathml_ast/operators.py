"""
Operator vocabulary of Content MathML.

Tags listed here are always turned into ``Op`` leaves, whatever children they
carry.
"""

from enum import Enum
from typing import Dict, Optional


class OperatorTag(Enum):
    """Canonical operator tags. Values are the MathML element names."""
    # Unary arithmetic and functional
    FACTORIAL = "factorial"
    MINUS = "minus"
    ABS = "abs"
    CONJUGATE = "conjugate"
    ARG = "arg"
    REAL = "real"
    IMAGINARY = "imaginary"
    FLOOR = "floor"
    CEILING = "ceiling"
    NOT = "not"
    INVERSE = "inverse"
    IDENT = "ident"
    DOMAIN = "domain"
    CODOMAIN = "codomain"
    IMAGE = "image"

    # Trigonometric and hyperbolic
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    SEC = "sec"
    CSC = "csc"
    COT = "cot"
    SINH = "sinh"
    COSH = "cosh"
    TANH = "tanh"
    SECH = "sech"
    CSCH = "csch"
    COTH = "coth"
    ARCSIN = "arcsin"
    ARCCOS = "arccos"
    ARCTAN = "arctan"
    ARCCOSH = "arccosh"
    ARCCOT = "arccot"
    ARCCOTH = "arccoth"
    ARCCSC = "arccsc"
    ARCCSCH = "arccsch"
    ARCSEC = "arcsec"
    ARCSECH = "arcsech"
    ARCSINH = "arcsinh"
    ARCTANH = "arctanh"

    # Exponential and logarithmic
    EXP = "exp"
    LN = "ln"
    LOG = "log"

    # Linear algebra and vector calculus
    DETERMINANT = "determinant"
    TRANSPOSE = "transpose"
    DIVERGENCE = "divergence"
    GRAD = "grad"
    CURL = "curl"
    LAPLACIAN = "laplacian"
    CARD = "card"

    # Binary arithmetic and logic
    QUOTIENT = "quotient"
    DIVIDE = "divide"
    POWER = "power"
    REM = "rem"
    ROOT = "root"
    IMPLIES = "implies"
    EQUIVALENT = "equivalent"
    APPROX = "approx"
    SETDIFF = "setdiff"
    VECTORPRODUCT = "vectorproduct"
    SCALARPRODUCT = "scalarproduct"
    OUTERPRODUCT = "outerproduct"

    # N-ary
    PLUS = "plus"
    TIMES = "times"
    MAX = "max"
    MIN = "min"
    GCD = "gcd"
    LCM = "lcm"
    AND = "and"
    OR = "or"
    XOR = "xor"
    SELECTOR = "selector"
    UNION = "union"
    INTERSECT = "intersect"
    CARTESIANPRODUCT = "cartesianproduct"
    COMPOSE = "compose"
    FN = "fn"

    # Statistics
    MEAN = "mean"
    SDEV = "sdev"
    VARIANCE = "variance"
    MEDIAN = "median"
    MODE = "mode"
    MOMENT = "moment"

    # Relations
    EQ = "eq"
    NEQ = "neq"
    GT = "gt"
    LT = "lt"
    GEQ = "geq"
    LEQ = "leq"
    FACTOROF = "factorof"

    # Set relations
    IN = "in"
    NOTIN = "notin"
    SUBSET = "subset"
    PRSUBSET = "prsubset"
    NOTSUBSET = "notsubset"
    NOTPRSUBSET = "notprsubset"

    # Calculus and quantifiers
    INT = "int"
    SUM = "sum"
    PRODUCT = "product"
    DIFF = "diff"
    PARTIALDIFF = "partialdiff"
    LIMIT = "limit"
    TENDSTO = "tendsto"
    FORALL = "forall"
    EXISTS = "exists"


OPERATOR_TABLE: Dict[str, OperatorTag] = {tag.value: tag for tag in OperatorTag}


def classify_operator(name: str) -> Optional[OperatorTag]:
    """Return the operator for an element's local name, or None."""
    return OPERATOR_TABLE.get(name)


def is_operator(name: str) -> bool:
    return name in OPERATOR_TABLE
