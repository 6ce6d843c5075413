"""
Pre-parse text sanitization.

SBML-embedded MathML routinely uses HTML named entities for Greek letters
(``&tau;``, ``&alpha;`` ...) which are undefined for a strict XML parser.
They are rewritten into plain ``$FIXED_<name>`` placeholders so the document
parses and the symbol name stays recoverable.
"""

import logging
import threading
from typing import Iterable, Optional, Tuple

import regex


logger = logging.getLogger(__name__)

PLACEHOLDER_PREFIX = "$FIXED_"

ENTITY_REGISTRY: Tuple[str, ...] = (
    'tau', 'alpha', 'beta', 'gamma', 'delta', 'epsilon', 'zeta', 'eta',
    'theta', 'iota', 'kappa', 'lambda', 'mu', 'nu', 'xi', 'omicron', 'pi',
    'rho', 'sigma', 'upsilon', 'phi', 'chi', 'psi', 'omega',
)

_ENTITY_NAME_PATTERN = regex.compile(r'[A-Za-z][A-Za-z0-9]*')


class EntitySanitizer:
    """Replace ``&name;`` references of registered names with placeholders."""

    def __init__(self, names: Iterable[str] = ENTITY_REGISTRY):
        self.names = tuple(dict.fromkeys(names))
        for name in self.names:
            if not _ENTITY_NAME_PATTERN.fullmatch(name):
                raise ValueError(f"Invalid entity name: {name!r}")

        # Every alternative is delimited by '&' and ';' so overlapping
        # names (eta / beta / zeta / theta) cannot match each other.
        alternatives = '|'.join(regex.escape(name) for name in self.names)
        self.pattern = regex.compile(f'&({alternatives});') if self.names else None

    def sanitize(self, text: str) -> str:
        if self.pattern is None:
            return text

        result, count = self.pattern.subn(
            lambda match: PLACEHOLDER_PREFIX + match.group(1), text
        )
        if count:
            logger.debug(f"Replaced {count} named entity reference(s)")
        return result


_default_sanitizer: Optional[EntitySanitizer] = None
_default_sanitizer_lock = threading.Lock()


def get_default_sanitizer() -> EntitySanitizer:
    global _default_sanitizer
    if _default_sanitizer is None:
        with _default_sanitizer_lock:
            if _default_sanitizer is None:
                _default_sanitizer = EntitySanitizer()
    return _default_sanitizer


def sanitize_xml(text: str) -> str:
    """Rewrite registered entity references into ``$FIXED_<name>`` text."""
    return get_default_sanitizer().sanitize(text)
