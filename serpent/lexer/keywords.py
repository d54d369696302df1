"""
Reserved word table for the Serpent lexer.

The table is built once at import time and exposed read-only, so any
number of scanners can consult it without coordination.
"""

from types import MappingProxyType
from typing import Any, Mapping

from .tokens import TokenKind


KEYWORDS: Mapping[str, TokenKind] = MappingProxyType({
    kind.value: kind for kind in TokenKind if kind.is_keyword
})

# Keywords that double as literal values
LITERAL_KEYWORD_VALUES: Mapping[str, Any] = MappingProxyType({
    "true": True,
    "false": False,
    "none": None,
})


def classify(text: str) -> TokenKind:
    """Return the keyword kind for `text`, or IDENTIFIER. Case-sensitive."""
    return KEYWORDS.get(text, TokenKind.IDENTIFIER)


def is_keyword(text: str) -> bool:
    return text in KEYWORDS
