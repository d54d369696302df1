"""
Serpent Lexer Package

Implements a hand-written, pull-based scanner for the Serpent language, a
Python-like language. The parser pulls one token at a time and matches
on TokenKind.

Key Features:
- Two-character operator disambiguation with one character of lookahead
- Keyword classification against an immutable reserved-word table
- Integer, float and string literals with escape decoding
- Optional NEWLINE/INDENT/DEDENT layout tokens
- Error tokens and diagnostics instead of aborting on bad input
"""

from .tokens import Token, TokenKind
from .keywords import KEYWORDS, classify, is_keyword
from .scanner import Scanner, tokenize_string
from .errors import Diagnostic, LexerError, SourceLocation

__all__ = [
    "Scanner",
    "Token",
    "TokenKind",
    "KEYWORDS",
    "classify",
    "is_keyword",
    "tokenize_string",
    "Diagnostic",
    "LexerError",
    "SourceLocation",
]
