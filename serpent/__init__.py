"""
Serpent Front End Package

Lexical analysis for the Serpent programming language, a small
Python-like language. The parser and later stages live outside this
package and consume tokens through `serpent.lexer`.

Architecture:
    serpent/
    └── lexer/           # Tokenization and lexical analysis

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Scanner, Token, TokenKind, LexerError, tokenize_string

__all__ = [
    # Core classes
    "Scanner",
    "Token",
    "TokenKind",
    "LexerError",
    "tokenize_string",

    # Version info
    "__version__",
    "__license__",
]
