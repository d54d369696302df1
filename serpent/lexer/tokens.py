"""
Token definitions for the Serpent lexer.

This module defines the closed set of token kinds the scanner produces:
- Operators and delimiters
- Keywords (one kind per reserved word)
- Identifiers and literals (integers, floats, strings)
- Layout tokens (NEWLINE, INDENT, DEDENT) for indentation tracking
- End of input and error tokens

Each kind's value is its textual form, which the parser can use in
"expected X" style messages.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Any


class TokenKind(Enum):
    """
    Enumeration of all token kinds in Serpent.

    Fixed tokens carry their exact lexeme as value; variable tokens carry
    a descriptive form in angle brackets.
    """

    # ========================================================================
    # Operators
    # ========================================================================
    PLUS = "+"
    MINUS = "-"
    ASTERISK = "*"
    SLASH = "/"
    DOUBLE_SLASH = "//"             # floor division
    MODULO = "%"
    ARROW = "->"
    LESS = "<"
    LESS_EQUAL = "<="
    GREATER = ">"
    GREATER_EQUAL = ">="
    ASSIGN = "="
    EQUALS = "=="
    NOT_EQUAL = "!="

    # ========================================================================
    # Delimiters
    # ========================================================================
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    LEFT_BRACKET = "["
    RIGHT_BRACKET = "]"
    COMMA = ","
    COLON = ":"
    DOT = "."

    # ========================================================================
    # Keywords
    # ========================================================================
    KW_AND = "and"
    KW_AS = "as"
    KW_ASSERT = "assert"
    KW_ASYNC = "async"
    KW_AWAIT = "await"
    KW_BREAK = "break"
    KW_CLASS = "class"
    KW_CONTINUE = "continue"
    KW_DEF = "def"
    KW_DEL = "del"
    KW_ELIF = "elif"
    KW_ELSE = "else"
    KW_EXCEPT = "except"
    KW_FALSE = "false"
    KW_FINALLY = "finally"
    KW_FOR = "for"
    KW_FROM = "from"
    KW_GLOBAL = "global"
    KW_IF = "if"
    KW_IMPORT = "import"
    KW_IN = "in"
    KW_IS = "is"
    KW_LAMBDA = "lambda"
    KW_NONE = "none"
    KW_NONLOCAL = "nonlocal"
    KW_NOT = "not"
    KW_OR = "or"
    KW_PASS = "pass"
    KW_RAISE = "raise"
    KW_RETURN = "return"
    KW_TRUE = "true"
    KW_TRY = "try"
    KW_WHILE = "while"
    KW_WITH = "with"
    KW_YIELD = "yield"

    # ========================================================================
    # Identifiers and literals
    # ========================================================================
    IDENTIFIER = "<identifier>"
    INTEGER = "<integer>"           # 42, 0x2A, 0o52, 0b101010, 1_000
    FLOAT = "<float>"               # 3.14, 1., 1.5e-3
    STRING = "<string>"             # 'a', "b", r'raw\d'

    # ========================================================================
    # Layout (only with indentation tracking)
    # ========================================================================
    NEWLINE = "<newline>"
    INDENT = "<indent>"
    DEDENT = "<dedent>"

    # ========================================================================
    # Special
    # ========================================================================
    END_OF_FILE = "<end of file>"
    ERROR = "<error>"

    def __str__(self) -> str:
        return self.value

    @property
    def is_keyword(self) -> bool:
        return self.name.startswith("KW_")

    @property
    def is_literal(self) -> bool:
        return self in _LITERAL_KINDS

    @property
    def is_operator(self) -> bool:
        return self in _OPERATOR_KINDS


_LITERAL_KINDS = frozenset({
    TokenKind.INTEGER, TokenKind.FLOAT, TokenKind.STRING,
    TokenKind.KW_TRUE, TokenKind.KW_FALSE, TokenKind.KW_NONE,
})

_OPERATOR_KINDS = frozenset({
    TokenKind.PLUS, TokenKind.MINUS, TokenKind.ASTERISK, TokenKind.SLASH,
    TokenKind.DOUBLE_SLASH, TokenKind.MODULO, TokenKind.ARROW,
    TokenKind.LESS, TokenKind.LESS_EQUAL, TokenKind.GREATER,
    TokenKind.GREATER_EQUAL, TokenKind.ASSIGN, TokenKind.EQUALS,
    TokenKind.NOT_EQUAL,
})


@dataclass(frozen=True)
class Token:
    """
    Represents one classified lexeme.

    `text` is the exact source substring; `value` holds the decoded
    literal (int, float, str, bool or None) or, for ERROR tokens, the
    diagnostic message.
    """
    kind: TokenKind
    text: str
    line: int
    column: int = 1
    value: Any = None

    def __str__(self) -> str:
        if self.value is not None and self.value != self.text:
            return f"{self.kind.name}({self.text!r} -> {self.value!r})"
        return f"{self.kind.name}({self.text!r})"

    @property
    def is_keyword(self) -> bool:
        return self.kind.is_keyword

    @property
    def is_literal(self) -> bool:
        return self.kind.is_literal

    @property
    def is_error(self) -> bool:
        return self.kind is TokenKind.ERROR

    @property
    def is_eof(self) -> bool:
        return self.kind is TokenKind.END_OF_FILE
