"""
Serpent Scanner - turns source text into tokens, one pull at a time.

The scanner is a small hand-written state machine over an in-memory
source string. Callers pull tokens with next_token() (or iterate) until
they see END_OF_FILE; after that every pull returns the same EOF token.

Bad input never stops the scanner. Each lexical problem becomes an ERROR
token and a Diagnostic in `errors`, and scanning resumes right after the
offending text.

Indentation tracking is opt-in. When enabled the scanner also emits
NEWLINE at the end of each logical line and INDENT/DEDENT whenever the
leading whitespace of a line changes level.
"""

import logging
import re
from collections import deque
from typing import Deque, Iterator, List, Optional

from .tokens import Token, TokenKind
from .keywords import classify, LITERAL_KEYWORD_VALUES
from .errors import (
    Diagnostic, LexerError, SourceLocation, incomplete_operator,
    inconsistent_dedent, invalid_character, invalid_number,
    unterminated_string,
)


logger = logging.getLogger(__name__)


_SINGLE_CHAR_TOKENS = {
    '+': TokenKind.PLUS,
    '*': TokenKind.ASTERISK,
    '%': TokenKind.MODULO,
    '(': TokenKind.LEFT_PAREN,
    ')': TokenKind.RIGHT_PAREN,
    '[': TokenKind.LEFT_BRACKET,
    ']': TokenKind.RIGHT_BRACKET,
    ',': TokenKind.COMMA,
    ':': TokenKind.COLON,
    '.': TokenKind.DOT,
}

_OPENING_BRACKETS = frozenset({TokenKind.LEFT_PAREN, TokenKind.LEFT_BRACKET})
_CLOSING_BRACKETS = frozenset({TokenKind.RIGHT_PAREN, TokenKind.RIGHT_BRACKET})

_WHITESPACE = frozenset({' ', '\t', '\r'})
_QUOTES = frozenset({'"', "'"})
_RAW_PREFIXES = frozenset({'r', 'R'})

# Numeric literal patterns. Underscores may only sit between digits.
_HEX_PATTERN = re.compile(r'0[xX](?:_?[0-9a-fA-F])+')
_OCTAL_PATTERN = re.compile(r'0[oO](?:_?[0-7])+')
_BINARY_PATTERN = re.compile(r'0[bB](?:_?[01])+')
_DECIMAL_PATTERN = re.compile(
    r'[0-9](?:_?[0-9])*'
    r'(?P<fraction>\.(?:[0-9](?:_?[0-9])*)?)?'
    r'(?P<exponent>[eE][+-]?[0-9](?:_?[0-9])*)?'
)
_PREFIXED_INTEGERS = {
    'x': (_HEX_PATTERN, 16),
    'o': (_OCTAL_PATTERN, 8),
    'b': (_BINARY_PATTERN, 2),
}

_SIMPLE_ESCAPES = {
    '\\': '\\',
    "'": "'",
    '"': '"',
    'n': '\n',
    't': '\t',
    'r': '\r',
    '0': '\0',
    'a': '\a',
    'b': '\b',
    'f': '\f',
    'v': '\v',
}
_HEX_ESCAPE_WIDTHS = {'x': 2, 'u': 4, 'U': 8}
_HEX_DIGITS = frozenset('0123456789abcdefABCDEF')


class Scanner:
    """
    Serpent lexical scanner.

    Owns the source text, a cursor that only moves forward, and the
    current line. Each Scanner is used once: build it, pull tokens until
    END_OF_FILE, throw it away.
    """

    def __init__(
        self,
        source: str,
        filename: str = "<unknown>",
        *,
        track_indentation: bool = False,
        tab_size: int = 8,
    ):
        """
        Initialize the scanner with source code.

        Args:
            source: Decoded source text
            filename: Name used in diagnostic locations
            track_indentation: Emit NEWLINE/INDENT/DEDENT layout tokens
            tab_size: Tab stop width used when measuring indentation
        """
        if tab_size < 1:
            raise ValueError(f"tab_size must be at least 1, got {tab_size}")

        self.source = source
        self.filename = filename
        self.track_indentation = track_indentation
        self.tab_size = tab_size

        self.pos = 0
        self.line = 1
        self._line_start = 0
        self.errors: List[Diagnostic] = []

        self._pending: Deque[Token] = deque()
        self._eof_token: Optional[Token] = None

        # Indentation state
        self._indents: List[int] = [0]
        self._at_line_start = True
        self._bracket_depth = 0

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def next_token(self) -> Token:
        """Return the next token. Returns the same EOF token once exhausted."""
        if self._pending:
            return self._pending.popleft()
        if self._eof_token is not None:
            return self._eof_token

        if self.track_indentation and self._at_line_start:
            self._read_indentation()
            if self._pending:
                return self._pending.popleft()

        self._skip_insignificant()

        if self._at_end():
            self._finish()
            return self._pending.popleft()

        # Only reachable with indentation tracking outside brackets
        if self._peek() == '\n':
            token = Token(TokenKind.NEWLINE, '\n', self.line, self._column())
            self._advance()
            self._at_line_start = True
            return token

        return self._scan_token()

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including END_OF_FILE."""
        while True:
            token = self.next_token()
            yield token
            if token.is_eof:
                return

    def tokenize(self) -> List[Token]:
        """
        Drain the scanner.

        Returns:
            List of tokens ending with the END_OF_FILE token
        """
        return list(self)

    def has_errors(self) -> bool:
        """Check if the scanner reported any lexical errors."""
        return len(self.errors) > 0

    def get_diagnostics(self) -> List[Diagnostic]:
        return list(self.errors)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _scan_token(self) -> Token:
        start = self.pos
        line = self.line
        column = self._column()
        char = self._advance()

        kind = _SINGLE_CHAR_TOKENS.get(char)
        if kind is not None:
            if kind in _OPENING_BRACKETS:
                self._bracket_depth += 1
            elif kind in _CLOSING_BRACKETS and self._bracket_depth > 0:
                self._bracket_depth -= 1
            return Token(kind, char, line, column)

        if char == '-':
            kind = TokenKind.ARROW if self._match('>') else TokenKind.MINUS
        elif char == '<':
            kind = TokenKind.LESS_EQUAL if self._match('=') else TokenKind.LESS
        elif char == '>':
            kind = TokenKind.GREATER_EQUAL if self._match('=') else TokenKind.GREATER
        elif char == '=':
            kind = TokenKind.EQUALS if self._match('=') else TokenKind.ASSIGN
        elif char == '!':
            if not self._match('='):
                return self._error(
                    incomplete_operator(char, self._location(start, line, column)),
                    start, line, column,
                )
            kind = TokenKind.NOT_EQUAL
        elif char == '/':
            kind = TokenKind.DOUBLE_SLASH if self._match('/') else TokenKind.SLASH
        elif char in _RAW_PREFIXES and self._peek() in _QUOTES:
            return self._scan_string(start, line, column, raw=True)
        elif char.isalpha() or char == '_':
            return self._scan_identifier(start, line, column)
        elif char.isascii() and char.isdigit():
            return self._scan_number(start, line, column)
        elif char in _QUOTES:
            return self._scan_string(start, line, column, raw=False)
        else:
            return self._error(
                invalid_character(char, self._location(start, line, column)),
                start, line, column,
            )

        return Token(kind, self.source[start:self.pos], line, column)

    # ------------------------------------------------------------------
    # Lexeme scanners
    # ------------------------------------------------------------------

    def _scan_identifier(self, start: int, line: int, column: int) -> Token:
        """Scan an identifier or keyword. The first character is consumed."""
        while self._peek().isalnum() or self._peek() == '_':
            self._advance()

        text = self.source[start:self.pos]
        kind = classify(text)
        value = LITERAL_KEYWORD_VALUES.get(text) if kind.is_literal else None
        return Token(kind, text, line, column, value)

    def _scan_number(self, start: int, line: int, column: int) -> Token:
        """Scan an integer or float literal starting at `start`."""
        source = self.source
        prefix = source[start + 1:start + 2].lower() if source[start] == '0' else ''

        if prefix in _PREFIXED_INTEGERS:
            pattern, base = _PREFIXED_INTEGERS[prefix]
            match = pattern.match(source, start)
            if match is None:
                # Consume the "0x" and let the tail swallow the rest
                self._advance_to(start + 2)
                return self._malformed_number(
                    start, line, column, f"Missing digits after {source[start:start + 2]!r}"
                )
            kind = TokenKind.INTEGER
            value = int(match.group()[2:].replace('_', ''), base)
        else:
            match = _DECIMAL_PATTERN.match(source, start)
            digits = match.group().replace('_', '')
            if match.group('fraction') or match.group('exponent'):
                kind = TokenKind.FLOAT
                value = float(digits)
            else:
                kind = TokenKind.INTEGER
                value = int(digits)

        self._advance_to(match.end())

        following = self._peek()
        if self._continues_number(following):
            return self._malformed_number(
                start, line, column, f"Unexpected {following!r} in numeric literal"
            )

        return Token(kind, match.group(), line, column, value)

    @staticmethod
    def _continues_number(char: str) -> bool:
        """Characters that glue onto a number and make it malformed."""
        return char.isalnum() or char in ('_', '.')

    def _malformed_number(self, start: int, line: int, column: int, reason: str) -> Token:
        while self._continues_number(self._peek()):
            self._advance()
        lexeme = self.source[start:self.pos]
        return self._error(
            invalid_number(lexeme, self._location(start, line, column), reason),
            start, line, column,
        )

    def _scan_string(self, start: int, line: int, column: int, raw: bool) -> Token:
        """
        Scan a quoted string literal.

        The cursor sits on the opening quote for raw strings (the prefix is
        already consumed) and just past it otherwise.
        """
        if raw:
            quote = self._advance()
        else:
            quote = self.source[start]

        parts: List[str] = []

        while True:
            char = self._peek()

            if char == quote:
                self._advance()
                break

            if self._at_end() or self._line_break_at(self.pos):
                return self._error(
                    unterminated_string(quote, self._location(start, line, column)),
                    start, line, column,
                )

            if char == '\\':
                following = self._peek_next()
                break_width = self._line_break_at(self.pos + 1)
                if break_width:
                    # Line continuation inside the literal
                    continuation = self.source[self.pos:self.pos + 1 + break_width]
                    for _ in continuation:
                        self._advance()
                    if raw:
                        parts.append(continuation)
                elif raw:
                    parts.append(self._advance())
                    if following:
                        parts.append(self._advance())
                elif following:
                    parts.append(self._read_escape())
                else:
                    parts.append(self._advance())
                continue

            parts.append(self._advance())

        return Token(TokenKind.STRING, self.source[start:self.pos], line, column, ''.join(parts))

    def _read_escape(self) -> str:
        """Decode the escape sequence at the cursor (which sits on the backslash)."""
        self._advance()
        escape_char = self._advance()

        if escape_char in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[escape_char]

        width = _HEX_ESCAPE_WIDTHS.get(escape_char)
        if width is not None:
            digits = self.source[self.pos:self.pos + width]
            if len(digits) == width and all(d in _HEX_DIGITS for d in digits):
                code_point = int(digits, 16)
                if code_point <= 0x10FFFF:
                    self._advance_to(self.pos + width)
                    return chr(code_point)

        # Unknown or malformed escape - keep it verbatim
        return '\\' + escape_char

    # ------------------------------------------------------------------
    # Whitespace, comments and indentation
    # ------------------------------------------------------------------

    def _skip_insignificant(self):
        """Skip whitespace, newlines and comments that produce no token."""
        while not self._at_end():
            char = self._peek()

            if char in _WHITESPACE:
                self._advance()
            elif char == '\n':
                if self.track_indentation and self._bracket_depth == 0:
                    break
                self._advance()
            elif char == '#':
                while not self._at_end() and self._peek() != '\n':
                    self._advance()
            elif char == '\\' and self.track_indentation and self._line_break_at(self.pos + 1):
                # Explicit line joining
                for _ in range(1 + self._line_break_at(self.pos + 1)):
                    self._advance()
            else:
                break

    def _read_indentation(self):
        """
        Measure the leading whitespace of the next non-blank line and queue
        the INDENT/DEDENT tokens the change implies.
        """
        while True:
            start = self.pos
            width = 0
            while self._peek() in (' ', '\t'):
                if self._advance() == '\t':
                    width = (width // self.tab_size + 1) * self.tab_size
                else:
                    width += 1

            while self._peek() == '\r':
                self._advance()
            if self._peek() == '#':
                while not self._at_end() and self._peek() != '\n':
                    self._advance()

            if self._at_end():
                # Trailing blank lines: _finish closes the open blocks
                return
            if self._peek() == '\n':
                self._advance()
                continue
            break

        self._at_line_start = False
        line = self.line
        column = self._column()
        current = self._indents[-1]

        if width > current:
            self._indents.append(width)
            self._pending.append(Token(TokenKind.INDENT, self.source[start:self.pos], line, column))
            return

        while width < self._indents[-1]:
            self._indents.pop()
            self._pending.append(Token(TokenKind.DEDENT, '', line, column))

        if width != self._indents[-1]:
            self._indents.append(width)
            self._pending.append(self._error(
                inconsistent_dedent(width, self._location(start, line, 1)),
                self.pos, line, column,
            ))

    def _finish(self):
        """Queue the closing layout tokens and the END_OF_FILE token."""
        line = self.line
        column = self._column()

        if self.track_indentation:
            if not self._at_line_start:
                self._pending.append(Token(TokenKind.NEWLINE, '', line, column))
                self._at_line_start = True
            while len(self._indents) > 1:
                self._indents.pop()
                self._pending.append(Token(TokenKind.DEDENT, '', line, column))

        self._eof_token = Token(TokenKind.END_OF_FILE, '', line, column)
        self._pending.append(self._eof_token)
        logger.debug(
            "Scanned %s: %d lines, %d lexical errors",
            self.filename, line, len(self.errors),
        )

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    def _at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _peek(self) -> str:
        """The character at the cursor (the next unconsumed one), or ''."""
        if self.pos < len(self.source):
            return self.source[self.pos]
        return ''

    def _peek_next(self) -> str:
        """The character just after the cursor, or ''."""
        if self.pos + 1 < len(self.source):
            return self.source[self.pos + 1]
        return ''

    def _advance(self) -> str:
        """Consume and return one character, updating the line counter."""
        char = self.source[self.pos]
        self.pos += 1
        if char == '\n':
            self.line += 1
            self._line_start = self.pos
        return char

    def _line_break_at(self, offset: int) -> int:
        """Width of the line break ("\\n" or "\\r\\n") starting at `offset`, else 0."""
        if self.source.startswith('\n', offset):
            return 1
        if self.source.startswith('\r\n', offset):
            return 2
        return 0

    def _advance_to(self, end: int):
        """
        Jump the cursor to `end`. Callers only pass the end of a newline-free
        match at or past the cursor, so the line counter stays valid.
        """
        self.pos = end

    def _match(self, expected: str) -> bool:
        """Consume the character at the cursor if it is `expected`."""
        if self._peek() != expected:
            return False
        self.pos += 1
        return True

    def _column(self) -> int:
        return self.pos - self._line_start + 1

    def _location(self, offset: int, line: int, column: int) -> SourceLocation:
        return SourceLocation(self.filename, line, column, offset)

    def _error(self, diagnostic: Diagnostic, start: int, line: int, column: int) -> Token:
        """Record a diagnostic and build the ERROR token covering source[start:pos]."""
        self.errors.append(diagnostic)
        logger.debug("%s: %s [%s]", diagnostic.location, diagnostic.message, diagnostic.code)
        return Token(TokenKind.ERROR, self.source[start:self.pos], line, column, diagnostic.message)


def tokenize_string(
    source: str,
    filename: str = "<string>",
    *,
    strict: bool = False,
    **options,
) -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting
        strict: Raise on the first lexical error instead of returning
            ERROR tokens
        **options: Extra Scanner keyword arguments (track_indentation,
            tab_size)

    Returns:
        List of tokens ending with END_OF_FILE

    Raises:
        LexerError: If strict and the source has a lexical error
    """
    scanner = Scanner(source, filename, **options)
    tokens = scanner.tokenize()

    if strict and scanner.has_errors():
        raise LexerError(scanner.errors[0])

    return tokens
