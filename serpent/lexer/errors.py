"""
Error handling for the Serpent lexer.

The scanner never aborts on bad input. Each problem is recorded as a
Diagnostic (with source location, code, and help text) and surfaced as an
ERROR token, so a caller can collect every lexical error in one pass.
LexerError wraps a diagnostic for callers that want to fail fast.
"""

from typing import Optional, List
from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting and debugging information.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of source

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass
class Diagnostic:
    """A lexer diagnostic (error or warning)."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    @property
    def title(self) -> Optional[str]:
        """Short category name for the diagnostic's code."""
        return ERROR_CODES.get(self.code) if self.code else None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix += f"[{self.code}]"
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.title:
            result += f"  note: {self.code} is {self.title.lower()}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    Exception raised for a lexical error when the caller asks for strict
    tokenization.

    Carries the diagnostic that caused it.
    """

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Invalid character",
    "L002": "Unterminated string literal",
    "L003": "Invalid numeric literal",
    "L004": "Incomplete operator",
    "L005": "Inconsistent dedent",
}

# Python-isms and C-isms that have a spelled-out equivalent
_CHARACTER_SUGGESTIONS = {
    '&': ['and'],
    '|': ['or'],
    '~': ['not'],
    '{': ['['],
    '}': [']'],
    ';': ['a newline'],
}


def invalid_character(char: str, location: SourceLocation) -> Diagnostic:
    """Create a diagnostic for a character that starts no token."""
    suggestions = _CHARACTER_SUGGESTIONS.get(char, [])

    if suggestions:
        help_text = f"Did you mean {' or '.join(repr(s) for s in suggestions)}?"
    elif char.isprintable():
        help_text = f"The character {char!r} is not valid in Serpent source code."
    else:
        help_text = f"Non-printable character (U+{ord(char):04X}) is not allowed."

    return Diagnostic(
        message=f"Invalid character: {char!r}",
        location=location,
        severity="error",
        code="L001",
        help_text=help_text,
        suggestions=suggestions or None,
    )


def unterminated_string(quote: str, location: SourceLocation) -> Diagnostic:
    """Create a diagnostic for a string literal missing its closing quote."""
    return Diagnostic(
        message="Unterminated string literal",
        location=location,
        severity="error",
        code="L002",
        help_text=f"String literals must be closed with a matching {quote} on the same line.",
        suggestions=[f"Add a closing {quote}", "Escape quotes inside the string with a backslash"],
    )


def invalid_number(lexeme: str, location: SourceLocation, reason: str) -> Diagnostic:
    """Create a diagnostic for a malformed numeric literal."""
    return Diagnostic(
        message=f"Invalid numeric literal: {lexeme!r}",
        location=location,
        severity="error",
        code="L003",
        help_text=reason,
    )


def incomplete_operator(char: str, location: SourceLocation) -> Diagnostic:
    """Create a diagnostic for the first half of a two-character operator."""
    return Diagnostic(
        message=f"Incomplete operator: {char!r}",
        location=location,
        severity="error",
        code="L004",
        help_text=f"{char!r} is only valid as part of {char + '='!r}.",
        suggestions=[f"{char}=", "not"] if char == '!' else [f"{char}="],
    )


def inconsistent_dedent(width: int, location: SourceLocation) -> Diagnostic:
    """Create a diagnostic for a dedent that matches no outer level."""
    return Diagnostic(
        message="Unindent does not match any outer indentation level",
        location=location,
        severity="error",
        code="L005",
        help_text=f"Indentation of {width} columns does not line up with an enclosing block.",
    )
