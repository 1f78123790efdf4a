"""
Front-End Error Hierarchy
=========================

Exceptions raised by the lexer, the parser and AST validation.

Exception Hierarchy
-------------------
FrontendError (base for all front-end errors)
├── LexError - lexical errors
│   └── UnrecognizedCharacterError - byte outside the token vocabulary
├── ParseError - grammar violations
│   ├── UnexpectedTokenError - token not allowed at this point
│   ├── MissingTokenError - required punctuation absent
│   ├── EmptyFunctionBodyError - function with no statements
│   ├── EmptyStatementError - return with no value
│   └── MalformedIntegerLiteralError - literal not a signed 64-bit integer
└── ASTInvariantError - tree does not satisfy the generator contract

Each class carries an ErrorKind so callers holding only a failed parse
result can still tell failures apart.

Error Message Format
--------------------
    main.c:2:5: error: unexpected token 'RETURN'
        RETURN 0;
        ^
    hint: expected 'return' or '}'
"""

from enum import Enum, auto
from typing import Optional

from minicc.errors import MiniCError, SourceLocation


class ErrorKind(Enum):
    """Distinguishable categories of front-end failure."""
    UNRECOGNIZED_CHARACTER = auto()
    MALFORMED_INTEGER_LITERAL = auto()
    UNEXPECTED_TOKEN = auto()
    MISSING_TOKEN = auto()
    EMPTY_FUNCTION_BODY = auto()
    EMPTY_STATEMENT = auto()
    INVALID_AST = auto()


# =============================================================================
# Base Front-End Exception
# =============================================================================

class FrontendError(MiniCError):
    """
    Base exception for all front-end errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The source text of the offending line
    """

    kind: Optional[ErrorKind] = None

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error with location, source context and hint.

            main.c:1:12: error: expected ')'
                int main( { return 0; }
                          ^
            hint: functions take no parameters
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Lexical Errors
# =============================================================================

class LexError(FrontendError):
    """Raised when the lexer cannot classify the input."""
    kind = ErrorKind.UNRECOGNIZED_CHARACTER


class UnrecognizedCharacterError(LexError):
    """
    A byte that starts no token.

    Only punctuation, relational operators, digits, letters, underscore
    and whitespace are part of the vocabulary; anything else (including
    NUL and non-ASCII bytes) ends lexing with this error.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"unrecognized character {char!r} (0x{ord(char):02X})",
            location=location,
            source_line=source_line,
        )


# =============================================================================
# Parse Errors
# =============================================================================

class ParseError(FrontendError):
    """Raised when the token stream does not match the grammar."""
    kind = ErrorKind.UNEXPECTED_TOKEN


class UnexpectedTokenError(ParseError):
    """
    Token not allowed at the current point of the grammar.

    This covers stray top-level tokens, non-return statements, operators
    and keywords the grammar does not use, and end of input reached
    before a closing '}' or ';'.
    """

    kind = ErrorKind.UNEXPECTED_TOKEN

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected

        hint = None
        if expected:
            hint = f"expected {expected}"

        super().__init__(
            f"unexpected token '{found}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MissingTokenError(ParseError):
    """Required punctuation is missing from a function header."""

    kind = ErrorKind.MISSING_TOKEN

    def __init__(
        self,
        expected: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.expected = expected
        super().__init__(
            f"expected '{expected}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class EmptyFunctionBodyError(ParseError):
    """A function body closed before any statement."""

    kind = ErrorKind.EMPTY_FUNCTION_BODY

    def __init__(
        self,
        function_name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.function_name = function_name
        super().__init__(
            f"function '{function_name}' has no statements",
            location=location,
            hint="add a 'return' statement",
            source_line=source_line,
        )


class EmptyStatementError(ParseError):
    """A statement terminated before any expression."""

    kind = ErrorKind.EMPTY_STATEMENT

    def __init__(
        self,
        keyword: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.keyword = keyword
        super().__init__(
            f"'{keyword}' statement has no value",
            location=location,
            hint="add an integer literal before ';'",
            source_line=source_line,
        )


class MalformedIntegerLiteralError(ParseError):
    """
    Integer literal that does not convert to a signed 64-bit value.

    The lexer only produces digit runs, so in practice this means the
    literal is larger than 9223372036854775807.
    """

    kind = ErrorKind.MALFORMED_INTEGER_LITERAL

    def __init__(
        self,
        text: str,
        reason: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        self.reason = reason
        super().__init__(
            f"malformed integer literal '{text}': {reason}",
            location=location,
            source_line=source_line,
        )


# =============================================================================
# AST Contract Errors
# =============================================================================

class ASTInvariantError(FrontendError):
    """An AST that the code generator cannot accept."""

    kind = ErrorKind.INVALID_AST
