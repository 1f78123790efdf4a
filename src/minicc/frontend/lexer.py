"""
minicc Lexer (Tokenizer)
========================

This module converts source text into the token stream consumed by the
parser.

Token Categories
----------------
- Punctuation: { } ( ) ;
- Keywords: int, return, if, else (matched case-sensitively)
- Relational operators: = > >= < <=
- Identifiers: [A-Za-z_][A-Za-z0-9_]*
- Integer literals: [0-9]+ (kept as raw text, converted by the parser)
- EOF: synthesized once the cursor passes the end of the input

Relational operators and if/else are part of the vocabulary but no
grammar rule consumes them yet.

Scanning is byte-level with a single byte of lookahead and no
backtracking. Any byte outside the vocabulary raises
UnrecognizedCharacterError.

Example Usage
-------------
>>> from minicc.frontend.lexer import Lexer
>>> for token in Lexer('int main() { return 42; }', "test.c").tokenize():
...     print(token)
Token(INT, 1:1)
Token(IDENTIFIER, 'main', 1:5)
Token(LPAREN, 1:9)
Token(RPAREN, 1:10)
Token(LBRACE, 1:12)
Token(RETURN, 1:14)
Token(INT_LITERAL, '42', 1:21)
Token(SEMICOLON, 1:23)
Token(RBRACE, 1:25)
Token(EOF, 1:26)
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional
import string

from minicc.errors import SourceLocation
from minicc.frontend.errors import UnrecognizedCharacterError


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Lexical categories recognized by the lexer."""

    # === Punctuation ===
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    SEMICOLON = auto()      # ;

    # === Keywords ===
    INT = auto()            # int
    RETURN = auto()         # return
    IF = auto()             # if
    ELSE = auto()           # else

    # === Relational Operators ===
    ASSIGN = auto()         # =
    GT = auto()             # >
    GE = auto()             # >=
    LT = auto()             # <
    LE = auto()             # <=

    # === End of Input ===
    EOF = auto()

    # === Tokens With Payload ===
    IDENTIFIER = auto()     # payload: the name
    INT_LITERAL = auto()    # payload: the digit text, unconverted


KEYWORDS: dict[str, TokenType] = {
    "int": TokenType.INT,
    "return": TokenType.RETURN,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
}

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ";": TokenType.SEMICOLON,
    "=": TokenType.ASSIGN,
}

# Source text for tokens without payload, used in diagnostics
TOKEN_TEXT: dict[TokenType, str] = {
    **{token_type: text for text, token_type in SINGLE_CHAR_TOKENS.items()},
    **{token_type: text for text, token_type in KEYWORDS.items()},
    TokenType.GT: ">",
    TokenType.GE: ">=",
    TokenType.LT: "<",
    TokenType.LE: "<=",
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token.

    Equality is structural over type and value; the location is kept for
    diagnostics only, so Token(TokenType.IDENTIFIER, "main") compares
    equal to the lexer's token wherever it appeared.

    Attributes:
        type: The TokenType classification
        value: Identifier name or literal text; None for every other type
        location: Where the token starts in the source
    """
    type: TokenType
    value: Optional[str] = None
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def __repr__(self) -> str:
        position = ""
        if self.location is not None:
            position = f", {self.location.line}:{self.location.column}"
        if self.value is not None:
            return f"Token({self.type.name}, {self.value!r}{position})"
        return f"Token({self.type.name}{position})"

    @property
    def text(self) -> str:
        """Source spelling of the token, for error messages."""
        if self.value is not None:
            return self.value
        if self.type == TokenType.EOF:
            return "end of input"
        return TOKEN_TEXT[self.type]


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes minicc source code.

    Usage:
        lexer = Lexer(source_text, filename)
        tokens = lexer.tokenize()

    Bytes input is decoded one byte per character, so every byte of the
    buffer is classified on its own. The lexer is single use: once it has
    produced EOF, every further call to next_token() returns EOF again.

    Attributes:
        source: The text being tokenized
        filename: Name used in token locations and errors
    """

    IDENT_START = string.ascii_letters + "_"
    IDENT_CHARS = string.ascii_letters + string.digits + "_"
    DIGITS = string.digits
    WHITESPACE = " \t\n\r\f"

    def __init__(self, source: str | bytes, filename: str = "<input>"):
        if isinstance(source, (bytes, bytearray)):
            source = bytes(source).decode("latin-1")
        self.source = source
        self.filename = filename

        self._pos = 0
        self._line = 1
        self._column = 1
        self._line_start_pos = 0

    def tokenize(self) -> list[Token]:
        """
        Produce the full token sequence, ending with exactly one EOF.

        Raises:
            UnrecognizedCharacterError: If a byte starts no token
        """
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                break
        return tokens

    def next_token(self) -> Token:
        """
        Skip whitespace and scan exactly one token.

        Raises:
            UnrecognizedCharacterError: If a byte starts no token
        """
        self._skip_whitespace()

        start_line = self._line
        start_column = self._column

        if self._at_end():
            return self._make_token(TokenType.EOF, None, start_line, start_column)

        char = self._peek()

        if char in self.DIGITS:
            text = self._read_while(self.DIGITS)
            return self._make_token(TokenType.INT_LITERAL, text, start_line, start_column)

        if char in self.IDENT_START:
            name = self._read_while(self.IDENT_CHARS)
            if name in KEYWORDS:
                return self._make_token(KEYWORDS[name], None, start_line, start_column)
            return self._make_token(TokenType.IDENTIFIER, name, start_line, start_column)

        return self._scan_operator(start_line, start_column)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self) -> str:
        """Current character, or empty string past the end."""
        if self._at_end():
            return ""
        return self.source[self._pos]

    def _advance(self) -> str:
        """Consume the current character, updating line and column."""
        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def _match(self, expected: str) -> bool:
        """Consume the next character if it is the expected one."""
        if self._peek() == expected:
            self._advance()
            return True
        return False

    def _read_while(self, allowed: str) -> str:
        chars = []
        while self._peek() and self._peek() in allowed:
            chars.append(self._advance())
        return "".join(chars)

    def _skip_whitespace(self) -> None:
        while self._peek() and self._peek() in self.WHITESPACE:
            self._advance()

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _make_token(
        self,
        token_type: TokenType,
        value: Optional[str],
        start_line: int,
        start_column: int,
    ) -> Token:
        return Token(
            type=token_type,
            value=value,
            location=SourceLocation(self.filename, start_line, start_column),
        )

    def _scan_operator(self, start_line: int, start_column: int) -> Token:
        """Scan punctuation or a relational operator."""
        char = self._advance()

        if char == "<":
            if self._match("="):
                return self._make_token(TokenType.LE, None, start_line, start_column)
            return self._make_token(TokenType.LT, None, start_line, start_column)

        if char == ">":
            if self._match("="):
                return self._make_token(TokenType.GE, None, start_line, start_column)
            return self._make_token(TokenType.GT, None, start_line, start_column)

        if char in SINGLE_CHAR_TOKENS:
            return self._make_token(SINGLE_CHAR_TOKENS[char], None, start_line, start_column)

        raise UnrecognizedCharacterError(
            char,
            SourceLocation(self.filename, start_line, start_column),
            self._get_current_line(),
        )

    def _get_current_line(self) -> str:
        """Text of the line being scanned, for error reporting."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]
