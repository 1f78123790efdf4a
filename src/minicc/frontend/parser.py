"""
minicc Recursive Descent Parser
===============================

This module builds an AST from the token list produced by the lexer and
checks it against the grammar on the way.

Grammar
-------
program    ::= function*
function   ::= "int"? IDENTIFIER "(" ")" "{" statement+ "}"
statement  ::= "return" expression ";"
expression ::= INT_LITERAL

A run of integer literals before ';' yields one ExpressionNode each, so
`return 1 2;` is accepted with two expressions.

Top-Level Loop
--------------
The top level is an explicit loop over named states:

    DECLARATION  'int' (skipped, repeatable) | IDENTIFIER | EOF
    PARAMETERS   '(' ')'
    BODY         '{' statement+ '}'

EOF in DECLARATION is the only way the parse succeeds. Any other token
ends the parse with the first error found; there is no resynchronisation.

Node Attachment
---------------
Nodes are attached bottom-up and only once their required children are
present: a statement after its ';', a function after its '}'. A failed
parse can leave the root with the functions completed before the error,
and the caller must discard it.

Example Usage
-------------
>>> from minicc.frontend.lexer import Lexer
>>> from minicc.frontend.parser import Parser
>>> tokens = Lexer('int main() { return 42; }', "test.c").tokenize()
>>> parser = Parser(tokens, "test.c")
>>> bool(parser.parse())
True
>>> parser.ast.root.functions[0].name
'main'
"""

from dataclasses import dataclass
from enum import Enum, auto
import logging
import re
from typing import Optional

from minicc.errors import SourceLocation
from minicc.frontend.ast import (
    AST,
    ExpressionNode,
    FunctionNode,
    StatementNode,
    INT64_MAX,
    INT64_MIN,
)
from minicc.frontend.errors import (
    EmptyFunctionBodyError,
    EmptyStatementError,
    ErrorKind,
    FrontendError,
    MalformedIntegerLiteralError,
    MissingTokenError,
    ParseError,
    UnexpectedTokenError,
)
from minicc.frontend.lexer import Lexer, Token, TokenType

logger = logging.getLogger(__name__)

_INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+")


# =============================================================================
# Parse Result
# =============================================================================

@dataclass
class ParseResult:
    """
    Outcome of Parser.parse().

    Truthy on success and falsy on failure, so it can be used wherever a
    plain success flag is expected. On failure it carries the error that
    stopped the parse.

    Attributes:
        success: True if the whole token stream matched the grammar
        error: The error that stopped the parse (None on success)
    """
    success: bool
    error: Optional[FrontendError] = None

    def __bool__(self) -> bool:
        return self.success

    @property
    def kind(self) -> Optional[ErrorKind]:
        """Failure category, or None on success."""
        if self.error is None:
            return None
        return self.error.kind

    @property
    def location(self) -> Optional[SourceLocation]:
        """Where the parse failed, or None on success."""
        if self.error is None:
            return None
        return self.error.location

    def raise_if_failed(self) -> None:
        """Raise the captured error if the parse failed."""
        if self.error is not None:
            raise self.error


class _TopLevelState(Enum):
    DECLARATION = auto()
    PARAMETERS = auto()
    BODY = auto()


# =============================================================================
# Parser
# =============================================================================

class Parser:
    """
    Recursive descent parser for minicc.

    The parser walks the token list with a forward-only index and never
    copies it.

    Attributes:
        tokens: Token list from the lexer, ending with EOF
        filename: Source filename for error reporting
        ast: The tree being built
    """

    def __init__(
        self,
        tokens: list[Token],
        filename: str = "<input>",
        source_lines: Optional[list[str]] = None,
    ):
        """
        Initialize the parser.

        Args:
            tokens: Token list from the lexer
            filename: Source filename for error messages
            source_lines: Original source lines for error context
        """
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("token list must end with an EOF token")

        self.tokens = tokens
        self.filename = filename
        self.source_lines = source_lines or []
        self.ast = AST()

        self._pos = 0

    def parse(self) -> ParseResult:
        """
        Parse the token stream into self.ast.

        Returns:
            A ParseResult that is truthy when the program is valid
        """
        try:
            self._parse_program()
        except ParseError as e:
            logger.debug(f"Parse failed ({e.kind.name}): {e.message}")
            return ParseResult(success=False, error=e)

        logger.debug(f"Parsed {self.ast.root.num_children()} function(s)")
        return ParseResult(success=True)

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _peek(self) -> Token:
        """Look at the current token without consuming it."""
        if self._pos >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[self._pos]

    def _advance(self) -> Token:
        """Consume and return the current token; EOF is never passed."""
        token = self._peek()
        if token.type != TokenType.EOF:
            self._pos += 1
        return token

    def _expect(self, token_type: TokenType, text: str, hint: Optional[str] = None) -> Token:
        """
        Consume a token of the given type.

        Raises:
            MissingTokenError: If the next token has a different type
        """
        token = self._advance()
        if token.type != token_type:
            raise MissingTokenError(
                text,
                token.location,
                self._get_source_line(token),
                hint=hint,
            )
        return token

    def _unexpected(self, token: Token, expected: str) -> UnexpectedTokenError:
        return UnexpectedTokenError(
            token.text,
            expected=expected,
            location=token.location,
            source_line=self._get_source_line(token),
        )

    def _get_source_line(self, token: Token) -> Optional[str]:
        if token.location is None:
            return None
        line = token.location.line
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    # =========================================================================
    # Grammar Rules
    # =========================================================================

    def _parse_program(self) -> None:
        """Run the top-level loop until EOF."""
        state = _TopLevelState.DECLARATION
        name_token = None

        while True:
            if state == _TopLevelState.DECLARATION:
                token = self._advance()
                if token.type == TokenType.EOF:
                    return
                if token.type == TokenType.INT:
                    continue
                if token.type != TokenType.IDENTIFIER:
                    raise self._unexpected(token, "'int', a function name or end of input")
                name_token = token
                state = _TopLevelState.PARAMETERS

            elif state == _TopLevelState.PARAMETERS:
                self._parse_parameter_list()
                state = _TopLevelState.BODY

            elif state == _TopLevelState.BODY:
                function = self._parse_function_body(name_token)
                self.ast.root.add_child(function)
                state = _TopLevelState.DECLARATION

    def _parse_parameter_list(self) -> None:
        """Only the empty list '()' is supported."""
        self._expect(TokenType.LPAREN, "(")
        self._expect(TokenType.RPAREN, ")", hint="functions take no parameters")

    def _parse_function_body(self, name_token: Token) -> FunctionNode:
        """Parse '{' statement+ '}' into a complete FunctionNode."""
        self._expect(TokenType.LBRACE, "{")
        function = FunctionNode(name=name_token.value, location=name_token.location)

        while True:
            token = self._advance()
            if token.type == TokenType.RBRACE:
                break
            if token.type != TokenType.RETURN:
                raise self._unexpected(token, "'return' or '}'")
            function.add_child(self._parse_statement(token))

        if function.num_children() == 0:
            raise EmptyFunctionBodyError(
                function.name,
                token.location,
                self._get_source_line(token),
            )

        return function

    def _parse_statement(self, keyword_token: Token) -> StatementNode:
        """Parse the expressions of a statement up to and including ';'."""
        statement = StatementNode(
            keyword=keyword_token.text,
            location=keyword_token.location,
        )

        while True:
            token = self._advance()
            if token.type == TokenType.SEMICOLON:
                break
            if token.type != TokenType.INT_LITERAL:
                raise self._unexpected(token, "an integer literal or ';'")
            statement.add_child(self._parse_int(token))

        if statement.num_children() == 0:
            raise EmptyStatementError(
                statement.keyword,
                token.location,
                self._get_source_line(token),
            )

        return statement

    def _parse_int(self, token: Token) -> ExpressionNode:
        """
        Convert an integer literal to a signed 64-bit value.

        Raises:
            MalformedIntegerLiteralError: If the text is not a decimal
                integer or does not fit in 64 bits
        """
        text = token.value or ""
        if not _INTEGER_LITERAL.fullmatch(text):
            raise MalformedIntegerLiteralError(
                text,
                "not a decimal integer",
                token.location,
                self._get_source_line(token),
            )

        value = int(text)
        if not INT64_MIN <= value <= INT64_MAX:
            raise MalformedIntegerLiteralError(
                text,
                "out of range for a 64-bit signed integer",
                token.location,
                self._get_source_line(token),
            )

        return ExpressionNode(value=value, location=token.location)


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(source: str | bytes, filename: str = "<input>") -> AST:
    """
    Lex and parse source text.

    Args:
        source: The program text
        filename: Source filename for error messages

    Returns:
        The validated AST

    Raises:
        FrontendError: If lexing or parsing fails
    """
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()
    parser = Parser(tokens, filename, lexer.source.splitlines())
    parser.parse().raise_if_failed()
    return parser.ast
