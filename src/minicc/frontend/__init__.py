"""
minicc Front End
================

Lexer, parser and AST for a tiny subset of C: programs made of
functions that return integer constants.

Pipeline
--------
    Source → Lexer → Token list → Parser → AST → (code generator)

Usage
-----
>>> from minicc.frontend import parse_source, ASTPrinter
>>> ast = parse_source("int main() { return 3; }")
>>> print(ASTPrinter().print(ast.root))
Program
  Function: main
    Statement: return
      Expression: 3

Language Subset
---------------
    program    ::= function*
    function   ::= "int"? identifier "(" ")" "{" statement+ "}"
    statement  ::= "return" integer-literal+ ";"

The lexer also recognizes if, else and the relational operators
= < <= > >=, which no grammar rule consumes yet.
"""

from minicc.frontend.ast import (
    AST,
    ASTNode,
    ASTPrinter,
    ASTVisitor,
    ExpressionNode,
    FunctionNode,
    ProgramNode,
    StatementNode,
)
from minicc.frontend.driver import (
    Frontend,
    FrontendOptions,
    FrontendResult,
    parse_file,
    tokenize,
)
from minicc.frontend.errors import (
    ASTInvariantError,
    EmptyFunctionBodyError,
    EmptyStatementError,
    ErrorKind,
    FrontendError,
    LexError,
    MalformedIntegerLiteralError,
    MissingTokenError,
    ParseError,
    UnexpectedTokenError,
    UnrecognizedCharacterError,
)
from minicc.frontend.lexer import KEYWORDS, Lexer, Token, TokenType
from minicc.frontend.parser import Parser, ParseResult, parse_source

__all__ = [
    # Driver
    "Frontend",
    "FrontendOptions",
    "FrontendResult",
    "parse_file",
    "parse_source",
    "tokenize",
    # Lexer
    "KEYWORDS",
    "Lexer",
    "Token",
    "TokenType",
    # Parser
    "Parser",
    "ParseResult",
    # AST
    "AST",
    "ASTNode",
    "ASTPrinter",
    "ASTVisitor",
    "ExpressionNode",
    "FunctionNode",
    "ProgramNode",
    "StatementNode",
    # Errors
    "ASTInvariantError",
    "EmptyFunctionBodyError",
    "EmptyStatementError",
    "ErrorKind",
    "FrontendError",
    "LexError",
    "MalformedIntegerLiteralError",
    "MissingTokenError",
    "ParseError",
    "UnexpectedTokenError",
    "UnrecognizedCharacterError",
]
