"""
minicc - A Minimal C Compiler Front End
=======================================

This package turns source text written in a tiny subset of C into a
validated abstract syntax tree, ready for a code generator.

Main Components
---------------
- **frontend**: lexer, recursive descent parser and AST
- **cli**: the `mcc` command-line tool

Quick Start
-----------
    >>> from minicc import parse_source
    >>> ast = parse_source("int main() { return 2; }")
    >>> ast.root.functions[0].name
    'main'

Or from the command line:
    $ mcc return_2.c --ast
"""

__version__ = "0.1.0"

from minicc.errors import MiniCError, SourceLocation
from minicc.frontend import (
    AST,
    ErrorKind,
    Frontend,
    FrontendError,
    FrontendOptions,
    Lexer,
    Parser,
    Token,
    TokenType,
    parse_file,
    parse_source,
    tokenize,
)

__all__ = [
    "__version__",
    "MiniCError",
    "SourceLocation",
    "AST",
    "ErrorKind",
    "Frontend",
    "FrontendError",
    "FrontendOptions",
    "Lexer",
    "Parser",
    "Token",
    "TokenType",
    "parse_file",
    "parse_source",
    "tokenize",
]
