"""
minicc Error Base
=================

This module holds the root of the minicc exception hierarchy and the
source location type shared by every stage of the toolchain.

Exception Hierarchy
-------------------
MiniCError (base)
└── FrontendError (see minicc.frontend.errors)
    ├── LexError - input that cannot be tokenized
    ├── ParseError - token streams that violate the grammar
    └── ASTInvariantError - trees that break the generator contract

Callers that do not care which stage failed can catch MiniCError:

    try:
        ast = parse_source(text)
    except MiniCError as e:
        print(e)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class MiniCError(Exception):
    """
    Base exception for all minicc errors.

    Every exception raised deliberately by the toolchain inherits from
    this class.
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A position in source text, used for tokens, nodes and errors.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
