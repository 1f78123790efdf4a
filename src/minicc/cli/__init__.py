"""
minicc Command-Line Interface
=============================

- **mcc**: check a source file, dump its tokens or its AST

Each tool is a Click application with help and error reporting.
"""

__all__ = ["mcc"]
