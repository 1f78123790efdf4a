"""
minicc Front-End Driver
=======================

This module runs the complete front end:

    Source → Lexer → Token list → Parser → AST → (validation)

Lexing finishes before parsing starts; the token list is handed to the
parser whole.

Usage
-----
Command line:
    $ mcc hello.c --ast

Programmatic:
    >>> from minicc.frontend.driver import Frontend
    >>> result = Frontend().compile_source('int main() { return 2; }')
    >>> result.function_count
    1

The validated AST in FrontendResult.ast is what the code generator
consumes: a ProgramNode whose functions each hold at least one statement,
each with at least one integer expression.

Configuration
-------------
FrontendOptions can be built directly or from the environment:

    MINICC_ENCODING      Decode source files with this encoding instead of
                         lexing their raw bytes
    MINICC_VALIDATE_AST  Set to 0/false/no/off to skip AST validation
"""

import codecs
from dataclasses import dataclass, field
import logging
import os
from pathlib import Path
from typing import Optional

from minicc.errors import SourceLocation
from minicc.frontend.ast import AST
from minicc.frontend.errors import FrontendError, UnrecognizedCharacterError
from minicc.frontend.lexer import Lexer, Token
from minicc.frontend.parser import Parser, ParseResult

logger = logging.getLogger(__name__)


@dataclass
class FrontendOptions:
    """
    Front-end configuration options.

    Attributes:
        encoding: Decode source files with this encoding; None lexes
            the raw bytes, one character per byte
        validate_ast: Check the generator contract after a successful parse
    """
    encoding: Optional[str] = None
    validate_ast: bool = True

    @classmethod
    def from_env(cls) -> "FrontendOptions":
        """
        Create FrontendOptions from environment variables.

        Unset or unrecognised values keep their defaults.
        """
        options = cls()

        if encoding := os.environ.get("MINICC_ENCODING"):
            try:
                options.encoding = codecs.lookup(encoding).name
            except LookupError:
                logger.warning(f"Ignoring unknown MINICC_ENCODING value {encoding!r}")

        if validate := os.environ.get("MINICC_VALIDATE_AST"):
            flag = validate.strip().lower()
            if flag in ("0", "false", "no", "off"):
                options.validate_ast = False
            elif flag in ("1", "true", "yes", "on"):
                options.validate_ast = True
            else:
                logger.warning(f"Ignoring invalid MINICC_VALIDATE_AST value {validate!r}")

        return options


@dataclass
class FrontendResult:
    """
    Result of running the front end on one source.

    Attributes:
        filename: Source filename
        success: True if the source lexed, parsed and validated
        tokens: The full token list, ending with EOF
        ast: The validated tree
    """
    filename: str = ""
    success: bool = False
    tokens: list[Token] = field(default_factory=list)
    ast: Optional[AST] = None

    @property
    def token_count(self) -> int:
        return len(self.tokens)

    @property
    def function_count(self) -> int:
        if self.ast is None:
            return 0
        return self.ast.root.num_children()


class Frontend:
    """
    Lexer and parser behind a single interface.

    Example:
        frontend = Frontend()
        result = frontend.compile_file("return_2.c")
        print(result.ast)

    Attributes:
        options: Front-end configuration
    """

    def __init__(self, options: Optional[FrontendOptions] = None):
        self.options = options or FrontendOptions()

    def tokenize_source(self, source: str | bytes, filename: str = "<input>") -> list[Token]:
        """
        Tokenize source text.

        Raises:
            UnrecognizedCharacterError: If a byte starts no token
        """
        tokens = Lexer(source, filename).tokenize()
        logger.debug(f"{filename}: {len(tokens)} tokens")
        return tokens

    def compile_source(self, source: str | bytes, filename: str = "<input>") -> FrontendResult:
        """
        Run the front end on source text.

        Args:
            source: The program text
            filename: Source filename for error messages

        Returns:
            FrontendResult holding the tokens and the validated AST

        Raises:
            FrontendError: If lexing, parsing or validation fails
        """
        result = FrontendResult(filename=filename)

        lexer = Lexer(source, filename)
        result.tokens = lexer.tokenize()
        logger.debug(f"{filename}: {len(result.tokens)} tokens")

        parser = Parser(result.tokens, filename, lexer.source.splitlines())
        outcome = parser.parse()
        if not outcome:
            logger.info(f"{filename}: parse failed with {outcome.kind.name}")
            outcome.raise_if_failed()

        if self.options.validate_ast:
            parser.ast.validate()

        result.ast = parser.ast
        result.success = True
        logger.debug(f"{filename}: {result.function_count} function(s) parsed")
        return result

    def read_source(self, filepath: str | Path) -> str | bytes:
        """
        Read a source file the way the lexer expects it.

        Without an encoding the raw bytes are returned, so every byte is
        classified by the lexer on its own. With one, the file is decoded
        and a byte the codec rejects is reported where it occurs.

        Raises:
            UnrecognizedCharacterError: If the file does not decode
            FileNotFoundError: If the file does not exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        data = path.read_bytes()
        if self.options.encoding is None:
            return data

        try:
            return data.decode(self.options.encoding)
        except UnicodeDecodeError as e:
            raise _undecodable_byte(data, e, str(filepath)) from e

    def compile_file(self, filepath: str | Path) -> FrontendResult:
        """
        Run the front end on a source file.

        Raises:
            FrontendError: If decoding, lexing, parsing or validation fails
            FileNotFoundError: If the file does not exist
        """
        source = self.read_source(filepath)
        return self.compile_source(source, str(filepath))

    def check_source(self, source: str | bytes, filename: str = "<input>") -> ParseResult:
        """
        Report whether source is a valid program without raising.

        Lexical and validation errors are returned as a failed ParseResult
        alongside parse errors.
        """
        try:
            self.compile_source(source, filename)
        except FrontendError as e:
            return ParseResult(success=False, error=e)
        return ParseResult(success=True)


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(source: str | bytes, filename: str = "<input>") -> list[Token]:
    """Tokenize source text with default options."""
    return Frontend().tokenize_source(source, filename)


def parse_file(filepath: str | Path, options: Optional[FrontendOptions] = None) -> AST:
    """
    Parse a source file and return its validated AST.

    Raises:
        FrontendError: If the file is not a valid program
        FileNotFoundError: If the file does not exist
    """
    return Frontend(options).compile_file(filepath).ast


def _undecodable_byte(data: bytes, error: UnicodeDecodeError, filename: str) -> UnrecognizedCharacterError:
    """Build the lexical error for the first byte a codec rejected."""
    before = data[:error.start].decode("latin-1")
    line_start = before.rfind("\n") + 1
    line_end = data.find(b"\n", error.start)
    if line_end == -1:
        line_end = len(data)

    location = SourceLocation(
        filename=filename,
        line=before.count("\n") + 1,
        column=error.start - line_start + 1,
    )
    source_line = data[line_start:line_end].decode("latin-1")
    char = data[error.start:error.start + 1].decode("latin-1")
    return UnrecognizedCharacterError(char, location, source_line)
