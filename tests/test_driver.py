"""
Front-End Driver Test Suite
===========================

Tests for the two-pass pipeline, its options and the convenience
functions.
"""

import logging

import pytest

from minicc import parse_source as top_level_parse_source
from minicc.errors import MiniCError
from minicc.frontend.ast import AST, ExpressionNode, FunctionNode, StatementNode
from minicc.frontend.driver import (
    Frontend,
    FrontendOptions,
    FrontendResult,
    parse_file,
    tokenize,
)
from minicc.frontend.errors import (
    EmptyStatementError,
    ErrorKind,
    FrontendError,
    UnrecognizedCharacterError,
)
from minicc.frontend.lexer import Token, TokenType


def expected_ast(name: str, value: int) -> AST:
    statement = StatementNode(keyword="return")
    statement.add_child(ExpressionNode(value=value))
    function = FunctionNode(name=name)
    function.add_child(statement)
    ast = AST()
    ast.root.add_child(function)
    return ast


# =============================================================================
# Options
# =============================================================================

class TestFrontendOptions:
    """Tests for FrontendOptions and its environment factory."""

    def test_defaults(self):
        """Defaults lex raw bytes and validate the AST."""
        options = FrontendOptions()
        assert options.encoding is None
        assert options.validate_ast is True

    def test_from_env_without_variables(self, monkeypatch):
        """With no variables set, from_env gives the defaults."""
        monkeypatch.delenv("MINICC_ENCODING", raising=False)
        monkeypatch.delenv("MINICC_VALIDATE_AST", raising=False)
        assert FrontendOptions.from_env() == FrontendOptions()

    def test_from_env_overrides(self, monkeypatch):
        """Environment variables override the defaults."""
        monkeypatch.setenv("MINICC_ENCODING", "utf-16")
        monkeypatch.setenv("MINICC_VALIDATE_AST", "off")
        options = FrontendOptions.from_env()
        assert options.encoding == "utf-16"
        assert options.validate_ast is False

    def test_from_env_ignores_invalid_flag(self, monkeypatch, caplog):
        """An unrecognised flag value keeps the default and logs a warning."""
        monkeypatch.setenv("MINICC_VALIDATE_AST", "maybe")
        with caplog.at_level(logging.WARNING, logger="minicc.frontend.driver"):
            options = FrontendOptions.from_env()
        assert options.validate_ast is True
        assert "MINICC_VALIDATE_AST" in caplog.text

    def test_from_env_ignores_unknown_encoding(self, monkeypatch, caplog):
        """An encoding Python does not know keeps the default."""
        monkeypatch.setenv("MINICC_ENCODING", "no-such-codec")
        with caplog.at_level(logging.WARNING, logger="minicc.frontend.driver"):
            options = FrontendOptions.from_env()
        assert options.encoding is None
        assert "MINICC_ENCODING" in caplog.text


# =============================================================================
# Frontend
# =============================================================================

class TestFrontend:
    """Tests for the Frontend pipeline."""

    def test_compile_source(self):
        """A valid program yields tokens and the validated AST."""
        result = Frontend().compile_source("int main() { return 3; }", "test.c")
        assert isinstance(result, FrontendResult)
        assert result.success
        assert result.filename == "test.c"
        assert result.token_count == 10
        assert result.tokens[-1] == Token(TokenType.EOF)
        assert result.function_count == 1
        assert result.ast == expected_ast("main", 3)

    def test_compile_source_raises_parse_error(self):
        """Parse failures are raised with their specific type."""
        with pytest.raises(EmptyStatementError):
            Frontend().compile_source("int main() { return; }")

    def test_compile_source_raises_lex_error(self):
        """Lexical failures surface before parsing starts."""
        with pytest.raises(UnrecognizedCharacterError):
            Frontend().compile_source("int main() { return -1; }")

    def test_errors_share_a_base(self):
        """Every front-end error is a MiniCError."""
        with pytest.raises(MiniCError):
            Frontend().compile_source("int main() { }")

    def test_tokenize_source(self):
        """tokenize_source returns the full token list."""
        tokens = Frontend().tokenize_source("return 0;")
        assert tokens == [
            Token(TokenType.RETURN),
            Token(TokenType.INT_LITERAL, "0"),
            Token(TokenType.SEMICOLON),
            Token(TokenType.EOF),
        ]

    def test_compile_file(self, tmp_path):
        """Files are read and reported under their path."""
        source_file = tmp_path / "return_2.c"
        source_file.write_text("int main() {\n    return 2;\n}\n")

        result = Frontend().compile_file(source_file)
        assert result.filename == str(source_file)
        assert result.ast == expected_ast("main", 2)

    def test_compile_file_error_location(self, tmp_path):
        """Errors from files carry the file path in their location."""
        source_file = tmp_path / "bad.c"
        source_file.write_text("int main() {\n    return 0\n}\n")

        with pytest.raises(FrontendError) as exc_info:
            Frontend().compile_file(source_file)
        assert exc_info.value.location.filename == str(source_file)
        assert exc_info.value.location.line == 3

    def test_compile_file_missing(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            Frontend().compile_file(tmp_path / "nope.c")

    def test_compile_file_encoding(self, tmp_path):
        """The configured encoding is used to read files."""
        source_file = tmp_path / "utf16.c"
        source_file.write_text("int main() { return 5; }", encoding="utf-16")

        options = FrontendOptions(encoding="utf-16")
        result = Frontend(options).compile_file(source_file)
        assert result.ast == expected_ast("main", 5)

    def test_compile_file_invalid_byte(self, tmp_path):
        """A stray byte in a file is a lexical error at that byte."""
        source_file = tmp_path / "bad_byte.c"
        source_file.write_bytes(b"int main() { return 1\xff; }")

        with pytest.raises(UnrecognizedCharacterError) as exc_info:
            Frontend().compile_file(source_file)
        assert exc_info.value.char == "\xff"
        assert exc_info.value.location.column == 22
        assert "0xFF" in str(exc_info.value)

    def test_compile_file_reports_bytes_not_code_points(self, tmp_path):
        """Non-ASCII text is reported by its first byte on disk."""
        source_file = tmp_path / "accent.c"
        source_file.write_text("int main() { return 1é; }", encoding="utf-8")

        with pytest.raises(UnrecognizedCharacterError, match="0xC3"):
            Frontend().compile_file(source_file)

    def test_compile_file_undecodable_with_encoding(self, tmp_path):
        """With an encoding set, a byte the codec rejects is a lexical error."""
        source_file = tmp_path / "bad_utf8.c"
        source_file.write_bytes(b"int main() {\n    return 1\xff;\n}\n")

        options = FrontendOptions(encoding="utf-8")
        with pytest.raises(UnrecognizedCharacterError) as exc_info:
            Frontend(options).compile_file(source_file)
        location = exc_info.value.location
        assert (location.line, location.column) == (2, 13)
        assert exc_info.value.source_line == "    return 1\xff;"

    def test_parse_file_raises_frontend_error_for_bytes(self, tmp_path):
        """parse_file() never lets a decoding error escape."""
        source_file = tmp_path / "nul.c"
        source_file.write_bytes(b"int main() { return \x00; }")

        with pytest.raises(FrontendError):
            parse_file(source_file)

    def test_check_source(self):
        """check_source returns a flag-like result and never raises."""
        frontend = Frontend()
        assert frontend.check_source("int main() { return 0; }")

        result = frontend.check_source("int main() { return 0 }")
        assert not result
        assert result.kind == ErrorKind.UNEXPECTED_TOKEN

        result = frontend.check_source("int main() { return ~0; }")
        assert not result
        assert result.kind == ErrorKind.UNRECOGNIZED_CHARACTER
        assert result.location.column == 21

    def test_debug_logging(self, caplog):
        """The pipeline logs its stages at DEBUG."""
        with caplog.at_level(logging.DEBUG, logger="minicc"):
            Frontend().compile_source("int main() { return 1; }", "log.c")
        assert "log.c: 10 tokens" in caplog.text
        assert "log.c: 1 function(s) parsed" in caplog.text


# =============================================================================
# Convenience Functions
# =============================================================================

class TestConvenienceFunctions:
    """Tests for module-level helpers."""

    def test_tokenize(self):
        """tokenize() lexes with default options."""
        assert tokenize("int") == [Token(TokenType.INT), Token(TokenType.EOF)]

    def test_parse_file(self, tmp_path):
        """parse_file() returns the validated AST."""
        source_file = tmp_path / "prog.c"
        source_file.write_text("int main() { return 42; }")
        assert parse_file(source_file) == expected_ast("main", 42)

    def test_package_exports(self):
        """The package root re-exports parse_source."""
        assert top_level_parse_source("int main() { return 1; }") == expected_ast("main", 1)
