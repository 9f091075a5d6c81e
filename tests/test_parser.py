"""
Tests for the import directive parser.
"""

from pathlib import Path

import pytest

from sass_dependents.analyzer.models import Token, TokenKind
from sass_dependents.analyzer.parser import (
    ImportScanner,
    State,
    is_indented_syntax,
    parse_file,
    parse_imports,
    scan_tokens,
)
from sass_dependents.exceptions import ImportSyntaxError, MissingFileError

AT = Token(TokenKind.AT, "@")
SPACE = Token(TokenKind.SPACE, " ")
NEWLINE = Token(TokenKind.NEWLINE, "\n")
SEMI = Token(TokenKind.SEMICOLON, ";")
LPAREN = Token(TokenKind.LPAREN, "(")
RPAREN = Token(TokenKind.RPAREN, ")")


def ident(text: str) -> Token:
    return Token(TokenKind.IDENT, text)


def string(text: str) -> Token:
    return Token(TokenKind.STRING, text)


class TestImportScanner:
    """Tests for the scanner state machine on hand-built token streams."""

    def test_directive_requires_at_sign(self):
        tokens = [ident("import"), SPACE, string("a"), SEMI]
        assert scan_tokens(tokens) == []

    def test_string_recorded_immediately(self):
        tokens = [AT, ident("use"), SPACE, string("config"), SEMI]
        assert scan_tokens(tokens) == ["config"]

    def test_unquoted_path_accumulates(self):
        tokens = [
            AT, ident("forward"), SPACE,
            ident("src"), Token(TokenKind.SLASH, "/"), ident("list"), SEMI,
        ]
        assert scan_tokens(tokens) == ["src/list"]

    def test_paren_args_skipped(self):
        """Nothing inside parentheses becomes a specifier."""
        tokens = [
            AT, ident("use"), SPACE, string("library"), SPACE, ident("with"),
            LPAREN, ident("black"), SPACE, string("#222"), RPAREN, SEMI,
        ]
        assert scan_tokens(tokens) == ["library"]

    def test_paren_discards_accumulator(self):
        tokens = [AT, ident("import"), SPACE, ident("url"), LPAREN, ident("foo"), RPAREN, SEMI]
        assert scan_tokens(tokens) == []

    def test_semicolon_in_parens_ends_directive(self):
        scanner = ImportScanner()
        for token in [AT, ident("import"), SPACE, LPAREN, SEMI]:
            scanner.feed(token)
        assert scanner.state is State.DEFAULT

    def test_flush_at_end_of_input(self):
        tokens = [AT, ident("import"), SPACE, ident("last")]
        assert scan_tokens(tokens) == ["last"]

    def test_newline_ends_directive_only_when_indented(self):
        tokens = [AT, ident("import"), SPACE, ident("a"), NEWLINE, ident("b")]
        assert scan_tokens(tokens, indented=True) == ["a"]
        assert scan_tokens(tokens, indented=False) == ["a", "b"]

    def test_nested_directive_is_fatal(self):
        tokens = [AT, ident("import"), SPACE, string("a"), SPACE, AT, ident("import")]
        with pytest.raises(ImportSyntaxError) as exc_info:
            scan_tokens(tokens, file_path="bad.scss")
        assert exc_info.value.file_path == "bad.scss"
        assert "bad.scss" in str(exc_info.value)

    def test_nested_directive_tolerated_when_indented(self):
        tokens = [AT, ident("import"), SPACE, ident("a"), SPACE, AT, ident("import"), SPACE, ident("b")]
        assert scan_tokens(tokens, indented=True) == ["a", "b"]


class TestParseImports:
    """End-to-end tests from source text."""

    def test_multiple_directives_in_order(self):
        source = '@import "base", "theme";\n@use "config";\n@forward "tools";\n'
        assert parse_imports(source) == ["base", "theme", "config", "tools"]

    def test_standalone_forward(self):
        assert parse_imports('@forward "tools";\n') == ["tools"]

    def test_forward_after_import(self):
        assert parse_imports('@import "base";\n@forward "tools";\n') == ["base", "tools"]

    def test_index_partial_of_forwards(self):
        source = '@forward "colors";\n@forward "spacing";\n'
        assert parse_imports(source) == ["colors", "spacing"]

    def test_for_loop_is_not_a_directive(self):
        assert parse_imports("@for $i from 1 through 3 { .a { b: c; } }\n") == []

    def test_duplicates_preserved(self):
        assert parse_imports('@import "a";\n@import "a";\n') == ["a", "a"]

    def test_unquoted_scss_path(self):
        assert parse_imports("@import partials/button;\n") == ["partials/button"]

    def test_url_import_ignored(self):
        assert parse_imports("@import url(foo.css);\n") == []

    def test_comments_ignored(self):
        source = '// @import "no";\n/* @import "nope"; */\n@import "yes";\n'
        assert parse_imports(source) == ["yes"]

    def test_trailing_comment_after_use(self):
        assert parse_imports('@use "a"; // @import "b"\n') == ["a"]

    def test_rules_are_not_imports(self):
        source = "$gap: 4px;\n.grid { margin: $gap; }\n@mixin flat { border: 0; }\n"
        assert parse_imports(source) == []

    def test_nested_import_raises_for_scss(self):
        with pytest.raises(ImportSyntaxError):
            parse_imports('@import "a" @import "b";\n')

    def test_indented_syntax(self):
        source = "@import reset, base\n@use config\n\nbody\n  margin: 0\n"
        assert parse_imports(source, indented=True) == ["reset", "base", "config"]

    def test_indented_quoted(self):
        assert parse_imports('@import "colors"\n', indented=True) == ["colors"]

    def test_indented_forward(self):
        assert parse_imports('@forward "tools"\n', indented=True) == ["tools"]

    def test_indented_comment_ignored(self):
        source = "// @import hidden\n@import shown\n"
        assert parse_imports(source, indented=True) == ["shown"]


class TestParseFile:
    """Tests for reading stylesheets from disk."""

    def test_syntax_chosen_by_extension(self, temp_dir: Path):
        path = temp_dir / "theme.sass"
        path.write_text("@import a\n@import b\n")
        result = parse_file(path)
        assert result.indented is True
        assert result.specifiers == ["a", "b"]

    def test_missing_file(self, temp_dir: Path):
        with pytest.raises(MissingFileError):
            parse_file(temp_dir / "missing.scss")

    def test_is_indented_syntax(self):
        assert is_indented_syntax("a/b.sass")
        assert not is_indented_syntax("a/b.scss")
