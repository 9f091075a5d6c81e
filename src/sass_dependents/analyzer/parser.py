"""
Import directive parser.

Scans the token stream of one stylesheet and returns the raw specifiers of
its ``@import``, ``@use`` and ``@forward`` directives, in source order.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Union

from sass_dependents.analyzer.lexer import tokenize
from sass_dependents.analyzer.models import FileImports, Token, TokenKind
from sass_dependents.exceptions import ImportSyntaxError, MissingFileError

logger = logging.getLogger(__name__)

DIRECTIVES = frozenset({"import", "use", "forward"})
INDENTED_EXTENSION = ".sass"


class State(Enum):
    """Scanner states."""

    DEFAULT = "default"
    IN_DIRECTIVE = "in_directive"
    IN_PAREN_ARGS = "in_paren_args"


class ImportScanner:
    """State machine that collects import specifiers from a token stream.

    Transitions:
        DEFAULT        --@ + directive-->  IN_DIRECTIVE
        IN_DIRECTIVE   --(-->              IN_PAREN_ARGS  (accumulator discarded)
        IN_PAREN_ARGS  --)-->              IN_DIRECTIVE
        IN_DIRECTIVE   --;-->              DEFAULT        (accumulator flushed)
        IN_PAREN_ARGS  --;-->              DEFAULT
        IN_DIRECTIVE   --newline-->        DEFAULT        (indented syntax only)

    Inside IN_DIRECTIVE a string token is recorded as one specifier,
    identifier and ``/`` tokens build an unquoted specifier, and whitespace
    flushes it.
    """

    def __init__(self, indented: bool = False, file_path: Optional[str] = None):
        self.indented = indented
        self.file_path = file_path
        self.state = State.DEFAULT
        self.results: List[str] = []
        self._pending = ""
        self._previous: Optional[Token] = None

    def feed(self, token: Token) -> None:
        """Advance the state machine by one token."""
        if self._opens_directive(token):
            if self.state is not State.DEFAULT and not self.indented:
                raise ImportSyntaxError(
                    "Encountered invalid @import syntax", self.file_path
                )
            self._flush()
            self.state = State.IN_DIRECTIVE
        elif self.state is State.IN_DIRECTIVE:
            self._in_directive(token)
        elif self.state is State.IN_PAREN_ARGS:
            self._in_paren_args(token)

        self._previous = token

    def finish(self) -> List[str]:
        """Flush any pending specifier and return everything collected."""
        self._flush()
        return self.results

    def _opens_directive(self, token: Token) -> bool:
        return (
            token.kind == TokenKind.IDENT
            and token.text in DIRECTIVES
            and self._previous is not None
            and self._previous.kind == TokenKind.AT
        )

    def _in_directive(self, token: Token) -> None:
        kind = token.kind
        if kind == TokenKind.STRING:
            self.results.append(token.text)
        elif kind in (TokenKind.IDENT, TokenKind.SLASH):
            self._pending += token.text
        elif kind == TokenKind.SPACE:
            self._flush()
        elif kind == TokenKind.NEWLINE:
            self._flush()
            if self.indented:
                self.state = State.DEFAULT
        elif kind == TokenKind.SEMICOLON:
            self._flush()
            self.state = State.DEFAULT
        elif kind == TokenKind.LPAREN:
            self._pending = ""
            self.state = State.IN_PAREN_ARGS

    def _in_paren_args(self, token: Token) -> None:
        if token.kind == TokenKind.RPAREN:
            self.state = State.IN_DIRECTIVE
        elif token.kind == TokenKind.SEMICOLON:
            self.state = State.DEFAULT
        elif token.kind == TokenKind.NEWLINE and self.indented:
            self.state = State.DEFAULT

    def _flush(self) -> None:
        if self._pending:
            self.results.append(self._pending)
            self._pending = ""


def scan_tokens(
    tokens: Iterable[Token],
    indented: bool = False,
    file_path: Optional[str] = None,
) -> List[str]:
    """
    Extract import specifiers from an already tokenized stylesheet.

    Args:
        tokens: Token stream in source order
        indented: True for the indentation-sensitive Sass syntax
        file_path: File path for error reporting

    Returns:
        Raw specifiers in source order, duplicates preserved

    Raises:
        ImportSyntaxError: If a directive opens inside another one (SCSS only)
    """
    scanner = ImportScanner(indented=indented, file_path=file_path)
    for token in tokens:
        scanner.feed(token)
    return scanner.finish()


def parse_imports(
    source: str,
    indented: bool = False,
    file_path: Optional[str] = None,
) -> List[str]:
    """
    Parse stylesheet source and return its raw import specifiers.

    Args:
        source: Stylesheet source text
        indented: True for the indentation-sensitive Sass syntax
        file_path: File path for error reporting

    Returns:
        Raw specifiers in source order, duplicates preserved

    Raises:
        ImportSyntaxError: If a directive opens inside another one (SCSS only)

    Examples:
        >>> parse_imports('@import "base", "theme";')
        ['base', 'theme']
        >>> parse_imports('@use config\\n', indented=True)
        ['config']
    """
    return scan_tokens(tokenize(source, indented), indented, file_path)


def is_indented_syntax(file_path: Union[str, Path]) -> bool:
    """Return True if the file uses the indentation-sensitive syntax."""
    return Path(file_path).suffix.lower() == INDENTED_EXTENSION


def parse_file(file_path: Union[str, Path]) -> FileImports:
    """
    Read a stylesheet and parse its import specifiers.

    Args:
        file_path: Path to the stylesheet

    Returns:
        FileImports with the raw specifiers

    Raises:
        MissingFileError: If the file cannot be read
        ImportSyntaxError: If the directive syntax is malformed
    """
    path = str(file_path)
    indented = is_indented_syntax(path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            source = f.read()
    except FileNotFoundError as e:
        raise MissingFileError(path) from e

    specifiers = parse_imports(source, indented=indented, file_path=path)
    logger.debug(f"Parsed {len(specifiers)} import specifiers from {path}")
    return FileImports(file_path=path, indented=indented, specifiers=specifiers)
