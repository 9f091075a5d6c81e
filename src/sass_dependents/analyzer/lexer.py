"""
Pygments adapter for stylesheet tokenization.

Wraps the Pygments SCSS and Sass lexers and flattens their output into the
small (kind, text) vocabulary the import parser understands. Pygments decides
where strings and comments begin and end; everything else is split into
identifiers, the few punctuation symbols the parser cares about, and
whitespace.
"""

import logging
import re
from typing import Iterable, Iterator, List, Optional, Tuple

from pygments.lexer import inherit
from pygments.lexers.css import SassLexer, ScssLexer
from pygments.token import Comment, Keyword, String, _TokenType

from sass_dependents.analyzer.models import Token, TokenKind

logger = logging.getLogger(__name__)

_FRAGMENT_RE = re.compile(
    r"(?P<space>[ \t\r\f\v]+)|(?P<newline>\n)|(?P<ident>[\w.-]+)|(?P<symbol>.)",
    re.DOTALL,
)

_SYMBOLS = {
    "@": TokenKind.AT,
    ";": TokenKind.SEMICOLON,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "/": TokenKind.SLASH,
}

_QUOTES = ("'", '"')


_MODULE_DIRECTIVE = r"@(?:use|forward)\b"


class _ScssImportLexer(ScssLexer):
    """SCSS lexer tuned for ``@use``/``@forward`` lines.

    The stock lexer matches ``@forward`` as the ``@for`` keyword followed by
    ``ward``, and leaves both module directives in its selector state, where
    ``//`` comments are not recognized.
    """

    tokens = {
        "root": [
            (_MODULE_DIRECTIVE, Keyword, "selector"),
            inherit,
        ],
        "selector": [
            (r"//[^\n]*", Comment.Single),
            (r"/\*.*?\*/", Comment.Multiline),
            inherit,
        ],
    }


class _SassImportLexer(SassLexer):
    """Sass lexer that keeps ``@forward`` whole and recognizes trailing comments."""

    tokens = {
        "content": [
            (_MODULE_DIRECTIVE, Keyword, "selector"),
            inherit,
        ],
        "selector": [
            (r"//[^\n]*", Comment.Single),
            inherit,
        ],
        "import": [
            (r"//[^\n]*", Comment.Single),
            inherit,
        ],
    }


def get_lexer(indented: bool = False):
    """
    Create a Pygments lexer for the requested syntax.

    Args:
        indented: True for the indentation-sensitive Sass syntax

    Returns:
        Configured Pygments lexer
    """
    lexer_class = _SassImportLexer if indented else _ScssImportLexer
    return lexer_class(stripnl=False)


def split_fragment(text: str) -> Iterator[Token]:
    """
    Split raw text into identifier, symbol and whitespace tokens.

    Args:
        text: Text that Pygments classified as neither string nor comment

    Yields:
        Token for each identifier run, symbol and whitespace run
    """
    for match in _FRAGMENT_RE.finditer(text):
        kind = match.lastgroup
        value = match.group()
        if kind == "space":
            yield Token(TokenKind.SPACE, value)
        elif kind == "newline":
            yield Token(TokenKind.NEWLINE, value)
        elif kind == "ident":
            yield Token(TokenKind.IDENT, value)
        else:
            yield Token(_SYMBOLS.get(value, TokenKind.OTHER), value)


def _bare_string(text: str) -> Iterator[Token]:
    """Tokenize a Sass ``@import`` argument that Pygments left unsplit."""
    pieces = text.split(",")
    for index, piece in enumerate(pieces):
        if index:
            yield Token(TokenKind.OTHER, ",")
        if not piece:
            continue
        if len(piece) >= 2 and piece[0] in _QUOTES and piece[-1] == piece[0]:
            yield Token(TokenKind.STRING, piece[1:-1])
        else:
            yield from split_fragment(piece)


def normalize_tokens(stream: Iterable[Tuple[_TokenType, str]]) -> List[Token]:
    """
    Flatten a Pygments token stream into parser tokens.

    Quoted strings arrive from Pygments as an opening quote, one or more
    content pieces and a closing quote; they are merged into a single
    STRING token holding the unquoted content.

    Args:
        stream: Iterable of (token type, text) pairs from Pygments

    Returns:
        List of normalized tokens in source order
    """
    tokens: List[Token] = []
    quote: Optional[Tuple[_TokenType, str]] = None
    buffer: List[str] = []

    for ttype, value in stream:
        if not value:
            continue

        if quote is not None:
            quote_type, quote_char = quote
            if ttype is quote_type and value == quote_char:
                tokens.append(Token(TokenKind.STRING, "".join(buffer)))
                quote = None
                buffer = []
                continue
            if ttype in String or "\n" not in value:
                buffer.append(value)
                continue
            # Unterminated string: the line ended first
            tokens.append(Token(TokenKind.STRING, "".join(buffer)))
            quote = None
            buffer = []

        if (ttype in String.Double or ttype in String.Single) and value in _QUOTES:
            quote = (ttype, value)
        elif ttype is String:
            tokens.extend(_bare_string(value))
        elif ttype in String:
            tokens.append(Token(TokenKind.OTHER, value))
        elif ttype in Comment:
            tokens.append(Token(TokenKind.COMMENT, value.rstrip("\n")))
            if value.endswith("\n"):
                tokens.append(Token(TokenKind.NEWLINE, "\n"))
        else:
            tokens.extend(split_fragment(value))

    if quote is not None:
        tokens.append(Token(TokenKind.STRING, "".join(buffer)))

    return tokens


def tokenize(source: str, indented: bool = False) -> List[Token]:
    """
    Tokenize stylesheet source into (kind, text) pairs.

    Args:
        source: Stylesheet source text
        indented: True for the indentation-sensitive Sass syntax

    Returns:
        Ordered list of tokens

    Examples:
        >>> [t.kind for t in tokenize('@import "a";')]
        ['@', 'ident', 'space', 'string', ';', 'newline']
    """
    lexer = get_lexer(indented)
    tokens = normalize_tokens(lexer.get_tokens(source))
    logger.debug(f"Tokenized {len(source)} chars into {len(tokens)} tokens")
    return tokens
