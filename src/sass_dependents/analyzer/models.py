"""
Data models for import analysis results.
"""

from dataclasses import dataclass, field
from typing import List, NamedTuple


class TokenKind:
    """Token kinds produced by the lexer and consumed by the import parser."""

    IDENT = "ident"
    STRING = "string"
    AT = "@"
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    SLASH = "/"
    SPACE = "space"
    NEWLINE = "newline"
    COMMENT = "comment"
    OTHER = "other"


class Token(NamedTuple):
    """A single (kind, text) pair from the token stream."""

    kind: str
    text: str


@dataclass
class FileImports:
    """Raw import specifiers found in a single stylesheet."""

    file_path: str
    indented: bool
    specifiers: List[str] = field(default_factory=list)
