"""
Analyzer module for stylesheet import analysis.

This module provides:
- models: Token and result data classes
- lexer: Pygments-backed tokenizer
- parser: Import directive state machine
"""

from sass_dependents.analyzer.lexer import tokenize
from sass_dependents.analyzer.models import FileImports, Token, TokenKind
from sass_dependents.analyzer.parser import (
    ImportScanner,
    is_indented_syntax,
    parse_file,
    parse_imports,
    scan_tokens,
)

__all__ = [
    "tokenize",
    "Token",
    "TokenKind",
    "FileImports",
    "ImportScanner",
    "is_indented_syntax",
    "parse_file",
    "parse_imports",
    "scan_tokens",
]
