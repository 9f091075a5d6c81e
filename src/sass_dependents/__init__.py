"""Sass Dependents - stylesheet import graph and change-impact tool."""

__version__ = "0.1.0"

from .cli import cli
from .exceptions import (
    ConfigurationError,
    ImportSyntaxError,
    MissingFileError,
    SassGraphError,
)
from .graph import GraphEntry, GraphOptions, SassGraph
from .impact import DependentsAnalyzer, find_dependents, is_partial
from .pipeline import DependentPartials, FileRecord

__all__ = [
    "ConfigurationError",
    "DependentPartials",
    "DependentsAnalyzer",
    "FileRecord",
    "GraphEntry",
    "GraphOptions",
    "ImportSyntaxError",
    "MissingFileError",
    "SassGraph",
    "SassGraphError",
    "find_dependents",
    "is_partial",
    "main",
]


def main() -> None:
    """Entry point for the CLI application."""
    cli()
