"""
Graph module for stylesheet import tracking.

This module provides:
- models: GraphEntry data class
- options: GraphOptions configuration
- resolver: Specifier-to-file resolution
- graph: Main SassGraph facade
"""

from sass_dependents.graph.graph import SassGraph
from sass_dependents.graph.models import GraphEntry
from sass_dependents.graph.options import DEFAULT_EXTENSIONS, GraphOptions
from sass_dependents.graph.resolver import (
    build_search_paths,
    normalize_path,
    resolve_specifier,
    strip_extension,
)

__all__ = [
    "SassGraph",
    "GraphEntry",
    "GraphOptions",
    "DEFAULT_EXTENSIONS",
    "build_search_paths",
    "normalize_path",
    "resolve_specifier",
    "strip_extension",
]
