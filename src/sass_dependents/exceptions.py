"""
Error taxonomy for graph construction and import parsing.

Construction errors stop before any work is done, parse errors abort the
indexing of one file, and a missing file aborts the call that asked for it.
Unresolved imports are not errors at all and never reach this module.
"""

from typing import Optional


class SassGraphError(Exception):
    """Base class for all errors raised by sass-dependents."""

    pass


class ConfigurationError(SassGraphError):
    """Raised when a graph is constructed with invalid options."""

    pass


class ImportSyntaxError(SassGraphError):
    """Raised when an import directive opens while another is still open."""

    def __init__(self, message: str, file_path: Optional[str] = None):
        self.file_path = file_path
        if file_path:
            message = f"{message} ({file_path})"
        super().__init__(message)


class MissingFileError(SassGraphError):
    """Raised when a file to be indexed cannot be found on disk."""

    def __init__(self, file_path: str):
        self.file_path = file_path
        super().__init__(f"File not found: {file_path}")
