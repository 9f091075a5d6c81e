"""
Graph configuration.

Options are merged over defaults the same way for the library and the CLI:
anything not given keeps its default.
"""

import os
import re
from dataclasses import dataclass, field
from typing import List, Optional, Pattern, Sequence, Tuple, Union

from sass_dependents.exceptions import ConfigurationError
from sass_dependents.graph.resolver import dedupe, normalize_path

DEFAULT_EXTENSIONS: Tuple[str, ...] = ("scss", "sass")


def _default_load_paths() -> List[str]:
    return [os.getcwd()]


@dataclass
class GraphOptions:
    """Configuration for a SassGraph.

    Attributes:
        load_paths: Extra roots searched when resolving imports
        extensions: Recognized extensions, tried in order during resolution
        follow: Follow symlinked directories while enumerating files
        exclude: Regular expression; matching paths are never indexed
    """

    load_paths: Sequence[str] = field(default_factory=_default_load_paths)
    extensions: Sequence[str] = DEFAULT_EXTENSIONS
    follow: bool = False
    exclude: Optional[Union[str, Pattern]] = None

    def __post_init__(self):
        if isinstance(self.load_paths, (str, os.PathLike)):
            self.load_paths = [self.load_paths]
        self.load_paths = dedupe(normalize_path(p) for p in self.load_paths)

        if isinstance(self.extensions, str):
            self.extensions = [self.extensions]
        self.extensions = tuple(dedupe(ext.lstrip(".") for ext in self.extensions))
        if not self.extensions:
            raise ConfigurationError("At least one file extension is required.")

        self.exclude = _compile_exclude(self.exclude)

    def is_excluded(self, path: str) -> bool:
        """Return True if the exclusion pattern matches ``path``."""
        return self.exclude is not None and self.exclude.search(path) is not None


def _compile_exclude(exclude: Optional[Union[str, Pattern]]) -> Optional[Pattern]:
    if exclude is None or isinstance(exclude, re.Pattern):
        return exclude
    if isinstance(exclude, str):
        try:
            return re.compile(exclude)
        except re.error as e:
            raise ConfigurationError(f"Invalid exclude pattern {exclude!r}: {e}") from e
    raise ConfigurationError(
        f"Option exclude must be a regular expression, got {type(exclude).__name__}."
    )
