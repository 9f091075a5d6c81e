"""
Main facade for the stylesheet import graph.

Indexes stylesheets by absolute path and keeps edges in both directions:
``imports`` on the importing file and ``imported_by`` on the imported one.
"""

import dataclasses
import logging
import os
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Set, Tuple, Union

from rich.progress import Progress

from sass_dependents.analyzer.parser import parse_file
from sass_dependents.exceptions import (
    ConfigurationError,
    ImportSyntaxError,
    MissingFileError,
)
from sass_dependents.graph.models import GraphEntry
from sass_dependents.graph.options import GraphOptions
from sass_dependents.graph.resolver import (
    PARTIAL_PREFIX,
    build_search_paths,
    is_within,
    normalize_path,
    relative_to_roots,
    resolve_specifier,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class SassGraph:
    """In-memory import graph for a tree of Sass/SCSS stylesheets.

    The graph is built once with ``build`` and then kept current with
    ``refresh`` for every file that changes. Nothing is persisted.
    """

    def __init__(
        self,
        base_dir: Optional[PathLike],
        options: Optional[GraphOptions] = None,
        **overrides,
    ):
        """Initialize an empty graph.

        Args:
            base_dir: Base directory; searched after the importing file's
                directory and enumerated by ``build``
            options: Graph options. Defaults to GraphOptions()
            **overrides: Individual option values merged over ``options``

        Raises:
            ConfigurationError: If base_dir is missing or an option is invalid
        """
        if options is None:
            options = GraphOptions(**overrides)
        elif overrides:
            options = dataclasses.replace(options, **overrides)

        if not base_dir:
            raise ConfigurationError("Base dir is required.")

        self.options = options
        self.dir = normalize_path(base_dir)
        self.index: Dict[str, GraphEntry] = {}
        self.errors: List[Tuple[str, str]] = []

    @property
    def load_paths(self) -> List[str]:
        return list(self.options.load_paths)

    @property
    def extensions(self) -> Tuple[str, ...]:
        return tuple(self.options.extensions)

    def is_excluded(self, path: str) -> bool:
        return self.options.is_excluded(path)

    def iter_files(self, root: Optional[PathLike] = None) -> Iterator[str]:
        """
        Enumerate stylesheets under a directory.

        Hidden files and directories are included. Symlinked directories are
        only descended into when the ``follow`` option is set.

        Args:
            root: Directory to enumerate (default: the base directory)

        Yields:
            Absolute paths of files with a recognized extension, sorted
        """
        root = normalize_path(root) if root is not None else self.dir
        suffixes = {f".{ext}" for ext in self.extensions}

        for current, dirnames, filenames in os.walk(root, followlinks=self.options.follow):
            dirnames.sort()
            for filename in sorted(filenames):
                if os.path.splitext(filename)[1] in suffixes:
                    path = os.path.join(current, filename)
                    if os.path.isfile(path):
                        yield path

    def build(
        self,
        root: Optional[PathLike] = None,
        progress: Optional[Progress] = None,
    ) -> None:
        """
        Index every stylesheet under ``root``.

        A file that fails to parse, or vanishes during the build, is logged,
        recorded in ``errors`` and skipped; the build carries on with the
        remaining files.

        Args:
            root: Directory to enumerate (default: the base directory)
            progress: Optional Progress instance to report per-file progress
        """
        files = list(self.iter_files(root))
        logger.info(f"Building graph from {len(files)} files under {root or self.dir}")

        task_id = None
        if progress is not None:
            task_id = progress.add_task(f"Indexing {len(files)} files...", total=len(files))

        visited: Set[str] = set()
        failed: Set[str] = set()
        for file_path in files:
            path = normalize_path(file_path)
            try:
                self._add_entry(path, None, visited, failed)
            except (ImportSyntaxError, MissingFileError, UnicodeDecodeError) as e:
                failed.add(path)
                self._record_error(path, e)
            finally:
                if task_id is not None:
                    progress.update(task_id, advance=1)

        logger.info(f"Graph ready: {len(self.index)} entries, {len(self.errors)} errors")

    def refresh(self, file_path: PathLike) -> None:
        """
        Re-index one file after it changed.

        Its imports are parsed and resolved again, recursively, so newly
        added imports are indexed too. Reverse edges left over from imports
        the file no longer has are removed. An import that fails to index is
        recorded in ``errors`` and dropped from the file's imports.

        Args:
            file_path: Path of the changed file

        Raises:
            MissingFileError: If the file does not exist
            ImportSyntaxError: If the file has malformed import syntax
        """
        logger.debug(f"Refreshing {file_path}")
        self.add_entry(file_path)

    def add_entry(self, file_path: PathLike, parent: Optional[PathLike] = None) -> None:
        """
        Index a file and, recursively, everything it imports.

        An import that fails to index is recorded in ``errors`` and left out
        of the file's imports; only a failure of ``file_path`` itself raises.

        Args:
            file_path: Path of the file to index
            parent: Path of the importing file, if reached through an import

        Raises:
            MissingFileError: If the file does not exist
            ImportSyntaxError: If the file has malformed import syntax
        """
        parent_path = normalize_path(parent) if parent is not None else None
        self._add_entry(normalize_path(file_path), parent_path, set(), set())

    def _add_entry(
        self,
        path: str,
        parent: Optional[str],
        visited: Set[str],
        failed: Set[str],
    ) -> None:
        if self.is_excluded(path):
            return

        if path in visited:
            entry = self.index.get(path)
            if entry is not None and parent is not None:
                self._record_importer(entry, parent)
            return
        visited.add(path)

        try:
            modified = os.stat(path).st_mtime
        except FileNotFoundError as e:
            raise MissingFileError(path) from e

        # Parse first so a syntax error leaves the previous entry untouched
        file_imports = parse_file(path)

        previous = self.index.get(path)
        if previous is not None:
            self._forget_importer(path, previous.imports)

        entry = GraphEntry(
            last_modified=modified,
            imported_by=list(previous.imported_by) if previous is not None else [],
        )
        self.index[path] = entry

        search_paths = build_search_paths(os.path.dirname(path), self.dir, self.load_paths)

        for specifier in file_imports.specifiers:
            resolved = resolve_specifier(specifier, search_paths, self.extensions)
            if resolved is None:
                logger.debug(f"Unresolved import '{specifier}' in {path}")
                continue

            resolved = normalize_path(resolved)
            if self.is_excluded(resolved):
                continue

            if not entry.add_import(resolved):
                continue

            try:
                self._add_entry(resolved, path, visited, failed)
            except (ImportSyntaxError, MissingFileError, UnicodeDecodeError) as e:
                failed.add(resolved)
                self._record_error(resolved, e)

            # Failed just now or earlier in this pass
            if resolved in failed:
                entry.imports.remove(resolved)

        if parent is not None:
            self._record_importer(entry, parent)

    def _record_error(self, path: str, error: Exception) -> None:
        logger.warning(f"Skipping {path}: {error}")
        self.errors.append((path, str(error)))

    def _record_importer(self, entry: GraphEntry, parent: str) -> None:
        if not self.is_excluded(parent):
            entry.imported_by.append(parent)

    def _forget_importer(self, path: str, targets: List[str]) -> None:
        for target in targets:
            target_entry = self.index.get(target)
            if target_entry is not None:
                target_entry.remove_importer(path)

    def get(self, file_path: PathLike) -> Optional[GraphEntry]:
        """Return the entry for a path, or None if it is not indexed."""
        return self.index.get(normalize_path(file_path))

    def imports_of(self, file_path: PathLike) -> List[str]:
        """Return the resolved imports of a file (empty if not indexed)."""
        entry = self.get(file_path)
        return list(entry.imports) if entry is not None else []

    def importers_of(self, file_path: PathLike) -> List[str]:
        """Return the importer records of a file (empty if not indexed)."""
        entry = self.get(file_path)
        return list(entry.imported_by) if entry is not None else []

    def paths(self) -> List[str]:
        """Return all indexed paths, sorted."""
        return sorted(self.index)

    def display_path(self, file_path: PathLike) -> str:
        """
        Return a short name for a file, relative to the load path containing it.

        Falls back to a path relative to the base directory, then to the
        absolute path.
        """
        path = normalize_path(file_path)
        relative = relative_to_roots(path, self.load_paths)
        if relative is not None:
            return relative
        if is_within(path, self.dir):
            return os.path.relpath(path, self.dir).replace(os.sep, "/")
        return path

    def stats(self) -> Dict[str, int]:
        """Return entry, partial, edge and error counts."""
        partials = sum(
            1 for path in self.index if os.path.basename(path).startswith(PARTIAL_PREFIX)
        )
        return {
            "files": len(self.index),
            "partials": partials,
            "edges": sum(len(entry.imports) for entry in self.index.values()),
            "errors": len(self.errors),
        }

    def __contains__(self, file_path: PathLike) -> bool:
        return self.get(file_path) is not None

    def __len__(self) -> int:
        return len(self.index)

    def __repr__(self) -> str:
        stats = self.stats()
        return (
            f"SassGraph(dir={self.dir!r}, files={stats['files']}, "
            f"edges={stats['edges']}, errors={stats['errors']})"
        )
