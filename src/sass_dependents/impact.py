"""
Impact analysis for stylesheet changes.

This module answers "if this file changes, which top-level stylesheets must
be rebuilt?" by walking ``imported_by`` edges upward through the graph.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Set, Tuple, Union

from rich.table import Table

from .graph import SassGraph
from .graph.resolver import PARTIAL_PREFIX, normalize_path


def is_partial(file_path: Union[str, Path]) -> bool:
    """Return True if the file name marks a partial (leading underscore)."""
    return os.path.basename(os.fspath(file_path)).startswith(PARTIAL_PREFIX)


def find_dependents(graph: SassGraph, file_path: Union[str, Path]) -> List[str]:
    """Find every non-partial stylesheet that depends on a file.

    Follows ``imported_by`` edges upward from ``file_path``. Partials are
    walked through but never returned. The starting file is included when it
    is not a partial. Paths missing from the graph are dead ends.

    Args:
        graph: Graph to query
        file_path: Changed file

    Returns:
        Sorted, deduplicated absolute paths
    """
    found: Set[str] = set()
    visited: Set[str] = set()
    stack = [normalize_path(file_path)]

    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)

        entry = graph.index.get(current)
        if entry is None:
            continue

        if not is_partial(current):
            found.add(current)

        stack.extend(entry.imported_by)

    return sorted(found)


@dataclass
class DependentResult:
    """A file reached by the upward walk.

    Represents one stylesheet that depends on the changed file, with the
    number of import hops separating them.
    """

    file_path: str
    display_path: str
    depth: int  # how many hops away from the origin
    is_partial: bool


class DependentsAnalyzer:
    """Analyze which stylesheets are affected by a change.

    Provides the flat rebuild list used by build pipelines and a
    depth-annotated view for the CLI.
    """

    def __init__(self, graph: SassGraph):
        """Initialize dependents analyzer.

        Args:
            graph: Import graph to analyze
        """
        self.graph = graph

    def rebuild_targets(self, file_path: Union[str, Path]) -> List[str]:
        """Return the non-partial files to rebuild when ``file_path`` changes."""
        return find_dependents(self.graph, file_path)

    def analyze(
        self,
        file_path: Union[str, Path],
        max_depth: Optional[int] = None,
        include_partials: bool = True,
    ) -> List[DependentResult]:
        """Walk importers breadth-first, recording the depth of each file.

        Args:
            file_path: Changed file
            max_depth: Maximum number of hops to follow (default: unlimited)
            include_partials: Whether intermediate partials are reported

        Returns:
            List of DependentResult sorted by depth, then file path
        """
        start = normalize_path(file_path)
        results: List[DependentResult] = []
        visited: Set[str] = {start}
        queue: List[Tuple[str, int]] = [(start, 0)]

        while queue:
            current, depth = queue.pop(0)

            if max_depth is not None and depth >= max_depth:
                continue

            entry = self.graph.index.get(current)
            if entry is None:
                continue

            for importer in entry.imported_by:
                if importer in visited:
                    continue
                visited.add(importer)

                partial = is_partial(importer)
                if include_partials or not partial:
                    results.append(DependentResult(
                        file_path=importer,
                        display_path=self.graph.display_path(importer),
                        depth=depth + 1,
                        is_partial=partial,
                    ))
                queue.append((importer, depth + 1))

        results.sort(key=lambda r: (r.depth, r.file_path))
        return results

    def format_as_table(self, results: List[DependentResult]) -> Table:
        """Format dependent results as a Rich table for CLI display.

        Args:
            results: List of DependentResult objects

        Returns:
            Rich Table object ready for display
        """
        table = Table(title="Dependent Stylesheets", show_header=True)

        table.add_column("Depth", style="cyan", justify="right")
        table.add_column("Kind", style="magenta")
        table.add_column("File", style="green")

        for result in results:
            kind = (
                "[dim]partial[/dim]"
                if result.is_partial
                else "[bold green]rebuild[/bold green]"
            )
            table.add_row(str(result.depth), kind, result.display_path)

        return table
