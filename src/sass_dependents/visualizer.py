"""
Mermaid diagram generation for import visualization.

This module generates Mermaid diagrams showing which stylesheets import a
file and which stylesheets that file imports.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Set, Tuple, Union

from .graph import SassGraph
from .graph.resolver import normalize_path
from .impact import is_partial


class MermaidVisualizer:
    """Generate Mermaid diagrams from import graphs.

    Creates visual representations of import relationships using Mermaid
    syntax for rendering in documentation or tools.
    """

    def __init__(self, graph: SassGraph):
        """Initialize visualizer.

        Args:
            graph: Import graph to visualize
        """
        self.graph = graph
        self._node_ids: Dict[str, str] = {}

    def generate_file_graph(
        self,
        file: Union[str, Path],
        max_depth: int = 2,
        highlight: bool = True,
    ) -> str:
        """Generate Mermaid diagram centered on a stylesheet.

        Shows importers (upstream) and imports (downstream) of the focus
        file, each followed up to ``max_depth`` hops.

        Args:
            file: Stylesheet to center the diagram on
            max_depth: Maximum depth to traverse in each direction (default: 2)
            highlight: Whether to style focus, importer and import nodes

        Returns:
            Mermaid markdown string ready for rendering

        Example:
            ```mermaid
            graph TB
                main_scss[main.scss] -->|imports| _button_scss[_button.scss]

                classDef focus fill:#ff9
                class _button_scss focus
            ```
        """
        focus = normalize_path(file)
        if focus not in self.graph.index:
            return "graph TB\n    note[File not found in graph]"

        upstream = self._collect(focus, max_depth, upward=True)
        downstream = self._collect(focus, max_depth, upward=False)

        nodes: Set[str] = {focus}
        for src, dst in upstream | downstream:
            nodes.add(src)
            nodes.add(dst)

        self._assign_node_ids(nodes)

        lines = ["graph TB"]

        lines.append("")
        lines.append("    %% Nodes")
        for node in sorted(nodes):
            node_id = self._make_node_id(node)
            label = self.graph.display_path(node)
            if is_partial(node):
                lines.append(f"    {node_id}({label})")
            else:
                lines.append(f"    {node_id}[{label}]")

        lines.append("")
        lines.append("    %% Edges")
        for src, dst in sorted(upstream | downstream):
            lines.append(f"    {self._make_node_id(src)} -->|imports| {self._make_node_id(dst)}")

        if highlight:
            lines.append("")
            lines.append("    %% Styling")
            lines.append("    classDef focus fill:#ff9,stroke:#333,stroke-width:3px")
            lines.append("    classDef importer fill:#f96,stroke:#333,stroke-width:2px")
            lines.append("    classDef imported fill:#9cf,stroke:#333,stroke-width:2px")
            lines.append(f"    class {self._make_node_id(focus)} focus")

            importer_ids = sorted({self._make_node_id(src) for src, _ in upstream})
            if importer_ids:
                lines.append(f"    class {','.join(importer_ids)} importer")

            imported_ids = sorted({self._make_node_id(dst) for _, dst in downstream})
            if imported_ids:
                lines.append(f"    class {','.join(imported_ids)} imported")

        return "\n".join(lines)

    def save_to_file(self, mermaid_code: str, output_path: Path) -> None:
        """Save Mermaid diagram to a markdown file.

        Args:
            mermaid_code: Mermaid diagram code
            output_path: Path where to save the .md file
        """
        content = f"""# Import Graph

```mermaid
{mermaid_code}
```
"""
        output_path.write_text(content, encoding="utf-8")

    def _assign_node_ids(self, nodes: Iterable[str]) -> None:
        """Give each node a unique Mermaid ID, suffixing names that collide."""
        self._node_ids = {}
        used: Set[str] = set()
        for node in sorted(nodes):
            base = self._sanitize(self.graph.display_path(node))
            node_id = base
            suffix = 2
            while node_id in used:
                node_id = f"{base}_{suffix}"
                suffix += 1
            used.add(node_id)
            self._node_ids[node] = node_id

    def _make_node_id(self, file: str) -> str:
        """Return the Mermaid node ID assigned to a file path."""
        node_id = self._node_ids.get(file)
        if node_id is None:
            node_id = self._sanitize(self.graph.display_path(file))
        return node_id

    @staticmethod
    def _sanitize(name: str) -> str:
        return "".join(c if c.isalnum() or c == "_" else "_" for c in name)

    def _collect(self, start: str, max_depth: int, upward: bool) -> Set[Tuple[str, str]]:
        """Collect (importer, imported) edges reachable from ``start``.

        Args:
            start: File to start from
            max_depth: Maximum depth to traverse
            upward: Follow importers when True, imports when False

        Returns:
            Set of (importer, imported) path pairs
        """
        edges: Set[Tuple[str, str]] = set()
        visited: Set[str] = set()
        queue: List[Tuple[str, int]] = [(start, 0)]

        while queue:
            current, depth = queue.pop(0)

            if current in visited or depth >= max_depth:
                continue

            visited.add(current)

            entry = self.graph.index.get(current)
            if entry is None:
                continue

            neighbours = entry.imported_by if upward else entry.imports
            for neighbour in neighbours:
                edges.add((neighbour, current) if upward else (current, neighbour))
                queue.append((neighbour, depth + 1))

        return edges
