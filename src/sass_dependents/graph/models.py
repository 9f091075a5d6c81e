"""
Data models for graph entries.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class GraphEntry:
    """One indexed stylesheet and its edges in both directions.

    ``imports`` holds resolved paths in first-seen order without duplicates.
    ``imported_by`` holds one record per import edge pointing at this file.
    """

    last_modified: float
    imports: List[str] = field(default_factory=list)
    imported_by: List[str] = field(default_factory=list)

    def add_import(self, path: str) -> bool:
        """Append an import target unless already present.

        Returns:
            True if the target was added
        """
        if path in self.imports:
            return False
        self.imports.append(path)
        return True

    def remove_importer(self, path: str) -> None:
        """Drop every record identifying ``path`` as an importer."""
        self.imported_by = [record for record in self.imported_by if record != path]
