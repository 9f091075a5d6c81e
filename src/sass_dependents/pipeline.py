"""
File-processing stage that re-emits the dependents of changed partials.

A build pipeline feeds every changed stylesheet through ``DependentPartials``.
The first file triggers a full graph build; later files refresh their own
entry. When the changed file is a partial, the non-partial stylesheets that
depend on it are emitted alongside it so they get recompiled too.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from rich.console import Console

from .graph import SassGraph
from .impact import find_dependents, is_partial

logger = logging.getLogger(__name__)


@dataclass
class FileRecord:
    """A file travelling through the pipeline.

    ``contents`` is None for records that carry no data (directories,
    placeholders); those pass through untouched.
    """

    path: str
    base: str
    contents: Optional[bytes] = None

    @classmethod
    def from_path(cls, path: Union[str, Path], base: Optional[Union[str, Path]] = None) -> "FileRecord":
        """Create a record by reading a file from disk.

        Args:
            path: File to read
            base: Base directory for the relative name (default: cwd)

        Returns:
            FileRecord holding the file's bytes
        """
        path = os.path.abspath(os.fspath(path))
        base = os.path.abspath(os.fspath(base)) if base is not None else os.getcwd()
        with open(path, "rb") as f:
            contents = f.read()
        return cls(path=path, base=base, contents=contents)

    @property
    def relative(self) -> str:
        """Path relative to ``base``."""
        return os.path.relpath(self.path, self.base)

    @property
    def is_null(self) -> bool:
        return self.contents is None


def create_records(paths: Sequence[str], base: Optional[Union[str, Path]] = None) -> List[FileRecord]:
    """Create file records for a list of paths."""
    return [FileRecord.from_path(path, base=base) for path in paths]


class DependentPartials:
    """Pipeline stage that adds dependents of changed partials.

    Holds one graph for its whole lifetime: built lazily on the first
    processed record and refreshed for every record after that.
    """

    def __init__(
        self,
        base_dir: Optional[Union[str, Path]] = None,
        load_paths: Optional[Union[str, Path, Sequence[Union[str, Path]]]] = None,
        console: Optional[Console] = None,
    ):
        """Initialize the stage.

        Args:
            base_dir: Base directory of the stylesheet tree (default: "./")
            load_paths: A load path or list of load paths (default: [base_dir])
            console: Rich console for status output
        """
        self.base_dir = base_dir or "./"
        if load_paths is None:
            load_paths = [self.base_dir]
        elif isinstance(load_paths, (str, os.PathLike)):
            load_paths = [load_paths]
        self.load_paths = list(load_paths)
        self.console = console or Console(stderr=True)
        self.graph: Optional[SassGraph] = None

    def process(self, record: FileRecord) -> List[FileRecord]:
        """Process one changed file.

        Args:
            record: The changed file

        Returns:
            Records to pass downstream: dependents first, then ``record``
        """
        if record.is_null:
            return [record]

        logger.debug(f"Processing {record.path}")
        if self.graph is None:
            self.console.print("[yellow]Generating SASS files graph...[/yellow]")
            self.graph = SassGraph(self.base_dir, load_paths=self.load_paths)
            self.graph.build()
            self.console.print("[yellow]SASS graph is ready.[/yellow]")
        else:
            self.graph.refresh(record.path)

        emitted: List[FileRecord] = []
        if is_partial(record.path):
            dependents = find_dependents(self.graph, record.path)
            for dependent in create_records(dependents, base=os.getcwd()):
                self.console.print(f"Push file to stream [green]{dependent.path}[/green]")
                emitted.append(dependent)

        emitted.append(record)
        return emitted

    def __call__(self, records: Sequence[FileRecord]) -> List[FileRecord]:
        """Process a batch of records in order."""
        output: List[FileRecord] = []
        for record in records:
            output.extend(self.process(record))
        return output
