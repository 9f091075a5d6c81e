#!/usr/bin/env python3
"""
Command-line interface for Sass Dependents.

Provides commands for indexing stylesheet trees and finding which
stylesheets must be rebuilt when a file changes.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Callable, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from . import __version__
from .console_styles import (
    StyleGuide,
    create_header_panel,
    create_path_table,
    create_summary_table,
    format_count,
)
from .exceptions import SassGraphError
from .graph import DEFAULT_EXTENSIONS, SassGraph

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Sass Dependents - stylesheet import graph tool.

    Index Sass/SCSS stylesheets, follow their @import/@use/@forward
    directives, and find the top-level stylesheets affected by a change.

    Examples:
        sass-dependents scan ./styles
        sass-dependents dependents styles/_variables.scss --dir styles
        sass-dependents imports styles/main.scss --dir styles
        sass-dependents visualize styles/_button.scss --output graph.md
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


_GRAPH_OPTIONS = [
    click.option(
        "--dir",
        "base_dir",
        type=click.Path(exists=True, file_okay=False, dir_okay=True),
        envvar="SASS_DEPENDENTS_DIR",
        default=None,
        help="Base directory of the stylesheet tree (default: current directory)",
    ),
    click.option(
        "-I",
        "--load-path",
        "load_paths",
        type=click.Path(file_okay=False, dir_okay=True),
        multiple=True,
        envvar="SASS_DEPENDENTS_LOAD_PATH",
        help="Extra directory searched when resolving imports (repeatable)",
    ),
    click.option(
        "--ext",
        "extensions",
        multiple=True,
        default=DEFAULT_EXTENSIONS,
        show_default=True,
        help="Recognized stylesheet extension, in resolution order (repeatable)",
    ),
    click.option(
        "--follow/--no-follow",
        default=False,
        help="Follow symlinked directories while scanning",
    ),
    click.option(
        "--exclude",
        envvar="SASS_DEPENDENTS_EXCLUDE",
        default=None,
        help="Regular expression; matching paths are never indexed",
    ),
]


def graph_options(func: Callable) -> Callable:
    """Attach the options shared by every graph-building command."""
    for option in reversed(_GRAPH_OPTIONS):
        func = option(func)
    return func


def _create_graph(
    base_dir: str,
    load_paths: tuple[str, ...],
    extensions: tuple[str, ...],
    follow: bool,
    exclude: Optional[str],
) -> SassGraph:
    return SassGraph(
        base_dir,
        load_paths=list(load_paths) or [base_dir],
        extensions=list(extensions),
        follow=follow,
        exclude=exclude,
    )


def _build_graph(graph: SassGraph, root: Optional[str] = None) -> None:
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:
        graph.build(root, progress=progress)

    for path, message in graph.errors:
        console.print(f"{StyleGuide.warning_icon} [yellow]Skipped[/yellow] {escape(path)}: {escape(message)}")


def _fail(message: str) -> None:
    console.print(f"{StyleGuide.error_icon} [red]Error:[/red] {escape(message)}")
    sys.exit(1)


@cli.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False, dir_okay=True))
@graph_options
def scan(
    root: str,
    base_dir: Optional[str],
    load_paths: tuple[str, ...],
    extensions: tuple[str, ...],
    follow: bool,
    exclude: Optional[str],
) -> None:
    """Build the import graph for a directory and print a summary.

    ROOT: Directory containing the stylesheets to index

    Examples:
        sass-dependents scan ./styles
        sass-dependents scan ./styles -I node_modules --exclude vendor
    """
    base_dir = base_dir or root
    console.print(f"[cyan]Scanning stylesheets at:[/cyan] {Path(root).resolve()}")

    try:
        graph = _create_graph(base_dir, load_paths, extensions, follow, exclude)
        _build_graph(graph, root)
    except SassGraphError as e:
        _fail(str(e))
        return

    stats = graph.stats()
    table = create_summary_table("Graph Summary")
    table.add_row("Stylesheets indexed", format_count(stats["files"]))
    table.add_row("Partials", format_count(stats["partials"]))
    table.add_row("Import edges", format_count(stats["edges"]))
    table.add_row("Skipped with errors", format_count(stats["errors"]))

    console.print()
    console.print(table)
    console.print(f"\n{StyleGuide.success_icon} Graph ready")


@cli.command()
@click.argument("file", type=click.Path(dir_okay=False))
@click.option(
    "--table",
    "as_table",
    is_flag=True,
    help="Show every importer with its depth instead of the rebuild list",
)
@click.option(
    "--max-depth",
    type=int,
    default=None,
    help="Maximum depth for --table (default: unlimited)",
)
@graph_options
def dependents(
    file: str,
    as_table: bool,
    max_depth: Optional[int],
    base_dir: Optional[str],
    load_paths: tuple[str, ...],
    extensions: tuple[str, ...],
    follow: bool,
    exclude: Optional[str],
) -> None:
    """List the stylesheets to rebuild when FILE changes.

    Partials are followed through but never listed. FILE itself is listed
    when it is not a partial.

    FILE: Changed stylesheet

    Examples:
        sass-dependents dependents styles/_variables.scss --dir styles
        sass-dependents dependents styles/_mixins.scss --table
    """
    from .impact import DependentsAnalyzer

    base_dir = base_dir or os.getcwd()

    try:
        graph = _create_graph(base_dir, load_paths, extensions, follow, exclude)
        _build_graph(graph)
        graph.refresh(file)
    except SassGraphError as e:
        _fail(str(e))
        return

    analyzer = DependentsAnalyzer(graph)

    if as_table:
        console.print()
        console.print(
            create_header_panel("Dependents Analysis", f"Changed: {graph.display_path(file)}")
        )
        console.print()
        results = analyzer.analyze(file, max_depth=max_depth)
        if not results:
            console.print("[yellow]No importers found.[/yellow]")
            return
        console.print(analyzer.format_as_table(results))
        console.print(
            f"\n{StyleGuide.success_icon} Found [yellow]{format_count(len(results))}[/yellow] importers"
        )
        return

    for path in analyzer.rebuild_targets(file):
        click.echo(graph.display_path(path))


@cli.command()
@click.argument("file", type=click.Path(dir_okay=False))
@graph_options
def imports(
    file: str,
    base_dir: Optional[str],
    load_paths: tuple[str, ...],
    extensions: tuple[str, ...],
    follow: bool,
    exclude: Optional[str],
) -> None:
    """Show the resolved imports of FILE.

    Only FILE and what it imports are indexed; the rest of the tree is not
    scanned.

    FILE: Stylesheet to inspect

    Examples:
        sass-dependents imports styles/main.scss --dir styles
    """
    base_dir = base_dir or os.getcwd()

    try:
        graph = _create_graph(base_dir, load_paths, extensions, follow, exclude)
        graph.add_entry(file)
    except SassGraphError as e:
        _fail(str(e))
        return

    resolved = [graph.display_path(path) for path in graph.imports_of(file)]
    if not resolved:
        console.print("[yellow]No resolved imports.[/yellow]")
        return

    console.print(create_path_table(f"Imports of {graph.display_path(file)}", resolved))


@cli.command()
@click.argument("file", type=click.Path(dir_okay=False))
@click.option(
    "--output",
    type=click.Path(),
    default="graph.md",
    help="Output file for Mermaid diagram (default: graph.md)",
)
@click.option(
    "--max-depth",
    type=int,
    default=2,
    help="Maximum depth to traverse in each direction (default: 2)",
)
@graph_options
def visualize(
    file: str,
    output: str,
    max_depth: int,
    base_dir: Optional[str],
    load_paths: tuple[str, ...],
    extensions: tuple[str, ...],
    follow: bool,
    exclude: Optional[str],
) -> None:
    """Generate a Mermaid diagram of the imports around FILE.

    Importers of FILE are drawn above it and the files it imports below,
    which can be rendered in GitHub, VS Code, and other tools.

    FILE: Stylesheet to center the diagram on

    Examples:
        sass-dependents visualize styles/_button.scss --output graph.md
        sass-dependents visualize styles/main.scss --max-depth 1
    """
    from .visualizer import MermaidVisualizer

    base_dir = base_dir or os.getcwd()

    try:
        graph = _create_graph(base_dir, load_paths, extensions, follow, exclude)
        _build_graph(graph)
        graph.refresh(file)
    except SassGraphError as e:
        _fail(str(e))
        return

    console.print()
    console.print(
        create_header_panel(
            "Import Graph Visualization",
            f"File: {graph.display_path(file)} | Depth: {max_depth}",
        )
    )
    console.print()

    visualizer = MermaidVisualizer(graph)
    diagram = visualizer.generate_file_graph(file, max_depth=max_depth)

    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    visualizer.save_to_file(diagram, output_path)

    console.print(f"{StyleGuide.success_icon} Diagram saved to: [yellow]{output_path}[/yellow]")
    console.print("[dim]View in GitHub, VS Code, or any Mermaid-compatible viewer[/dim]")


if __name__ == "__main__":
    cli()
