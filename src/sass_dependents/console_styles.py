"""Console styling utilities for consistent Rich output formatting.

Table builders, panels and formatting helpers shared by the
CLI commands.

Example:
    >>> from sass_dependents.console_styles import create_summary_table, format_count
    >>> table = create_summary_table("Graph Summary")
    >>> table.add_row("Stylesheets", format_count(150))
    >>> console.print(table)
"""

from typing import List

from rich.box import ROUNDED
from rich.panel import Panel
from rich.table import Table


def format_count(count: int) -> str:
    """Format a count with thousands separator."""
    return f"{count:,}"


def create_summary_table(title: str, header_style: str = "bold cyan") -> Table:
    """Create a styled two-column summary table.

    Args:
        title: Table title
        header_style: Rich style for header (default: "bold cyan")

    Returns:
        Table: Configured Rich Table
    """
    table = Table(
        title=title,
        show_header=True,
        header_style=header_style,
        box=ROUNDED,
    )
    table.add_column("Metric", style=StyleGuide.label)
    table.add_column("Count", justify="right", style=StyleGuide.metric)
    return table


def create_path_table(title: str, paths: List[str]) -> Table:
    """Create a single-column table listing file paths.

    Args:
        title: Table title
        paths: Paths to list, in display order

    Returns:
        Table: Configured Rich Table
    """
    table = Table(
        title=title,
        show_header=True,
        header_style=StyleGuide.header,
        box=ROUNDED,
    )
    table.add_column("File", style=StyleGuide.metric)
    for path in paths:
        table.add_row(path)
    return table


def create_header_panel(
    title: str,
    subtitle: str = "",
    border_style: str = "cyan"
) -> Panel:
    """Create a styled header panel.

    Args:
        title: Panel title
        subtitle: Optional subtitle
        border_style: Rich style for border

    Returns:
        Panel: Configured Rich Panel
    """
    if subtitle:
        content = f"[bold cyan]{title}[/bold cyan]\n{subtitle}"
    else:
        content = f"[bold cyan]{title}[/bold cyan]"

    return Panel.fit(
        content,
        border_style=border_style,
        padding=(0, 1),
    )


class StyleGuide:
    """Color and styling guide for consistency."""

    # Styles
    header = "bold cyan"
    success = "green"
    error = "red"
    warning = "yellow"
    label = "cyan"
    metric = "green"
    dim = "dim"

    # Formatting
    success_icon = "[green]✓[/green]"
    error_icon = "[red]✗[/red]"
    warning_icon = "[yellow]⚠[/yellow]"
