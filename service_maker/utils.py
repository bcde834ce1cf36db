"""Shared console helpers for Service Maker.

Every user-facing message of the ``make:*`` commands goes through the
module-level Rich console below, so tests can capture or silence output in
one place.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]", highlight=False)


def print_info(message: str) -> None:
    console.print(escape(message), highlight=False)


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]", highlight=False)


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]", highlight=False)


def print_files_table(files: dict[str, Path], title: str = "Generated files") -> None:
    """Print a two-column type/path table of written files.

    Args:
        files: Mapping of fully-qualified type name -> written path.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Type", style="dim", no_wrap=True)
    table.add_column("Path")

    for fqn, path in files.items():
        table.add_row(escape(fqn), escape(str(path)))

    console.print(table)
