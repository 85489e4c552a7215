"""Shared console helpers.

All user-facing output goes through the single Rich ``console`` defined here
so that tests can capture it and the CLI renders consistent colours.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()


def print_success(message: str, out: Console | None = None) -> None:
    """Print a green success message."""
    (out or console).print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str, out: Console | None = None) -> None:
    """Print a red error message."""
    (out or console).print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str, out: Console | None = None) -> None:
    """Print a yellow warning message."""
    (out or console).print(f"[bold yellow]{escape(message)}[/bold yellow]")


def print_info(message: str, out: Console | None = None) -> None:
    """Print a progress line."""
    (out or console).print(f"  [green]+[/green] {escape(message)}")


def print_summary_table(
    rows: Sequence[tuple[str, str]],
    title: str = "Summary",
    out: Console | None = None,
) -> None:
    """Print a two-column label/value table.

    Args:
        rows: ``(label, value)`` pairs in display order.
        title: Table title.
        out: Console to print on (defaults to the shared one).
    """
    target = out or console
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for label, value in rows:
        table.add_row(label, str(value))

    target.print()
    target.print(table)
    target.print()


def print_next_steps(project_dir: Path, out: Console | None = None) -> None:
    """Print the post-generation instructions."""
    target = out or console
    target.print()
    print_success("Success! Microservice scaffold created.", target)
    target.print(f"Navigate to [bold]{escape(str(project_dir))}[/bold] and run [cyan]npm install[/cyan].")
    target.print("Use [cyan]npm test[/cyan] to run the health check test suite.")
