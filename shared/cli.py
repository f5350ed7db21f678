"""Console output helpers shared by all CLIs."""

import functools
import sys
from typing import Callable, Optional

from rich.console import Console
from rich.table import Table

console = Console(stderr=True)


def info(message: str) -> None:
    """Print an informational message."""
    console.print(f"[blue]ℹ[/blue] {message}")


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]✗[/bold red] {message}")


def create_table(title: Optional[str] = None) -> Table:
    """
    Create a rich table with the common styling.

    Args:
        title: Optional table title

    Returns:
        Empty Table ready for columns and rows
    """
    return Table(title=title, show_header=True, header_style="bold magenta")


def print_table(table: Table) -> None:
    """Render a table on the console."""
    console.print(table)


def handle_errors(func: Callable) -> Callable:
    """Exit cleanly on Ctrl+C instead of dumping a traceback."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            error("Interrupted")
            sys.exit(130)

    return wrapper
