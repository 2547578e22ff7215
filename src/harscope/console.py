"""Terminal output for harscope runs.

Progress and per-file outcomes are printed through these helpers so the
CLI and the runner share one look. Messages are markup-escaped because they
routinely carry file names and error text that may contain brackets.

Key principle: stderr for status/progress, stdout for data.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

# stderr console for status messages
err_console = Console(stderr=True)

# stdout console for data output
out_console = Console()


def success(message: str, *, console: Console | None = None) -> None:
    """Print a success message (green checkmark) to stderr."""
    c = console or err_console
    c.print(f"[green]  ✓ {escape(message)}[/green]")


def error(message: str, *, console: Console | None = None) -> None:
    """Print an error message (red X) to stderr."""
    c = console or err_console
    c.print(f"[red]  ✗ {escape(message)}[/red]")


def warn(message: str, *, console: Console | None = None) -> None:
    """Print a warning message (yellow) to stderr."""
    c = console or err_console
    c.print(f"[yellow]  ⚠ {escape(message)}[/yellow]")


def info(message: str, *, console: Console | None = None) -> None:
    """Print an info message (dim) to stderr."""
    c = console or err_console
    c.print(f"[dim]  {escape(message)}[/dim]")


def step(index: int, total: int, name: str, *, console: Console | None = None) -> None:
    """Print a ``[index/total] name`` progress header."""
    c = console or err_console
    c.print(f"\n[bold cyan]\\[{index}/{total}][/bold cyan] {escape(name)}")
