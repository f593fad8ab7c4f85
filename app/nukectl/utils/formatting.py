"""Rich console output helpers.

Messages go to stdout, warnings and errors to stderr, so ``nukectl
locks --format json`` stays machine-readable.
"""

from collections.abc import Iterable
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from nukectl.core.theme import build_theme

_theme = build_theme()

console = Console(theme=_theme)
err_console = Console(theme=_theme, stderr=True)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_paths(paths: Iterable[str | Path], style: str = "locked") -> None:
    """List paths, one per line, before a destructive prompt.

    Windows paths are escaped so a segment like ``[build]`` is not
    taken for markup.
    """
    for path in paths:
        console.print(f"  [{style}]{escape(str(path))}[/]")
