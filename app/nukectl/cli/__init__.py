"""CLI package for nukectl.

This package contains the Typer application and all subcommands.
"""

from nukectl.cli.main import app

__all__ = ["app"]
