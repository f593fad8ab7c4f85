"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from nukectl import __version__
from nukectl.cli.commands import acl, cache, config, history, locks, rm
from nukectl.core.logging_config import setup_logging

# Create main Typer app
app = typer.Typer(
    name="nukectl",
    help="Windows administrative toolkit: forced deletion, lock detection and ACL reset.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"nukectl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """nukectl - delete what Windows won't let you delete.

    Kills the processes locking a tree, takes ownership when
    permissions block removal, and retries until the tree is gone.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    setup_logging(verbose=verbose, quiet=quiet)


# Register commands
app.command(name="rm")(rm.remove)
app.command(name="locks")(locks.locks)
app.add_typer(acl.app, name="acl")
app.add_typer(cache.app, name="cache")
app.add_typer(config.app, name="config")
app.add_typer(history.app, name="history")


if __name__ == "__main__":
    app()
