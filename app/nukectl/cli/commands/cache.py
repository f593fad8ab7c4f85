"""Cache clearing commands.

Provides `nukectl cache list` and `nukectl cache clear` for the cache
directories named in the configuration.
"""

from typing import Annotated

import typer
from rich.table import Table

from nukectl.cache import CacheClearResult, clear_caches, list_cache_entries
from nukectl.cli.types import require_config
from nukectl.deletion.engine import ForcedDeletionEngine
from nukectl.deletion.errors import ToolUnavailableError
from nukectl.utils.formatting import (
    console,
    print_error,
    print_info,
    print_paths,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Clear cache directories.",
    no_args_is_help=True,
)


@app.command("list")
def list_entries() -> None:
    """List configured cache directories and their entry counts."""
    config = require_config()

    table = Table(title="Cache Directories", show_lines=False)
    table.add_column("Directory", style="info")
    table.add_column("Entries", justify="right", width=10)

    for directory in config.cache.directories:
        count = len(list_cache_entries([directory]))
        table.add_row(str(directory), str(count))

    console.print(table)


@app.command()
def clear(
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Force-delete the contents of every configured cache directory."""
    config = require_config()
    directories = config.cache.directories

    if not directories:
        print_info("No cache directories configured.")
        return

    if not dry_run and not yes:
        print_paths(directories)
        confirmed = typer.confirm(
            "\nDelete the contents of these directories?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    engine = ForcedDeletionEngine.from_config(config)
    try:
        results = clear_caches(engine, directories, dry_run=dry_run)
    except ToolUnavailableError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not results:
        print_success("Cache directories are already empty.")
        return

    _print_results(results)

    if any(not r.success for r in results):
        raise typer.Exit(code=1)


def _print_results(results: list[CacheClearResult]) -> None:
    """Display cache clearing results."""
    table = Table(title="Cache Clearing Results", show_lines=False)
    table.add_column("Path")
    table.add_column("Status", width=10)
    table.add_column("Details", style="muted")

    for r in results:
        if r.dry_run:
            status = "[info]dry-run[/]"
            detail = "Would delete"
        elif r.success:
            status = "[success]deleted[/]"
            detail = f"{r.attempts} attempt(s)" if r.attempts > 1 else ""
        else:
            status = "[error]failed[/]"
            detail = r.error or "Unknown error"
        table.add_row(r.path, status, detail)

    console.print(table)

    success_count = sum(1 for r in results if r.success and not r.dry_run)
    fail_count = sum(1 for r in results if not r.success)
    dry_count = sum(1 for r in results if r.dry_run)

    if dry_count:
        print_info(f"Dry-run: {dry_count} entries would be deleted.")
    elif fail_count:
        print_warning(f"{success_count} deleted, {fail_count} failed")
    else:
        print_success(f"All {success_count} entries deleted.")
