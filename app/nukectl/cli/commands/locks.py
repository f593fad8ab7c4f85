"""Lock inspection command.

Provides `nukectl locks PATH`, listing the processes that hold open
handles beneath a path.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Annotated

import typer

from nukectl.cli.display import create_locks_table
from nukectl.cli.types import OutputFormat, require_config
from nukectl.deletion.errors import ToolUnavailableError
from nukectl.locks.resolver import ProcessLockResolver
from nukectl.utils.formatting import console, print_error, print_success


def locks(
    path: Annotated[
        Path,
        typer.Argument(help="File or directory to inspect."),
    ],
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show processes holding open handles beneath PATH."""
    config = require_config()
    target = path.resolve()

    if not target.exists():
        print_error(f"Path does not exist: {target}")
        raise typer.Exit(code=1)

    resolver = ProcessLockResolver(
        handle_path=config.tools.handle_path,
        tools_dir=config.tools.tools_dir,
    )
    try:
        lockers = resolver.find_locking_processes(target)
    except ToolUnavailableError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps([asdict(locker) for locker in lockers]))
        return

    if not lockers:
        print_success(f"No processes are locking {target}.")
        return

    console.print(create_locks_table(lockers, str(target)))
