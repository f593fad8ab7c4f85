"""ACL commands.

Provides `nukectl acl reset`, which takes ownership of a path tree and
grants full control to a principal.
"""

from pathlib import Path
from typing import Annotated

import typer

from nukectl.acl.resetter import AccessResetter
from nukectl.cli.types import require_config
from nukectl.deletion.errors import AclResetFailedError, ToolUnavailableError
from nukectl.utils.formatting import print_error, print_info, print_success

app = typer.Typer(
    help="Reset ownership and permissions on path trees.",
    no_args_is_help=True,
)


@app.command()
def reset(
    path: Annotated[
        Path,
        typer.Argument(help="File or directory whose ACL is reset."),
    ],
    principal: Annotated[
        str | None,
        typer.Option("--principal", "-p", help="Account granted ownership and full control."),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Take ownership of PATH and everything beneath it."""
    config = require_config()
    target = path.resolve()
    effective_principal = principal or config.deletion.principal

    if not target.exists():
        print_error(f"Path does not exist: {target}")
        raise typer.Exit(code=1)

    if not yes:
        confirmed = typer.confirm(
            f"Replace all permissions on {target} with full control for {effective_principal}?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    resetter = AccessResetter(
        setacl_path=config.tools.setacl_path,
        tools_dir=config.tools.tools_dir,
    )
    try:
        resetter.reset_access(target, effective_principal)
    except (ToolUnavailableError, AclResetFailedError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"ACL reset on {target} for {effective_principal}.")
