"""Forced deletion command.

Provides `nukectl rm`, which deletes files and directory trees while
killing locking processes and resetting ACLs as needed.
"""

from pathlib import Path
from typing import Annotated

import typer

from nukectl.cli.display import DeletionReport, create_deletion_table, print_deletion_summary
from nukectl.cli.types import require_config
from nukectl.core.history import (
    HistoryRecord,
    HistoryStore,
    record_from_error,
    record_from_outcome,
)
from nukectl.deletion.engine import ForcedDeletionEngine, RetryPolicy
from nukectl.deletion.errors import DeletionError, ToolUnavailableError
from nukectl.utils.formatting import (
    console,
    print_error,
    print_info,
    print_paths,
    print_warning,
)


def remove(
    paths: Annotated[
        list[Path],
        typer.Argument(help="Files or directories to delete."),
    ],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
    max_attempts: Annotated[
        int | None,
        typer.Option("--max-attempts", min=1, help="Give up after N delete attempts."),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", min=0.1, help="Give up after this many seconds per path."),
    ] = None,
    principal: Annotated[
        str | None,
        typer.Option("--principal", help="Account granted ownership on ACL reset."),
    ] = None,
) -> None:
    """Force-delete files or directories, killing lockers and resetting ACLs."""
    config = require_config()

    settings = config.deletion
    policy = RetryPolicy(
        max_attempts=max_attempts if max_attempts is not None else settings.max_attempts,
        timeout_seconds=timeout if timeout is not None else settings.timeout_seconds,
        settle_seconds=settings.settle_seconds,
    )
    engine = ForcedDeletionEngine.from_config(config, policy=policy, principal=principal)

    if not yes:
        print_paths(paths)
        confirmed = typer.confirm(
            f"\nForce-delete {len(paths)} path(s)? Locking processes will be killed.",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    history = HistoryStore()
    reports: list[DeletionReport] = []

    for path in paths:
        try:
            outcome = engine.delete(path)
        except ToolUnavailableError as e:
            print_error(str(e))
            reports.append(DeletionReport(path=str(path), error=str(e)))
            _record(history, record_from_error(str(path), e))
            break
        except DeletionError as e:
            reports.append(DeletionReport(path=str(path), error=str(e)))
            _record(history, record_from_error(e.path, e))
            continue

        reports.append(DeletionReport(path=str(path), outcome=outcome))
        if not outcome.already_absent:
            _record(history, record_from_outcome(outcome))

    console.print(create_deletion_table(reports))
    print_deletion_summary(reports)

    if any(not r.success for r in reports):
        raise typer.Exit(code=1)


def _record(history: HistoryStore, record: HistoryRecord) -> None:
    """Append to history, warning instead of failing the command."""
    try:
        history.append(record)
    except OSError as e:
        print_warning(f"Could not record to history: {e}")
