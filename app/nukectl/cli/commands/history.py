"""History command for viewing past deletions.

This module provides the `nukectl history` command for viewing the
audit trail of forced deletions.
"""

import json
from dataclasses import asdict
from datetime import datetime
from typing import Annotated

import typer
from rich.table import Table

from nukectl.core.history import HistoryRecord, HistoryStore
from nukectl.utils.formatting import console, print_info

app = typer.Typer(
    name="history",
    help="View history of forced deletions.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def history(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option(
            "--limit",
            "-n",
            help="Maximum number of entries to show.",
        ),
    ] = 20,
    failed_only: Annotated[
        bool,
        typer.Option(
            "--failed",
            help="Only show failed deletions.",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show history of forced deletions.

    Examples:
        nukectl history              # Show last 20 entries
        nukectl history -n 50        # Show last 50 entries
        nukectl history --failed     # Only failures
        nukectl history --json       # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    records = HistoryStore().read()
    if failed_only:
        records = [r for r in records if not r.success]
    records = records[:limit]

    if not records:
        print_info("No history entries found.")
        return

    if json_output:
        console.print_json(json.dumps([asdict(r) for r in records]))
    else:
        _print_table(records)


def _print_table(records: list[HistoryRecord]) -> None:
    """Print history as Rich table."""
    table = Table(title="Deletion History")
    table.add_column("Timestamp", style="info")
    table.add_column("Target")
    table.add_column("Result")
    table.add_column("Attempts", justify="right")
    table.add_column("Details", style="muted")

    for record in records:
        if record.success:
            result = "[success]deleted[/]"
            detail = "; ".join(record.remediations)
        else:
            result = "[error]failed[/]"
            detail = record.error or ""
        table.add_row(
            _format_timestamp(record.timestamp),
            record.target,
            result,
            str(record.attempts),
            detail,
        )

    console.print(table)


def _format_timestamp(iso_timestamp: str) -> str:
    """Format ISO timestamp for display (YYYY-MM-DD HH:MM)."""
    try:
        dt = datetime.fromisoformat(iso_timestamp.replace("Z", "+00:00"))
    except ValueError:
        return iso_timestamp
    return dt.strftime("%Y-%m-%d %H:%M")
