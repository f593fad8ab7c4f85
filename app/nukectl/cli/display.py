"""Shared Rich display functions for locks and deletion outcomes.

Provides reusable table builders and summary printers used by the
rm, locks and cache commands.
"""

from dataclasses import dataclass

from rich.table import Table

from nukectl.deletion.models import DeletionOutcome, LockingProcessInfo
from nukectl.utils.formatting import console, print_success


@dataclass(frozen=True, slots=True)
class DeletionReport:
    """Outcome of one CLI deletion, success or failure.

    Attributes:
        path: Target as given on the command line.
        outcome: DeletionOutcome on success, None on failure.
        error: Error message on failure.
    """

    path: str
    outcome: DeletionOutcome | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        """Check if the target was deleted."""
        return self.outcome is not None


def create_locks_table(lockers: list[LockingProcessInfo], path: str) -> Table:
    """Create a Rich table of locking processes.

    Args:
        lockers: Processes holding handles beneath ``path``.
        path: Path that was inspected (used in the title).

    Returns:
        Rich Table configured for lock display.
    """
    table = Table(
        title=f"Processes locking {path}",
        show_header=True,
        header_style="header",
        border_style="border",
    )
    table.add_column("PID", justify="right", width=8)
    table.add_column("Process", no_wrap=True)
    table.add_column("User")
    table.add_column("Locked Path")
    table.add_column("Executable", overflow="fold")

    for locker in lockers:
        table.add_row(
            str(locker.pid),
            f"[process]{locker.executable_name}[/process]",
            locker.owner_user or "-",
            f"[locked]{locker.locked_path}[/locked]",
            f"[muted]{locker.executable_path or '-'}[/muted]",
        )

    return table


def create_deletion_table(reports: list[DeletionReport]) -> Table:
    """Create a Rich table of deletion results.

    Successful rows show the attempt count and remediations taken;
    failed rows show the error.

    Args:
        reports: Deletion reports to display.

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title="Deletion Results",
        show_header=True,
        header_style="header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Path", no_wrap=True)
    table.add_column("Attempts", justify="right", width=8)
    table.add_column("Details")

    for report in reports:
        outcome = report.outcome
        if outcome is None:
            table.add_row(
                "[error]FAIL[/error]",
                report.path,
                "-",
                f"[muted]{report.error or 'Unknown error'}[/muted]",
            )
            continue

        if outcome.already_absent:
            detail = "already absent"
        elif outcome.remediations:
            detail = "; ".join(action.describe() for action in outcome.remediations)
        else:
            detail = ""
        table.add_row(
            "[success]OK[/success]",
            f"[deleted]{report.path}[/deleted]",
            str(outcome.attempts),
            f"[remediation]{detail}[/remediation]",
        )

    return table


def print_deletion_summary(reports: list[DeletionReport]) -> None:
    """Print a summary of deletion results.

    Args:
        reports: Deletion reports.
    """
    success_count = sum(1 for r in reports if r.success)
    fail_count = len(reports) - success_count

    if fail_count == 0:
        print_success(f"All {success_count} path(s) deleted.")
    else:
        console.print(
            f"\n[success]{success_count} deleted[/success], [error]{fail_count} failed[/error]"
        )
