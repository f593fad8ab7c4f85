"""Locking-process discovery.

Runs the Sysinternals handle utility against a path and turns its
output into LockingProcessInfo records, one per distinct executable.
"""

import logging
import re
import subprocess
from pathlib import Path

import psutil

from nukectl.core.paths import get_tools_dir
from nukectl.deletion.errors import ToolUnavailableError
from nukectl.deletion.models import LockingProcessInfo
from nukectl.utils.shell import resolve_tool, run_command

logger = logging.getLogger(__name__)

HANDLE_TOOL = "handle"
HANDLE_EXECUTABLES = ("handle64.exe", "handle.exe", "handle64", "handle")

# <name> pid: <pid> type: <type> [<user>] <handle>: <path>
# The user column only appears with -u. A handle value must be followed by
# ": " so a drive letter never matches it.
HANDLE_LINE = re.compile(
    r"^\s*(?P<name>.+?)\s+pid:\s*(?P<pid>\d+)\s+type:\s*(?P<type>\S+)"
    r"(?:\s+(?P<user>.+?))?\s+(?P<kind>[0-9A-Fa-f]+):\s+(?P<path>.+?)\s*$"
)

NO_MATCHES_MARKER = "No matching handles found"


def parse_handle_line(line: str) -> LockingProcessInfo | None:
    """Parse one line of handle output.

    Args:
        line: A single stdout line.

    Returns:
        LockingProcessInfo without enrichment, or None if the line
        does not match the handle grammar.
    """
    match = HANDLE_LINE.match(line)
    if match is None:
        return None
    return LockingProcessInfo(
        pid=int(match["pid"]),
        executable_name=match["name"].strip(),
        handle_type=match["type"],
        owner_user=(match["user"] or "").strip(),
        locked_path=match["path"],
    )


def parse_handle_output(output: str) -> list[LockingProcessInfo]:
    """Parse handle output into records, skipping non-matching lines."""
    records: list[LockingProcessInfo] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        record = parse_handle_line(line)
        if record is None:
            logger.debug("Skipping unrecognized handle line: %r", line[:200])
            continue
        records.append(record)
    return records


def deduplicate(records: list[LockingProcessInfo]) -> list[LockingProcessInfo]:
    """Keep the first record per executable name (case-insensitive)."""
    seen: set[str] = set()
    unique: list[LockingProcessInfo] = []
    for record in records:
        if record.identity in seen:
            continue
        seen.add(record.identity)
        unique.append(record)
    return unique


def enrich(record: LockingProcessInfo) -> LockingProcessInfo:
    """Fill in executable path and command line from the live process.

    Best-effort: a process that exited or denies access keeps empty
    fields.
    """
    try:
        proc = psutil.Process(record.pid)
        with proc.oneshot():
            exe = proc.exe()
            cmdline = subprocess.list2cmdline(proc.cmdline())
    except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess) as e:
        logger.debug("Could not inspect PID %d: %s", record.pid, e)
        return record

    return LockingProcessInfo(
        pid=record.pid,
        executable_name=record.executable_name,
        executable_path=exe,
        command_line=cmdline,
        handle_type=record.handle_type,
        owner_user=record.owner_user,
        locked_path=record.locked_path,
    )


class ProcessLockResolver:
    """Finds the processes holding open handles beneath a path.

    Attributes:
        handle_path: Explicit location of the handle executable, if configured.
        timeout: Seconds to allow the handle utility to run.
    """

    def __init__(
        self,
        handle_path: Path | None = None,
        tools_dir: Path | None = None,
        timeout: float = 120.0,
    ) -> None:
        self.handle_path = handle_path
        self.tools_dir = tools_dir
        self.timeout = timeout

    def find_locking_processes(self, path: str | Path) -> list[LockingProcessInfo]:
        """Take a fresh snapshot of the processes locking ``path``.

        Args:
            path: File or directory to inspect. Handles on any path
                beneath a directory are reported.

        Returns:
            One LockingProcessInfo per distinct executable; empty when
            nothing holds the path open.

        Raises:
            ToolUnavailableError: If the handle utility is missing.
        """
        executable = self._locate()
        if executable is None:
            raise ToolUnavailableError(HANDLE_TOOL, "install Sysinternals handle.exe")

        try:
            result = run_command(
                [str(executable), "-accepteula", "-nobanner", "-u", str(path)],
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise ToolUnavailableError(HANDLE_TOOL, str(e)) from e

        if NO_MATCHES_MARKER in result.stdout:
            logger.info("No locking processes found for %s", path)
            return []

        if not result.success:
            logger.debug(
                "handle exited with %d for %s: %s",
                result.returncode,
                path,
                result.stderr.strip(),
            )

        records = deduplicate(parse_handle_output(result.stdout))
        if not records:
            logger.info("No locking processes found for %s", path)
            return []

        lockers = [enrich(record) for record in records]
        for locker in lockers:
            logger.info(
                "%s (PID %d) holds %s",
                locker.executable_name,
                locker.pid,
                locker.locked_path,
            )
        return lockers

    def _locate(self) -> Path | None:
        search_dirs = [self.tools_dir if self.tools_dir is not None else get_tools_dir()]
        return resolve_tool(
            HANDLE_EXECUTABLES,
            configured=self.handle_path,
            search_dirs=search_dirs,
        )
