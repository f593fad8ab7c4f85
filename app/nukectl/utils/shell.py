"""Shell execution utilities.

Provides safe subprocess execution with proper error handling, and
lookup of the external Windows tools nukectl drives.
"""

import os
import shutil
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


def run_command(
    args: list[str],
    *,
    timeout: float | None = 60.0,
) -> CommandResult:
    """Execute a shell command and return the result.

    Output is decoded leniently: Sysinternals and SetACL print in the
    console code page, so undecodable bytes are replaced rather than
    failing the call.

    Args:
        args: Command and arguments to execute.
        timeout: Maximum time in seconds to wait for command.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        check=False,
        timeout=timeout,
    )
    return CommandResult(
        stdout=result.stdout or "",
        stderr=result.stderr or "",
        returncode=result.returncode,
    )


def resolve_tool(
    candidates: Sequence[str],
    *,
    configured: Path | None = None,
    search_dirs: Sequence[Path] = (),
) -> Path | None:
    """Locate an external tool binary.

    Lookup order: the explicitly configured path, then each candidate
    name on PATH, then each candidate name inside ``search_dirs``.

    Args:
        candidates: Executable names to try, in order of preference.
        configured: Path set in the configuration file, if any.
        search_dirs: Extra directories to search (e.g. the tools dir).

    Returns:
        Path to the executable, or None if it cannot be found.
    """
    if configured is not None:
        return configured if configured.is_file() else None

    for name in candidates:
        found = shutil.which(name)
        if found:
            return Path(found)

    for directory in search_dirs:
        for name in candidates:
            path = directory / name
            if path.is_file() and os.access(path, os.X_OK):
                return path

    return None
