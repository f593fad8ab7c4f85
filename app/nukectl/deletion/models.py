"""Deletion domain models.

This module defines the data structures that flow through a single
forced deletion: the resolved target, the processes found locking it,
the per-call retry state and the remediation actions taken between
attempts.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class ErrorClass(str, Enum):
    """Classification of a failed delete attempt.

    Attributes:
        NONE: No failure recorded yet.
        BUSY: File-in-use / sharing violation; remediated by killing lockers.
        ACCESS_DENIED: Permission failure; remediated by an ACL reset.
        OTHER: Anything else; fatal, never retried.
    """

    NONE = "none"
    BUSY = "busy"
    ACCESS_DENIED = "access_denied"
    OTHER = "other"

    @property
    def is_recoverable(self) -> bool:
        """Check if this class of failure has a remediation."""
        return self in (ErrorClass.BUSY, ErrorClass.ACCESS_DENIED)


@dataclass(frozen=True, slots=True)
class DeletionTarget:
    """An absolute filesystem path subject to forced deletion.

    Attributes:
        path: Absolute, normalized path of the file or directory tree.
    """

    path: Path

    def __post_init__(self) -> None:
        """Validate the target after initialization."""
        if not str(self.path):
            msg = "Deletion target cannot be empty"
            raise ValueError(msg)
        if not self.path.is_absolute():
            msg = f"Deletion target must be absolute, got {self.path}"
            raise ValueError(msg)

    @classmethod
    def resolve(cls, path: str | os.PathLike[str], root: Path | None = None) -> "DeletionTarget":
        """Build a target, resolving relative paths against ``root``.

        Symlinks are not followed, so deleting a link removes the link.

        Args:
            path: Absolute or relative path.
            root: Base for relative paths. Defaults to the current directory.

        Returns:
            DeletionTarget holding an absolute path.

        Raises:
            ValueError: If the path is empty.
        """
        raw = os.fspath(path)
        if not raw:
            msg = "Deletion target cannot be empty"
            raise ValueError(msg)
        candidate = Path(raw)
        if not candidate.is_absolute():
            candidate = (root or Path.cwd()) / candidate
        return cls(Path(os.path.abspath(candidate)))

    def exists(self) -> bool:
        """Check if the target is present (dangling symlinks count)."""
        return os.path.lexists(self.path)

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True, slots=True)
class LockingProcessInfo:
    """A process holding an open handle beneath a target.

    Attributes:
        pid: Process identifier.
        executable_name: Image name as reported by the handle tool.
        executable_path: Full path of the executable ("" if unknown).
        command_line: Command line of the process ("" if unknown).
        handle_type: Handle type (usually "File").
        owner_user: Account owning the process.
        locked_path: Path the handle points to.
    """

    pid: int
    executable_name: str
    executable_path: str = ""
    command_line: str = ""
    handle_type: str = ""
    owner_user: str = ""
    locked_path: str = ""

    @property
    def identity(self) -> str:
        """Case-insensitive key used to deduplicate lockers."""
        return self.executable_name.lower()


@dataclass(frozen=True, slots=True)
class KillProcess:
    """Remediation: forcefully terminate a locking process."""

    pid: int
    name: str = ""

    def describe(self) -> str:
        """Human-readable summary for logs and history."""
        return f"kill {self.name or 'process'} (pid {self.pid})"


@dataclass(frozen=True, slots=True)
class KillProcessByName:
    """Remediation: terminate every process with the given image name."""

    name: str

    def describe(self) -> str:
        """Human-readable summary for logs and history."""
        return f"kill {self.name}"


@dataclass(frozen=True, slots=True)
class ResetAcl:
    """Remediation: reset ownership and permissions on a path tree."""

    path: str
    principal: str

    def describe(self) -> str:
        """Human-readable summary for logs and history."""
        return f"reset ACL on {self.path} for {self.principal}"


RemediationAction = KillProcess | KillProcessByName | ResetAcl


@dataclass(slots=True)
class RetryState:
    """Mutable state owned by exactly one delete() call.

    Attributes:
        target: The deletion target.
        attempt: Number of delete attempts made so far.
        last_error_class: Classification of the most recent failure.
        last_error: The most recent OSError, if any.
        remediations: Actions taken between attempts, in order.
    """

    target: DeletionTarget
    attempt: int = 0
    last_error_class: ErrorClass = ErrorClass.NONE
    last_error: OSError | None = None
    remediations: list[RemediationAction] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class DeletionOutcome:
    """Result of a successful forced deletion.

    Attributes:
        target: The deleted target.
        attempts: Delete attempts made (0 if the target was already absent).
        remediations: Actions taken between attempts.
        elapsed_seconds: Wall-clock duration of the call.
    """

    target: DeletionTarget
    attempts: int
    remediations: tuple[RemediationAction, ...] = ()
    elapsed_seconds: float = 0.0

    @property
    def already_absent(self) -> bool:
        """Check if the target did not exist when delete() was called."""
        return self.attempts == 0
