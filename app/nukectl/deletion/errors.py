"""Exceptions raised by the deletion engine and its collaborators."""

from nukectl.deletion.models import ErrorClass


class NukeError(Exception):
    """Base exception for nukectl failures."""


class ToolUnavailableError(NukeError):
    """Raised when a required external tool cannot be located or launched.

    Attributes:
        tool: Name of the missing tool (e.g. "handle", "SetACL").
    """

    def __init__(self, tool: str, detail: str | None = None) -> None:
        self.tool = tool
        message = f"Required tool '{tool}' is not available"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class AclResetFailedError(NukeError):
    """Raised when the ACL tool exits with a nonzero status.

    Attributes:
        path: Path whose ACL reset failed.
        returncode: Exit code of the ACL tool.
    """

    def __init__(self, path: str, returncode: int, output: str = "") -> None:
        self.path = path
        self.returncode = returncode
        self.output = output
        super().__init__(f"ACL reset failed for {path} (exit code {returncode})")


class DeletionError(NukeError):
    """Raised when a target could not be deleted.

    Attributes:
        path: The top-level target.
        error_class: Classification of the last failure.
        attempts: Number of delete attempts made.
        offending_path: Path reported by the OS for the last failure.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str,
        error_class: ErrorClass = ErrorClass.OTHER,
        attempts: int = 0,
        offending_path: str | None = None,
    ) -> None:
        self.path = path
        self.error_class = error_class
        self.attempts = attempts
        self.offending_path = offending_path
        super().__init__(message)


class RetryLimitExceededError(DeletionError):
    """Raised when the configured attempt cap or deadline is reached."""


class DeletionCancelledError(DeletionError):
    """Raised when the caller's cancellation token is set."""


class PostconditionFailedError(DeletionError):
    """Raised when the target still exists after a reported-successful delete."""
