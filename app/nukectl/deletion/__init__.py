"""Forced deletion domain.

The engine itself lives in nukectl.deletion.engine; this package
exports the models and errors shared with the lock and ACL modules.
"""

from nukectl.deletion.errors import (
    AclResetFailedError,
    DeletionCancelledError,
    DeletionError,
    NukeError,
    PostconditionFailedError,
    RetryLimitExceededError,
    ToolUnavailableError,
)
from nukectl.deletion.models import (
    DeletionOutcome,
    DeletionTarget,
    ErrorClass,
    KillProcess,
    KillProcessByName,
    LockingProcessInfo,
    RemediationAction,
    ResetAcl,
    RetryState,
)

__all__ = [
    "AclResetFailedError",
    "DeletionCancelledError",
    "DeletionError",
    "DeletionOutcome",
    "DeletionTarget",
    "ErrorClass",
    "KillProcess",
    "KillProcessByName",
    "LockingProcessInfo",
    "NukeError",
    "PostconditionFailedError",
    "RemediationAction",
    "ResetAcl",
    "RetryLimitExceededError",
    "RetryState",
    "ToolUnavailableError",
]
