"""Retrying forced-deletion engine.

Deletes a file or directory tree that may be locked by other processes
or protected by restrictive ACLs. Each failed attempt is classified and
remediated (kill lockers, reset the ACL) before the delete is retried,
until the tree is verifiably gone or the failure is unrecoverable.
"""

import logging
import os
import shutil
import stat
import threading
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from nukectl.acl.resetter import DEFAULT_PRINCIPAL, AccessResetter
from nukectl.deletion.classify import classify_error, offending_path
from nukectl.deletion.errors import (
    DeletionCancelledError,
    DeletionError,
    PostconditionFailedError,
    RetryLimitExceededError,
)
from nukectl.deletion.models import (
    DeletionOutcome,
    DeletionTarget,
    ErrorClass,
    KillProcess,
    KillProcessByName,
    LockingProcessInfo,
    ResetAcl,
    RetryState,
)
from nukectl.deletion.remediation import ProcessTerminator, best_effort
from nukectl.locks.resolver import ProcessLockResolver

if TYPE_CHECKING:
    from nukectl.core.config import ToolkitConfig

logger = logging.getLogger(__name__)

# The Windows Search indexer keeps handles that handle.exe does not report
DEFAULT_BACKGROUND_PROCESSES: tuple[str, ...] = ("SearchIndexer.exe",)


class LockResolver(Protocol):
    def find_locking_processes(self, path: str | Path) -> list[LockingProcessInfo]: ...


class Resetter(Protocol):
    def reset_access(self, path: str | Path, principal: str = ...) -> None: ...


class Terminator(Protocol):
    def kill_pid(self, pid: int) -> bool: ...

    def kill_by_name(self, name: str) -> int: ...


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Bounds on the retry loop.

    Both bounds default to None (retry until success or a fatal error).

    Attributes:
        max_attempts: Maximum number of delete attempts.
        timeout_seconds: Wall-clock budget for the whole call.
        settle_seconds: Pause after killing processes so handles close.
    """

    max_attempts: int | None = None
    timeout_seconds: float | None = None
    settle_seconds: float = 1.0

    def __post_init__(self) -> None:
        """Validate policy values after initialization."""
        if self.max_attempts is not None and self.max_attempts < 1:
            msg = f"max_attempts must be at least 1, got {self.max_attempts}"
            raise ValueError(msg)
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            msg = f"timeout_seconds must be positive, got {self.timeout_seconds}"
            raise ValueError(msg)
        if self.settle_seconds < 0:
            msg = f"settle_seconds cannot be negative, got {self.settle_seconds}"
            raise ValueError(msg)


def remove_tree(path: Path) -> None:
    """Recursively and forcibly delete ``path``.

    Directories go through shutil.rmtree; files, symlinks and dead
    symlinks are unlinked. Entries that vanish mid-delete are ignored
    and read-only attributes are cleared once before giving up.

    Raises:
        OSError: The first failure that could not be handled in place.
    """
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path, onexc=_on_remove_error)
        return

    try:
        os.unlink(path)
    except FileNotFoundError:
        return
    except PermissionError as e:
        _on_remove_error(os.unlink, str(path), e)


# Only these delete primitives can be retried as-is once the entry is writable
_RETRYABLE_REMOVERS = (os.unlink, os.remove, os.rmdir)


def _on_remove_error(func: Callable[..., object], path: str, exc: BaseException) -> None:
    if isinstance(exc, FileNotFoundError):
        return
    if (
        isinstance(exc, PermissionError)
        and func in _RETRYABLE_REMOVERS
        and _clear_readonly(path)
    ):
        func(path)
        return
    if isinstance(exc, OSError) and exc.filename != path:
        # rmtree's fd-based walk reports names relative to the parent fd
        exc.filename = path
    raise exc


def _clear_readonly(path: str) -> bool:
    try:
        mode = os.lstat(path).st_mode
        if mode & stat.S_IWRITE:
            return False
        os.chmod(path, mode | stat.S_IWRITE)
    except OSError:
        return False
    logger.debug("Cleared read-only attribute on %s", path)
    return True


class ForcedDeletionEngine:
    """Deletes path trees, remediating locks and ACLs between attempts.

    Each delete() call owns its own RetryState; the engine itself holds
    only configuration, so one engine can serve many targets. Two
    concurrent delete() calls on the same target are not coordinated:
    the filesystem is the only synchronization point and the outcome
    is undefined.

    Attributes:
        policy: Retry bounds and settle delay.
        principal: Account granted ownership on an ACL reset.
        background_processes: Image names killed on every busy failure.
        root: Base directory for relative targets.
    """

    def __init__(
        self,
        lock_resolver: LockResolver | None = None,
        access_resetter: Resetter | None = None,
        terminator: Terminator | None = None,
        *,
        policy: RetryPolicy | None = None,
        principal: str = DEFAULT_PRINCIPAL,
        background_processes: Sequence[str] = DEFAULT_BACKGROUND_PROCESSES,
        root: Path | None = None,
        remover: Callable[[Path], None] = remove_tree,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.lock_resolver = lock_resolver or ProcessLockResolver()
        self.access_resetter = access_resetter or AccessResetter()
        self.terminator = terminator or ProcessTerminator()
        self.policy = policy or RetryPolicy()
        self.principal = principal
        self.background_processes = tuple(background_processes)
        self.root = root
        self._remove = remover
        self._sleep = sleep
        self._clock = clock

    @classmethod
    def from_config(
        cls,
        config: "ToolkitConfig",
        *,
        policy: RetryPolicy | None = None,
        principal: str | None = None,
    ) -> "ForcedDeletionEngine":
        """Build an engine wired to the tools and settings in ``config``.

        Args:
            config: Loaded toolkit configuration.
            policy: Overrides the retry policy derived from the config.
            principal: Overrides the configured ACL principal.

        Returns:
            A ready-to-use ForcedDeletionEngine.
        """
        tools = config.tools
        deletion = config.deletion
        return cls(
            lock_resolver=ProcessLockResolver(
                handle_path=tools.handle_path,
                tools_dir=tools.tools_dir,
            ),
            access_resetter=AccessResetter(
                setacl_path=tools.setacl_path,
                tools_dir=tools.tools_dir,
            ),
            policy=policy or deletion.retry_policy(),
            principal=principal or deletion.principal,
            background_processes=deletion.background_processes,
        )

    def delete(
        self,
        path: str | os.PathLike[str],
        cancel: threading.Event | None = None,
    ) -> DeletionOutcome:
        """Delete ``path`` and everything beneath it.

        A target that does not exist is a successful no-op.

        Args:
            path: Absolute path, or a path relative to ``root``.
            cancel: Optional token checked before every attempt.

        Returns:
            DeletionOutcome describing the attempts and remediations.

        Raises:
            DeletionError: The failure was classified as fatal.
            RetryLimitExceededError: The attempt cap or deadline was hit.
            DeletionCancelledError: ``cancel`` was set.
            PostconditionFailedError: The target survived a successful delete.
            ToolUnavailableError: The handle or ACL tool is missing.
        """
        target = DeletionTarget.resolve(path, self.root)
        started = self._clock()

        if not target.exists():
            logger.debug("Nothing to delete at %s", target)
            return DeletionOutcome(target=target, attempts=0)

        state = RetryState(target=target)

        while True:
            self._check_bounds(state, started, cancel)
            state.attempt += 1

            try:
                self._remove(target.path)
            except OSError as e:
                self._handle_failure(state, e)
                continue
            break

        if target.exists():
            raise PostconditionFailedError(
                f"{target} still exists after a successful delete",
                path=str(target),
                error_class=state.last_error_class,
                attempts=state.attempt,
            )

        elapsed = self._clock() - started
        logger.info("Deleted %s after %d attempt(s)", target, state.attempt)
        return DeletionOutcome(
            target=target,
            attempts=state.attempt,
            remediations=tuple(state.remediations),
            elapsed_seconds=elapsed,
        )

    def _handle_failure(self, state: RetryState, error: OSError) -> None:
        error_class = classify_error(error)
        blamed = offending_path(error, str(state.target))
        state.last_error_class = error_class
        state.last_error = error

        if not error_class.is_recoverable:
            logger.error("Unrecoverable failure deleting %s: %s", blamed, error)
            raise DeletionError(
                f"Cannot delete {state.target}: {error.strerror or error}",
                path=str(state.target),
                error_class=error_class,
                attempts=state.attempt,
                offending_path=blamed,
            ) from error

        logger.info(
            "Attempt %d on %s failed (%s) at %s",
            state.attempt,
            state.target,
            error_class.value,
            blamed,
        )

        if error_class is ErrorClass.BUSY:
            self._release_locks(state, blamed)
        else:
            self._reset_access(state, blamed)

    def _release_locks(self, state: RetryState, blamed: str) -> None:
        _, lockers = best_effort(
            f"find processes locking {blamed}",
            self.lock_resolver.find_locking_processes,
            blamed,
        )

        for locker in lockers or []:
            action = KillProcess(pid=locker.pid, name=locker.executable_name)
            state.remediations.append(action)
            best_effort(action.describe(), self.terminator.kill_pid, locker.pid)

        for name in self.background_processes:
            background = KillProcessByName(name=name)
            state.remediations.append(background)
            best_effort(background.describe(), self.terminator.kill_by_name, name)

        self._sleep(self.policy.settle_seconds)

    def _reset_access(self, state: RetryState, blamed: str) -> None:
        action = ResetAcl(path=blamed, principal=self.principal)
        state.remediations.append(action)
        best_effort(
            action.describe(),
            self.access_resetter.reset_access,
            blamed,
            self.principal,
        )

    def _check_bounds(
        self,
        state: RetryState,
        started: float,
        cancel: threading.Event | None,
    ) -> None:
        if cancel is not None and cancel.is_set():
            raise DeletionCancelledError(
                f"Deletion of {state.target} cancelled",
                path=str(state.target),
                error_class=state.last_error_class,
                attempts=state.attempt,
            )

        if state.attempt == 0:
            return

        policy = self.policy
        exhausted = policy.max_attempts is not None and state.attempt >= policy.max_attempts
        expired = (
            policy.timeout_seconds is not None
            and self._clock() - started >= policy.timeout_seconds
        )
        if exhausted or expired:
            blamed = None
            if state.last_error is not None:
                blamed = offending_path(state.last_error, str(state.target))
            raise RetryLimitExceededError(
                f"Gave up deleting {state.target} after {state.attempt} attempt(s); "
                f"last failure: {state.last_error_class.value}",
                path=str(state.target),
                error_class=state.last_error_class,
                attempts=state.attempt,
                offending_path=blamed,
            )
