"""Best-effort remediation primitives.

Process termination and the "attempt, log, continue" helper the
deletion engine wraps around every remediation step.
"""

import logging
from collections.abc import Callable
from typing import TypeVar

import psutil

from nukectl.deletion.errors import ToolUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def best_effort(
    description: str,
    func: Callable[..., T],
    *args: object,
    **kwargs: object,
) -> tuple[bool, T | None]:
    """Run a remediation step, logging and absorbing its failure.

    ToolUnavailableError is re-raised: a missing tool can never be
    remediated by retrying, so it ends the calling operation.

    Args:
        description: Short label for log lines (e.g. "kill notepad.exe").
        func: The step to run.
        *args: Positional arguments for ``func``.
        **kwargs: Keyword arguments for ``func``.

    Returns:
        Tuple of (succeeded, return value or None).
    """
    try:
        return True, func(*args, **kwargs)
    except ToolUnavailableError:
        raise
    except Exception as e:
        logger.warning("Remediation step failed (%s): %s", description, e)
        return False, None


class ProcessTerminator:
    """Forcefully terminates processes via psutil.

    Every failure (already exited, access denied, timeout) is logged and
    reported through the return value; nothing is raised.

    Attributes:
        wait_timeout: Seconds to wait for killed processes to exit.
    """

    def __init__(self, wait_timeout: float = 3.0) -> None:
        self.wait_timeout = wait_timeout

    def kill_pid(self, pid: int) -> bool:
        """Kill a single process.

        Args:
            pid: Process identifier.

        Returns:
            True if the process is gone afterwards.
        """
        try:
            proc = psutil.Process(pid)
            name = proc.name()
            proc.kill()
        except psutil.NoSuchProcess:
            logger.debug("Process %d already exited", pid)
            return True
        except (psutil.AccessDenied, psutil.ZombieProcess) as e:
            logger.warning("Could not kill PID %d: %s", pid, e)
            return False

        _, alive = psutil.wait_procs([proc], timeout=self.wait_timeout)
        if alive:
            logger.warning("Process %s (PID %d) did not exit after kill", name, pid)
            return False

        logger.info("Killed %s (PID %d)", name, pid)
        return True

    def kill_by_name(self, name: str) -> int:
        """Kill every process whose image name matches ``name``.

        Matching is case-insensitive and tolerates a missing ".exe"
        suffix on either side.

        Args:
            name: Executable name (e.g. "SearchIndexer.exe").

        Returns:
            Number of processes killed.
        """
        wanted = _normalize_image_name(name)
        killed = 0

        try:
            candidates = list(psutil.process_iter(["name", "pid"]))
        except Exception as e:
            logger.warning("Error enumerating processes: %s", e)
            return 0

        for proc in candidates:
            try:
                proc_name = proc.info["name"]
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                continue
            if proc_name and _normalize_image_name(proc_name) == wanted:
                if self.kill_pid(proc.info["pid"]):
                    killed += 1

        if killed == 0:
            logger.debug("No running process named %s", name)
        return killed


def _normalize_image_name(name: str) -> str:
    lowered = name.strip().lower()
    if lowered.endswith(".exe"):
        lowered = lowered[: -len(".exe")]
    return lowered
