"""Cache directory clearing.

Empties configured cache directories (by default the system temp
directory) by force-deleting each entry through the deletion engine.
The cache directories themselves are kept.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from nukectl.core.paths import ensure_dir
from nukectl.deletion.engine import ForcedDeletionEngine
from nukectl.deletion.errors import DeletionError, ToolUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CacheClearResult:
    """Result of deleting a single cache entry.

    Attributes:
        path: Absolute path of the entry.
        success: Whether the entry is gone.
        attempts: Delete attempts made.
        error: Error message if the deletion failed, None otherwise.
        dry_run: Whether this was a dry-run (no actual deletion).
    """

    path: str
    success: bool
    attempts: int = 0
    error: str | None = None
    dry_run: bool = False


def list_cache_entries(directories: Iterable[Path]) -> list[Path]:
    """List the direct children of each cache directory.

    Missing directories are created so the next run finds them;
    unreadable ones are skipped with a warning.

    Args:
        directories: Cache directories to inspect.

    Returns:
        Sorted list of entries across all directories.
    """
    entries: list[Path] = []
    for directory in directories:
        try:
            ensure_dir(directory, "cache")
            entries.extend(sorted(directory.iterdir()))
        except (OSError, RuntimeError) as e:
            logger.warning("Skipping cache directory %s: %s", directory, e)
    return entries


def clear_caches(
    engine: ForcedDeletionEngine,
    directories: Iterable[Path],
    dry_run: bool = False,
) -> list[CacheClearResult]:
    """Delete every entry inside the given cache directories.

    Failures are isolated per entry. A missing external tool is fatal
    for the whole run since every remaining entry would hit it too.

    Args:
        engine: Deletion engine used for each entry.
        directories: Cache directories to empty.
        dry_run: If True, report entries without deleting them.

    Returns:
        One CacheClearResult per entry.

    Raises:
        ToolUnavailableError: If a remediation tool is missing.
    """
    results: list[CacheClearResult] = []

    for entry in list_cache_entries(directories):
        if dry_run:
            logger.info("Dry-run: would delete %s", entry)
            results.append(CacheClearResult(path=str(entry), success=True, dry_run=True))
            continue

        try:
            outcome = engine.delete(entry)
        except ToolUnavailableError:
            raise
        except DeletionError as e:
            logger.warning("Could not clear %s: %s", entry, e)
            results.append(
                CacheClearResult(
                    path=str(entry),
                    success=False,
                    attempts=e.attempts,
                    error=str(e),
                )
            )
            continue

        results.append(CacheClearResult(path=str(entry), success=True, attempts=outcome.attempts))

    return results
