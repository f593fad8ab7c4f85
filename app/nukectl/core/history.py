"""Deletion history.

Every deletion run from the CLI is appended to a JSON Lines file so
that forced removals leave an audit trail.
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from nukectl.core.paths import get_state_dir
from nukectl.deletion.errors import DeletionError
from nukectl.deletion.models import DeletionOutcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HistoryRecord:
    """One deletion attempt as recorded in history.

    Attributes:
        timestamp: ISO 8601 time of the record (UTC).
        target: Absolute path that was targeted.
        success: Whether the target is gone.
        attempts: Delete attempts made.
        remediations: Descriptions of remediations taken.
        error_class: Classification of the last failure, if any.
        error: Error message for failed deletions.
        command: Command that triggered the deletion.
    """

    timestamp: str
    target: str
    success: bool
    attempts: int = 0
    remediations: list[str] = field(default_factory=list)
    error_class: str | None = None
    error: str | None = None
    command: str = "nukectl rm"

    def to_json_line(self) -> str:
        """Serialize to a single JSON line."""
        return json.dumps(asdict(self), ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "HistoryRecord":
        """Build a record from a parsed JSON object.

        Raises:
            KeyError: If a required key is missing.
            TypeError: If the data has unexpected types.
        """
        remediations = data.get("remediations") or []
        if not isinstance(remediations, list):
            msg = "remediations must be a list"
            raise TypeError(msg)
        return cls(
            timestamp=str(data["timestamp"]),
            target=str(data["target"]),
            success=bool(data["success"]),
            attempts=int(data.get("attempts") or 0),  # type: ignore[call-overload]
            remediations=[str(r) for r in remediations],
            error_class=_optional_str(data.get("error_class")),
            error=_optional_str(data.get("error")),
            command=str(data.get("command") or "nukectl rm"),
        )


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)


def _now() -> str:
    return datetime.now(UTC).isoformat(timespec="seconds")


def record_from_outcome(outcome: DeletionOutcome, command: str = "nukectl rm") -> HistoryRecord:
    """Create a history record for a successful deletion."""
    return HistoryRecord(
        timestamp=_now(),
        target=str(outcome.target),
        success=True,
        attempts=outcome.attempts,
        remediations=[action.describe() for action in outcome.remediations],
        command=command,
    )


def record_from_error(target: str, error: Exception, command: str = "nukectl rm") -> HistoryRecord:
    """Create a history record for a failed deletion."""
    attempts = 0
    error_class = None
    if isinstance(error, DeletionError):
        attempts = error.attempts
        error_class = error.error_class.value
    return HistoryRecord(
        timestamp=_now(),
        target=target,
        success=False,
        attempts=attempts,
        error_class=error_class,
        error=str(error),
        command=command,
    )


class HistoryStore:
    """Append-only deletion history in JSONL format.

    Storage location: <state dir>/history.jsonl
    """

    HISTORY_FILENAME = "history.jsonl"

    def __init__(self, state_dir: Path | None = None) -> None:
        """Initialize HistoryStore.

        Args:
            state_dir: Optional override for state directory.
        """
        self._state_dir = state_dir if state_dir is not None else get_state_dir()

    @property
    def history_path(self) -> Path:
        """Path to the history file."""
        return self._state_dir / self.HISTORY_FILENAME

    def append(self, record: HistoryRecord) -> None:
        """Append a record, creating the file if needed.

        Raises:
            OSError: If the file cannot be written.
        """
        self._state_dir.mkdir(parents=True, exist_ok=True)
        with self.history_path.open(mode="a", encoding="utf-8") as f:
            f.write(record.to_json_line() + "\n")
            f.flush()

    def read(self, limit: int | None = None) -> list[HistoryRecord]:
        """Read history records, newest first.

        Corrupt lines are skipped with a warning.

        Args:
            limit: Maximum number of records to return.

        Returns:
            List of records, most recent first.
        """
        if not self.history_path.exists():
            return []

        records: list[HistoryRecord] = []
        with self.history_path.open(encoding="utf-8") as f:
            for line_num, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    records.append(HistoryRecord.from_dict(json.loads(line)))
                except (json.JSONDecodeError, AttributeError, KeyError, TypeError, ValueError) as e:
                    logger.warning("Skipping corrupt history line %d: %s", line_num, e)

        records.reverse()
        if limit is not None:
            return records[:limit]
        return records
