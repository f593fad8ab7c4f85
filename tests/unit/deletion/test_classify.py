"""Unit tests for the delete-failure classification table."""

import errno

import pytest
from nukectl.deletion.classify import (
    ERROR_ACCESS_DENIED,
    ERROR_DIR_NOT_EMPTY,
    ERROR_SHARING_VIOLATION,
    classify_error,
    offending_path,
)
from nukectl.deletion.models import ErrorClass


def _winerror(code: int, errno_value: int = errno.EACCES, filename: str | None = None) -> OSError:
    """Build an OSError carrying a Windows error code."""
    error = PermissionError(errno_value, "simulated", filename)
    error.winerror = code  # type: ignore[attr-defined]
    return error


class TestClassifyError:
    """Tests for classify_error."""

    def test_sharing_violation_is_busy(self) -> None:
        """A sharing violation is BUSY even though Python raises PermissionError."""
        assert classify_error(_winerror(ERROR_SHARING_VIOLATION)) is ErrorClass.BUSY

    def test_access_denied_winerror(self) -> None:
        """ERROR_ACCESS_DENIED maps to ACCESS_DENIED."""
        assert classify_error(_winerror(ERROR_ACCESS_DENIED)) is ErrorClass.ACCESS_DENIED

    def test_dir_not_empty_is_busy(self) -> None:
        """A directory refilled during deletion is treated as busy."""
        assert classify_error(_winerror(ERROR_DIR_NOT_EMPTY, errno.ENOTEMPTY)) is ErrorClass.BUSY

    def test_unknown_winerror_is_other(self) -> None:
        """Unknown Windows codes are fatal regardless of errno."""
        # ERROR_CRC (data error, cyclic redundancy check)
        assert classify_error(_winerror(23, errno.EACCES)) is ErrorClass.OTHER

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            (errno.EBUSY, ErrorClass.BUSY),
            (errno.ETXTBSY, ErrorClass.BUSY),
            (errno.ENOTEMPTY, ErrorClass.BUSY),
            (errno.EACCES, ErrorClass.ACCESS_DENIED),
            (errno.EPERM, ErrorClass.ACCESS_DENIED),
            (errno.EIO, ErrorClass.OTHER),
            (errno.ENAMETOOLONG, ErrorClass.OTHER),
            (errno.ENODEV, ErrorClass.OTHER),
        ],
    )
    def test_errno_mapping(self, code: int, expected: ErrorClass) -> None:
        """POSIX errno values are classified when no winerror is present."""
        assert classify_error(OSError(code, "simulated")) is expected

    def test_no_code_is_other(self) -> None:
        """An OSError without any code is fatal."""
        assert classify_error(OSError("mystery")) is ErrorClass.OTHER


class TestOffendingPath:
    """Tests for offending_path."""

    def test_uses_error_filename(self) -> None:
        """The child reported by the OS is preferred over the target."""
        error = OSError(errno.EBUSY, "busy", "/tmp/locked/file.txt")

        assert offending_path(error, "/tmp/locked") == "/tmp/locked/file.txt"

    def test_falls_back_to_default(self) -> None:
        """Errors without a filename blame the target."""
        error = OSError(errno.EBUSY, "busy")

        assert offending_path(error, "/tmp/locked") == "/tmp/locked"

    def test_decodes_bytes_filename(self) -> None:
        """Byte filenames are decoded."""
        error = OSError(errno.EBUSY, "busy", b"/tmp/locked/raw")

        assert offending_path(error, "/tmp/locked") == "/tmp/locked/raw"
