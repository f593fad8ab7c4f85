"""Unit tests for console output helpers."""

from pathlib import Path

import pytest
from nukectl.utils.formatting import (
    print_error,
    print_info,
    print_paths,
    print_success,
    print_warning,
)


class TestMessageStreams:
    """Tests for where each message kind is written."""

    def test_info_and_success_go_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Informational output is on stdout."""
        print_info("scanning")
        print_success("done")

        captured = capsys.readouterr()
        assert "scanning" in captured.out
        assert "done" in captured.out
        assert captured.err == ""

    def test_warnings_and_errors_go_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Diagnostics never pollute stdout."""
        print_warning("slow")
        print_error("failed")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("Warning: slow")
        assert "Error: failed" in captured.err


class TestPrintPaths:
    """Tests for print_paths."""

    def test_one_indented_line_per_path(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Each path is listed on its own line."""
        print_paths([Path("/srv/a"), "/srv/b"])

        lines = capsys.readouterr().out.splitlines()
        assert lines == ["  /srv/a", "  /srv/b"]

    def test_brackets_are_not_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Path segments in square brackets are printed literally."""
        print_paths(["C:\\build\\[locked]\\out"], style="deleted")

        assert "C:\\build\\[locked]\\out" in capsys.readouterr().out
