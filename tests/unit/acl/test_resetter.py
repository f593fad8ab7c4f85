"""Unit tests for the SetACL-based access resetter."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from nukectl.acl.resetter import AccessResetter, build_reset_args
from nukectl.deletion.errors import AclResetFailedError, ToolUnavailableError
from nukectl.utils.shell import CommandResult

SETACL_EXE = Path("C:/Tools/SetACL.exe")


class TestBuildResetArgs:
    """Tests for build_reset_args."""

    def test_action_order(self) -> None:
        """Actions are emitted in the fixed reset order."""
        args = build_reset_args("SetACL.exe", "C:\\data", "Administrators")

        actions = [args[i + 1] for i, arg in enumerate(args) if arg == "-actn"]
        assert actions == ["clear", "ace", "setowner", "setprot", "rstchldrn"]
        assert args[0] == "SetACL.exe"
        assert args[-1] == "-ignoreerr"

    def test_target_and_principal(self) -> None:
        """The path and principal land in the right slots."""
        args = build_reset_args("SetACL.exe", "C:\\data", "CORP\\ops")

        assert args[1:5] == ["-on", "C:\\data", "-ot", "file"]
        assert "n:CORP\\ops;p:full" in args
        assert args[args.index("-ownr") + 1] == "n:CORP\\ops"

    def test_recursion_and_protection(self) -> None:
        """DACL is made inheritable and the change recurses."""
        args = build_reset_args("SetACL.exe", "C:\\data")

        assert args[args.index("-op") + 1] == "dacl:np;sacl:nc"
        assert args[args.index("-rec") + 1] == "cont_obj"
        assert args[args.index("-clr") + 1] == "dacl,sacl"
        assert args[args.index("-rst") + 1] == "dacl,sacl"


class TestAccessResetter:
    """Tests for AccessResetter.reset_access."""

    @patch("nukectl.acl.resetter.run_command")
    @patch("nukectl.acl.resetter.resolve_tool", return_value=SETACL_EXE)
    def test_success(self, mock_resolve: MagicMock, mock_run: MagicMock) -> None:
        """A zero exit code means success."""
        mock_run.return_value = CommandResult(
            stdout="Processing ACL of: <C:\\data>\n\nSetACL finished successfully.",
            stderr="",
            returncode=0,
        )

        AccessResetter(timeout=30.0).reset_access("C:\\data", "Administrators")

        mock_run.assert_called_once_with(
            build_reset_args(str(SETACL_EXE), "C:\\data", "Administrators"),
            timeout=30.0,
        )

    @patch("nukectl.acl.resetter.run_command")
    @patch("nukectl.acl.resetter.resolve_tool", return_value=SETACL_EXE)
    def test_output_logged_at_debug(
        self,
        mock_resolve: MagicMock,
        mock_run: MagicMock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Tool output is forwarded to the debug log line by line."""
        mock_run.return_value = CommandResult(stdout="line one\nline two", stderr="", returncode=0)

        with caplog.at_level("DEBUG", logger="nukectl.acl.resetter"):
            AccessResetter().reset_access("C:\\data")

        assert "SetACL: line one" in caplog.text
        assert "SetACL: line two" in caplog.text

    @patch("nukectl.acl.resetter.run_command")
    @patch("nukectl.acl.resetter.resolve_tool", return_value=SETACL_EXE)
    def test_nonzero_exit(self, mock_resolve: MagicMock, mock_run: MagicMock) -> None:
        """A nonzero exit raises AclResetFailedError."""
        mock_run.return_value = CommandResult(stdout="", stderr="ERROR: no access", returncode=5)

        with pytest.raises(AclResetFailedError) as exc_info:
            AccessResetter().reset_access("C:\\data")

        assert exc_info.value.returncode == 5
        assert exc_info.value.path == "C:\\data"
        assert exc_info.value.output == "ERROR: no access"

    @patch("nukectl.acl.resetter.resolve_tool", return_value=None)
    def test_missing_tool(self, mock_resolve: MagicMock) -> None:
        """A missing SetACL raises ToolUnavailableError."""
        with pytest.raises(ToolUnavailableError) as exc_info:
            AccessResetter().reset_access("C:\\data")

        assert exc_info.value.tool == "SetACL"

    @patch("nukectl.acl.resetter.run_command", side_effect=FileNotFoundError("gone"))
    @patch("nukectl.acl.resetter.resolve_tool", return_value=SETACL_EXE)
    def test_launch_failure(self, mock_resolve: MagicMock, mock_run: MagicMock) -> None:
        """A binary that vanished before launch is reported as unavailable."""
        with pytest.raises(ToolUnavailableError):
            AccessResetter().reset_access("C:\\data")

    def test_searches_tools_dir(self, tmp_path: Path) -> None:
        """The configured tools directory is searched."""
        with (
            patch("nukectl.acl.resetter.resolve_tool", return_value=None) as mock_resolve,
            pytest.raises(ToolUnavailableError),
        ):
            AccessResetter(tools_dir=tmp_path).reset_access("C:\\data")

        assert mock_resolve.call_args.kwargs["search_dirs"] == [tmp_path]
