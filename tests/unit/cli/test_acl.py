"""Unit tests for the acl command group."""

from pathlib import Path
from unittest.mock import MagicMock, patch

from nukectl.cli.main import app
from nukectl.deletion.errors import AclResetFailedError, ToolUnavailableError
from typer.testing import CliRunner

runner = CliRunner()


class TestAclReset:
    """Tests for `nukectl acl reset`."""

    @patch("nukectl.cli.commands.acl.AccessResetter")
    def test_reset_with_yes(self, mock_resetter: MagicMock, tmp_path: Path) -> None:
        """--yes resets using the configured principal."""
        result = runner.invoke(app, ["acl", "reset", "-y", str(tmp_path)])

        assert result.exit_code == 0
        assert "ACL reset on" in result.stdout
        mock_resetter.return_value.reset_access.assert_called_once_with(
            tmp_path.resolve(), "Administrators"
        )

    @patch("nukectl.cli.commands.acl.AccessResetter")
    def test_custom_principal(self, mock_resetter: MagicMock, tmp_path: Path) -> None:
        """--principal overrides the configured account."""
        runner.invoke(app, ["acl", "reset", "-y", "-p", "CORP\\ops", str(tmp_path)])

        mock_resetter.return_value.reset_access.assert_called_once_with(
            tmp_path.resolve(), "CORP\\ops"
        )

    @patch("nukectl.cli.commands.acl.AccessResetter")
    def test_prompt_abort(self, mock_resetter: MagicMock, tmp_path: Path) -> None:
        """Declining the prompt changes nothing."""
        result = runner.invoke(app, ["acl", "reset", str(tmp_path)], input="n\n")

        assert result.exit_code == 0
        assert "Aborted." in result.stdout
        mock_resetter.return_value.reset_access.assert_not_called()

    def test_missing_path(self, tmp_path: Path) -> None:
        """A path that does not exist is an error."""
        result = runner.invoke(app, ["acl", "reset", "-y", str(tmp_path / "missing")])

        assert result.exit_code == 1

    @patch("nukectl.cli.commands.acl.AccessResetter")
    def test_tool_failure(self, mock_resetter: MagicMock, tmp_path: Path) -> None:
        """A nonzero SetACL exit is reported."""
        mock_resetter.return_value.reset_access.side_effect = AclResetFailedError(
            str(tmp_path), 5
        )

        result = runner.invoke(app, ["acl", "reset", "-y", str(tmp_path)])

        assert result.exit_code == 1
        assert "ACL reset failed" in result.output

    @patch("nukectl.cli.commands.acl.AccessResetter")
    def test_missing_tool(self, mock_resetter: MagicMock, tmp_path: Path) -> None:
        """A missing SetACL is reported."""
        mock_resetter.return_value.reset_access.side_effect = ToolUnavailableError("SetACL")

        result = runner.invoke(app, ["acl", "reset", "-y", str(tmp_path)])

        assert result.exit_code == 1
        assert "SetACL" in result.output
