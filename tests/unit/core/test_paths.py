"""Unit tests for path management.

Tests for the paths module that provides per-user directory paths.
"""

import os
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from nukectl.core.paths import (
    APP_NAME,
    ensure_dir,
    ensure_log_dir,
    get_config_dir,
    get_config_path,
    get_log_dir,
    get_state_dir,
    get_tools_dir,
)


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            os.environ.pop("XDG_CONFIG_HOME", None)

            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME

    def test_uses_appdata_on_windows(self, tmp_path: Path) -> None:
        """On Windows the roaming APPDATA directory wins."""
        fake_os = MagicMock()
        fake_os.name = "nt"
        fake_os.environ = {"APPDATA": str(tmp_path / "Roaming")}

        with patch("nukectl.core.paths.os", fake_os):
            result = get_config_dir()

        assert result == tmp_path / "Roaming" / APP_NAME


class TestGetStateDir:
    """Tests for get_state_dir function."""

    def test_default_state_dir(self) -> None:
        """get_state_dir returns default path when XDG_STATE_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            os.environ.pop("XDG_STATE_HOME", None)

            result = get_state_dir()

        assert result == Path.home() / ".local" / "state" / APP_NAME

    def test_respects_xdg_state_home(self, tmp_path: Path) -> None:
        """get_state_dir respects XDG_STATE_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_STATE_HOME": str(tmp_path)}):
            result = get_state_dir()

        assert result == tmp_path / APP_NAME

    def test_uses_localappdata_on_windows(self, tmp_path: Path) -> None:
        """On Windows the LOCALAPPDATA directory wins."""
        fake_os = MagicMock()
        fake_os.name = "nt"
        fake_os.environ = {"LOCALAPPDATA": str(tmp_path / "Local")}

        with patch("nukectl.core.paths.os", fake_os):
            result = get_state_dir()

        assert result == tmp_path / "Local" / APP_NAME


class TestConveniencePaths:
    """Tests for convenience path functions."""

    def test_get_config_path(self, tmp_path: Path) -> None:
        """get_config_path returns config.toml in config dir."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_path()

        assert result == tmp_path / APP_NAME / "config.toml"

    def test_log_and_tools_dirs(self, tmp_path: Path) -> None:
        """Logs and tools live under the state dir."""
        with patch.dict(os.environ, {"XDG_STATE_HOME": str(tmp_path)}):
            assert get_log_dir() == tmp_path / APP_NAME / "logs"
            assert get_tools_dir() == tmp_path / APP_NAME / "tools"


class TestEnsureDirs:
    """Tests for directory creation functions."""

    def test_ensure_dir_creates_directory(self, tmp_path: Path) -> None:
        """ensure_dir creates missing parents."""
        target = tmp_path / "a" / "b"

        assert ensure_dir(target) == target
        assert target.is_dir()

    def test_ensure_dir_idempotent(self, tmp_path: Path) -> None:
        """ensure_dir can be called multiple times."""
        assert ensure_dir(tmp_path) == ensure_dir(tmp_path)

    def test_ensure_log_dir(self, tmp_path: Path) -> None:
        """ensure_log_dir creates the log directory under the state dir."""
        with patch.dict(os.environ, {"XDG_STATE_HOME": str(tmp_path / "state")}):
            log_dir = ensure_log_dir()

        assert log_dir == tmp_path / "state" / APP_NAME / "logs"
        assert log_dir.is_dir()

    def test_ensure_dir_wraps_os_error(self, tmp_path: Path) -> None:
        """A path blocked by a regular file raises RuntimeError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(RuntimeError, match="Cannot create log directory"):
            ensure_dir(blocker / "logs", "log")
