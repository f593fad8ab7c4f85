"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every nukectl config/state directory into tmp_path."""
    home = tmp_path / "home"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(home / "state"))
    monkeypatch.setenv("APPDATA", str(home / "config"))
    monkeypatch.setenv("LOCALAPPDATA", str(home / "state"))
    return home


@pytest.fixture(autouse=True)
def reset_nukectl_logger() -> Iterator[None]:
    """Undo setup_logging() so caplog sees nukectl records in later tests."""
    yield
    logger = logging.getLogger("nukectl")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def mock_handle_output() -> str:
    """Sample handle.exe output with duplicate executables."""
    return "\n".join(
        [
            "notepad.exe   pid: 100   type: File  DESKTOP-1\\alice   44: C:\\tmp\\locked\\file.txt",
            "explorer.exe  pid: 4120  type: File  DESKTOP-1\\alice  1A4: C:\\tmp\\locked",
            "NOTEPAD.EXE   pid: 212   type: File  DESKTOP-1\\alice   48: C:\\tmp\\locked\\b.txt",
            "explorer.exe  pid: 4120  type: File  DESKTOP-1\\alice  2C0: C:\\tmp\\locked\\sub",
        ]
    )


@pytest.fixture
def mock_handle_no_matches() -> str:
    """handle.exe output when nothing holds the path open."""
    return "No matching handles found.\n"
