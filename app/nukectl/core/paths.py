"""Standard path management for nukectl.

This module provides the directories nukectl uses for configuration,
state, logs and external tool binaries.

On Windows:
- Config: %APPDATA%\\nukectl\\
- State: %LOCALAPPDATA%\\nukectl\\

Elsewhere (XDG defaults):
- Config: ~/.config/nukectl/
- State: ~/.local/state/nukectl/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "nukectl"


def _get_base_dir(windows_var: str, xdg_var: str, default_subdir: str) -> Path:
    """Get a per-user base directory respecting environment overrides.

    Args:
        windows_var: Windows environment variable (e.g., "APPDATA").
        xdg_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    if os.name == "nt":
        base = os.environ.get(windows_var)
        if base:
            return Path(base) / APP_NAME
    base = os.environ.get(xdg_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to %APPDATA%/nukectl or ~/.config/nukectl/.
    """
    return _get_base_dir("APPDATA", "XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    State data includes the deletion history and log files.

    Returns:
        Path to %LOCALAPPDATA%/nukectl or ~/.local/state/nukectl/.
    """
    return _get_base_dir("LOCALAPPDATA", "XDG_STATE_HOME", ".local/state")


def get_config_path() -> Path:
    """Get the toolkit configuration file path.

    Returns:
        Path to <config dir>/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_log_dir() -> Path:
    """Get the log directory path."""
    return get_state_dir() / "logs"


def get_tools_dir() -> Path:
    """Get the directory searched for external tool binaries.

    handle.exe and SetACL.exe dropped here are found even when
    they are not on PATH.

    Returns:
        Path to <state dir>/tools.
    """
    return get_state_dir() / "tools"


def ensure_dir(path: Path, name: str = "application") -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_log_dir() -> Path:
    """Create the log directory if it doesn't exist.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return ensure_dir(get_log_dir(), "log")
