"""Toolkit configuration and settings.

This module provides the configuration model and I/O functions for
nukectl. Configuration is stored in <config dir>/config.toml; a missing
file means "use the defaults".

Example config.toml:

    [deletion]
    max_attempts = 50
    principal = "Administrators"
    background_processes = ["SearchIndexer.exe"]

    [tools]
    handle_path = "C:/Tools/Sysinternals/handle64.exe"

    [cache]
    directories = ["C:/Windows/Temp"]
"""

import logging
import os
import tempfile
import tomllib
from pathlib import Path
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from nukectl.acl.resetter import DEFAULT_PRINCIPAL
from nukectl.core.paths import get_config_path
from nukectl.deletion.engine import DEFAULT_BACKGROUND_PROCESSES, RetryPolicy

logger = logging.getLogger(__name__)


def _default_cache_directories() -> list[Path]:
    return [Path(tempfile.gettempdir())]


class DeletionSettings(BaseModel):
    """Settings for the forced-deletion engine.

    Attributes:
        max_attempts: Maximum delete attempts per target (None = unbounded).
        timeout_seconds: Wall-clock budget per target (None = unbounded).
        settle_seconds: Pause after killing locking processes.
        principal: Account granted ownership when an ACL is reset.
        background_processes: Image names killed on every busy failure.
    """

    model_config = ConfigDict(extra="forbid")

    max_attempts: Annotated[
        int | None,
        Field(ge=1, description="Maximum delete attempts (None = unbounded)"),
    ] = None
    timeout_seconds: Annotated[
        float | None,
        Field(gt=0, description="Time budget per target (None = unbounded)"),
    ] = None
    settle_seconds: Annotated[
        float,
        Field(ge=0, le=60, description="Delay after killing processes"),
    ] = 1.0
    principal: Annotated[
        str,
        Field(min_length=1, description="Account receiving ownership on ACL reset"),
    ] = DEFAULT_PRINCIPAL
    background_processes: Annotated[
        list[str],
        Field(
            default_factory=lambda: list(DEFAULT_BACKGROUND_PROCESSES),
            description="Processes killed on every busy failure",
        ),
    ]

    def retry_policy(self) -> RetryPolicy:
        """Build the engine retry policy from these settings."""
        return RetryPolicy(
            max_attempts=self.max_attempts,
            timeout_seconds=self.timeout_seconds,
            settle_seconds=self.settle_seconds,
        )


class ToolSettings(BaseModel):
    """Locations of the external tools.

    Unset paths are looked up on PATH and then in ``tools_dir``.
    """

    model_config = ConfigDict(extra="forbid")

    handle_path: Path | None = None
    setacl_path: Path | None = None
    tools_dir: Path | None = None


class CacheSettings(BaseModel):
    """Directories whose contents `nukectl cache clear` removes."""

    model_config = ConfigDict(extra="forbid")

    directories: list[Path] = Field(default_factory=_default_cache_directories)


class ToolkitConfig(BaseModel):
    """Top-level nukectl configuration."""

    model_config = ConfigDict(extra="forbid")

    deletion: DeletionSettings = Field(default_factory=DeletionSettings)
    tools: ToolSettings = Field(default_factory=ToolSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> ToolkitConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated ToolkitConfig; defaults if the file does not exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or fails validation.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return ToolkitConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return ToolkitConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def save_config(config: ToolkitConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace().

    Args:
        config: The ToolkitConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: ToolkitConfig) -> dict[str, object]:
    """Convert ToolkitConfig to a dictionary for TOML serialization.

    TOML has no null, so unset optional values are omitted and paths
    are written as strings.
    """
    return config.model_dump(mode="json", exclude_none=True)
