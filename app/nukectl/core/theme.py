"""Console styles for nukectl output.

Each style is a rich style string named after what it marks up: locked
paths, the processes holding them, remediation steps and deleted
entries. Any of them can be overridden under ``[styles]`` in
<config dir>/theme.toml.
"""

import logging
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.errors import StyleSyntaxError
from rich.style import Style
from rich.theme import Theme

from nukectl.core.paths import get_config_dir

logger = logging.getLogger(__name__)


class Palette(BaseModel):
    """Named rich styles used by the CLI."""

    model_config = ConfigDict(extra="forbid")

    header: str = "bold #69B9A1"
    border: str = "#29526d"
    muted: str = "#b2bec3"

    info: str = "#0ec1c8"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "bold #f53263"

    deleted: str = "#c1ff62"
    locked: str = "bold #f53263"
    process: str = "#0e8ac8"
    remediation: str = "#faf870"

    @field_validator("*")
    @classmethod
    def validate_style(cls, v: str) -> str:
        """Reject anything rich cannot parse as a style."""
        try:
            Style.parse(v)
        except StyleSyntaxError as e:
            raise ValueError(str(e)) from None
        return v


def get_theme_path() -> Path:
    """Get the user theme path, <config dir>/theme.toml."""
    return get_config_dir() / "theme.toml"


def load_palette(path: Path | None = None) -> Palette:
    """Load the palette, applying user overrides where present.

    A missing, unreadable or invalid theme file never stops the CLI;
    it is logged and the default palette is used.
    """
    path = path or get_theme_path()
    try:
        with open(path, "rb") as f:
            overrides = tomllib.load(f).get("styles", {})
    except FileNotFoundError:
        return Palette()
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring unreadable theme %s: %s", path, e)
        return Palette()

    try:
        palette = Palette.model_validate(overrides)
    except ValidationError as e:
        logger.warning("Ignoring invalid theme %s: %s", path, e)
        return Palette()

    logger.debug("Loaded theme overrides from %s", path)
    return palette


def build_theme(palette: Palette | None = None) -> Theme:
    """Convert a palette into a rich Theme."""
    if palette is None:
        palette = load_palette()
    return Theme(palette.model_dump())
