"""Configuration commands.

Provides `nukectl config path|show|init` for inspecting and creating
the toolkit configuration file.
"""

from typing import Annotated

import tomli_w
import typer

from nukectl.cli.types import require_config
from nukectl.core.config import ConfigError, ToolkitConfig, config_to_dict, save_config
from nukectl.core.paths import get_config_path
from nukectl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Inspect and create the nukectl configuration.",
    no_args_is_help=True,
)


@app.command()
def path() -> None:
    """Print the configuration file location."""
    console.print(str(get_config_path()))


@app.command()
def show() -> None:
    """Show the effective configuration as TOML."""
    config = require_config()
    if not get_config_path().exists():
        print_info("No config file found, showing defaults.")
    console.print(tomli_w.dumps(config_to_dict(config)), markup=False, highlight=False)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with the default settings."""
    config_path = get_config_path()
    if config_path.exists() and not force:
        print_error(f"Config already exists: {config_path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_config(ToolkitConfig(), config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
