"""Logging configuration for nukectl."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.logging import RichHandler

from nukectl.core.paths import ensure_log_dir
from nukectl.utils.formatting import err_console

LOG_FILENAME = "nukectl.log"
LOG_MAX_BYTES = 2 * 1024 * 1024
LOG_BACKUP_COUNT = 3

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_dir: Path | None = None,
) -> None:
    """Configure application logging.

    Sets up two targets:
    1. Rotating debug log file in the state log directory
    2. Rich console handler on stderr (WARNING, DEBUG with verbose,
       ERROR with quiet)

    A log directory that cannot be created disables the file handler
    instead of failing the command.

    Args:
        verbose: Show DEBUG records on the console.
        quiet: Only show errors on the console.
        log_dir: Override for the log directory.
    """
    root_logger = logging.getLogger("nukectl")
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()
    root_logger.propagate = False

    if verbose:
        console_level = logging.DEBUG
    elif quiet:
        console_level = logging.ERROR
    else:
        console_level = logging.WARNING

    console_handler = RichHandler(
        console=err_console,
        show_time=False,
        show_path=False,
        rich_tracebacks=verbose,
    )
    console_handler.setLevel(console_level)
    root_logger.addHandler(console_handler)

    try:
        directory = log_dir if log_dir is not None else ensure_log_dir()
        directory.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            directory / LOG_FILENAME,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except (OSError, RuntimeError) as e:
        root_logger.warning("File logging disabled: %s", e)
        return

    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
    root_logger.addHandler(file_handler)
