"""Utility modules for nukectl.

This module exports commonly used utility functions.
"""

from nukectl.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_paths,
    print_success,
    print_warning,
)
from nukectl.utils.shell import CommandResult, resolve_tool, run_command

__all__ = [
    "CommandResult",
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_paths",
    "print_success",
    "print_warning",
    "resolve_tool",
    "run_command",
]
