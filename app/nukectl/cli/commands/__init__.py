"""CLI commands for nukectl.

This package contains all subcommand implementations.
"""

from nukectl.cli.commands import acl, cache, config, history, locks, rm

__all__ = ["acl", "cache", "config", "history", "locks", "rm"]
