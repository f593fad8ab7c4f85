"""Process-lock detection."""

from nukectl.locks.resolver import ProcessLockResolver, parse_handle_output

__all__ = ["ProcessLockResolver", "parse_handle_output"]
