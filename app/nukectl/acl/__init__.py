"""ACL reset."""

from nukectl.acl.resetter import DEFAULT_PRINCIPAL, AccessResetter, build_reset_args

__all__ = ["DEFAULT_PRINCIPAL", "AccessResetter", "build_reset_args"]
