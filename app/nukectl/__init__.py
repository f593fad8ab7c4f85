"""nukectl - Windows administrative toolkit.

Forced deletion of locked or ACL-protected trees, process-lock
detection, ACL reset and cache clearing.
"""

__version__ = "0.3.0"
