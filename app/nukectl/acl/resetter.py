"""ACL reset ("nuke") via SetACL.

Forcibly reassigns ownership and permissions on a path tree so that
the deletion engine can remove it.
"""

import logging
from pathlib import Path

from nukectl.core.paths import get_tools_dir
from nukectl.deletion.errors import AclResetFailedError, ToolUnavailableError
from nukectl.utils.shell import resolve_tool, run_command

logger = logging.getLogger(__name__)

SETACL_TOOL = "SetACL"
SETACL_EXECUTABLES = ("SetACL.exe", "setacl.exe", "SetACL", "setacl")

DEFAULT_PRINCIPAL = "Administrators"


def build_reset_args(executable: str, path: str, principal: str = DEFAULT_PRINCIPAL) -> list[str]:
    """Build the SetACL argument list for a full reset.

    Actions run in this order:
    1. clear explicit DACL and SACL entries
    2. grant ``principal`` full control
    3. make ``principal`` the owner
    4. make the DACL inheritable (SACL untouched), recursing into
       containers and objects so ownership reaches descendants
    5. reset and re-propagate inherited permissions on children
    6. ignore per-object errors

    Args:
        executable: Path to the SetACL binary.
        path: Path whose tree is reset.
        principal: Account or group that receives full control.

    Returns:
        Complete argument list, executable first.
    """
    return [
        executable,
        "-on",
        path,
        "-ot",
        "file",
        "-actn",
        "clear",
        "-clr",
        "dacl,sacl",
        "-actn",
        "ace",
        "-ace",
        f"n:{principal};p:full",
        "-actn",
        "setowner",
        "-ownr",
        f"n:{principal}",
        "-actn",
        "setprot",
        "-op",
        "dacl:np;sacl:nc",
        "-rec",
        "cont_obj",
        "-actn",
        "rstchldrn",
        "-rst",
        "dacl,sacl",
        "-ignoreerr",
    ]


class AccessResetter:
    """Resets ownership and permissions on a path and its descendants.

    Attributes:
        setacl_path: Explicit location of SetACL, if configured.
        timeout: Seconds to allow one SetACL run.
    """

    def __init__(
        self,
        setacl_path: Path | None = None,
        tools_dir: Path | None = None,
        timeout: float | None = 600.0,
    ) -> None:
        self.setacl_path = setacl_path
        self.tools_dir = tools_dir
        self.timeout = timeout

    def reset_access(self, path: str | Path, principal: str = DEFAULT_PRINCIPAL) -> None:
        """Grant ``principal`` ownership and full control over ``path``.

        Success is judged by SetACL's exit status only; per-object
        errors inside the tree are ignored by the tool itself.

        Args:
            path: File or directory to reset.
            principal: Account or group to receive ownership.

        Raises:
            ToolUnavailableError: If SetACL is missing.
            AclResetFailedError: If SetACL exits nonzero.
        """
        executable = self._locate()
        if executable is None:
            raise ToolUnavailableError(SETACL_TOOL, "install SetACL.exe")

        args = build_reset_args(str(executable), str(path), principal)
        logger.info("Resetting ACL on %s for %s", path, principal)

        try:
            result = run_command(args, timeout=self.timeout)
        except FileNotFoundError as e:
            raise ToolUnavailableError(SETACL_TOOL, str(e)) from e

        for line in (result.stdout + result.stderr).splitlines():
            if line.strip():
                logger.debug("SetACL: %s", line.rstrip())

        if not result.success:
            raise AclResetFailedError(
                str(path),
                result.returncode,
                output=result.stderr.strip() or result.stdout.strip(),
            )

    def _locate(self) -> Path | None:
        search_dirs = [self.tools_dir if self.tools_dir is not None else get_tools_dir()]
        return resolve_tool(
            SETACL_EXECUTABLES,
            configured=self.setacl_path,
            search_dirs=search_dirs,
        )
