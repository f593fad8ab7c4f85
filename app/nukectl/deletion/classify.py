"""Mapping of OS error codes to deletion error classes.

Windows ``winerror`` codes are consulted before ``errno``: Python maps
ERROR_SHARING_VIOLATION to EACCES, so a busy file surfaces as a
PermissionError and would otherwise be mistaken for an ACL problem.
"""

import errno

from nukectl.deletion.models import ErrorClass

# Windows system error codes
ERROR_ACCESS_DENIED = 5
ERROR_SHARING_VIOLATION = 32
ERROR_LOCK_VIOLATION = 33
ERROR_DIR_NOT_EMPTY = 145
ERROR_USER_MAPPED_FILE = 1224
ERROR_PRIVILEGE_NOT_HELD = 1314

WINERROR_CLASSES: dict[int, ErrorClass] = {
    ERROR_SHARING_VIOLATION: ErrorClass.BUSY,
    ERROR_LOCK_VIOLATION: ErrorClass.BUSY,
    ERROR_DIR_NOT_EMPTY: ErrorClass.BUSY,
    ERROR_USER_MAPPED_FILE: ErrorClass.BUSY,
    ERROR_ACCESS_DENIED: ErrorClass.ACCESS_DENIED,
    ERROR_PRIVILEGE_NOT_HELD: ErrorClass.ACCESS_DENIED,
}

ERRNO_CLASSES: dict[int, ErrorClass] = {
    errno.EBUSY: ErrorClass.BUSY,
    errno.ETXTBSY: ErrorClass.BUSY,
    errno.ENOTEMPTY: ErrorClass.BUSY,
    errno.EACCES: ErrorClass.ACCESS_DENIED,
    errno.EPERM: ErrorClass.ACCESS_DENIED,
}


def classify_error(error: OSError) -> ErrorClass:
    """Classify a failed delete into BUSY, ACCESS_DENIED or OTHER.

    Args:
        error: The OSError raised by the delete attempt.

    Returns:
        ErrorClass for the failure. Never returns ErrorClass.NONE.
    """
    winerror = getattr(error, "winerror", None)
    if winerror is not None:
        # An unknown winerror is authoritative; don't fall back to errno
        return WINERROR_CLASSES.get(winerror, ErrorClass.OTHER)

    if error.errno is not None:
        return ERRNO_CLASSES.get(error.errno, ErrorClass.OTHER)

    return ErrorClass.OTHER


def offending_path(error: OSError, default: str) -> str:
    """Extract the path the OS blamed for a failure.

    shutil.rmtree reports the child that failed, which is usually a
    file deep inside the target rather than the target itself.

    Args:
        error: The OSError raised by the delete attempt.
        default: Path to use when the error carries none.

    Returns:
        The offending path as a string.
    """
    filename = error.filename
    if filename is None or filename == "":
        return default
    if isinstance(filename, bytes):
        return filename.decode(errors="replace")
    return str(filename)
