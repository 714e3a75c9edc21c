"""Error taxonomy shared by the primitive providers and the tree engines."""

from __future__ import annotations

import errno as errno_codes
import os
from typing import Literal

ErrorKind = Literal[
    "NOT_FOUND",
    "PERMISSION_DENIED",
    "ALREADY_EXISTS",
    "OPERATION_NOT_PERMITTED",
    "NOT_EMPTY",
    "TOO_MANY_SYMLINKS",
    "NOT_A_DIRECTORY",
    "IS_A_DIRECTORY",
    "CROSS_DEVICE",
    "UNKNOWN",
]

NOT_FOUND: ErrorKind = "NOT_FOUND"
PERMISSION_DENIED: ErrorKind = "PERMISSION_DENIED"
ALREADY_EXISTS: ErrorKind = "ALREADY_EXISTS"
OPERATION_NOT_PERMITTED: ErrorKind = "OPERATION_NOT_PERMITTED"
NOT_EMPTY: ErrorKind = "NOT_EMPTY"
TOO_MANY_SYMLINKS: ErrorKind = "TOO_MANY_SYMLINKS"
NOT_A_DIRECTORY: ErrorKind = "NOT_A_DIRECTORY"
IS_A_DIRECTORY: ErrorKind = "IS_A_DIRECTORY"
CROSS_DEVICE: ErrorKind = "CROSS_DEVICE"
UNKNOWN: ErrorKind = "UNKNOWN"

_KIND_TO_ERRNO: dict[ErrorKind, int] = {
    NOT_FOUND: errno_codes.ENOENT,
    PERMISSION_DENIED: errno_codes.EACCES,
    ALREADY_EXISTS: errno_codes.EEXIST,
    OPERATION_NOT_PERMITTED: errno_codes.EPERM,
    NOT_EMPTY: errno_codes.ENOTEMPTY,
    TOO_MANY_SYMLINKS: errno_codes.ELOOP,
    NOT_A_DIRECTORY: errno_codes.ENOTDIR,
    IS_A_DIRECTORY: errno_codes.EISDIR,
    CROSS_DEVICE: errno_codes.EXDEV,
}

_ERRNO_TO_KIND: dict[int, ErrorKind] = {code: kind for kind, code in _KIND_TO_ERRNO.items()}

# Soft-kind sets consumed by the try-helpers.
PROBE_SOFT: frozenset[ErrorKind] = frozenset(
    {NOT_FOUND, PERMISSION_DENIED, OPERATION_NOT_PERMITTED, TOO_MANY_SYMLINKS}
)
MISSING: frozenset[ErrorKind] = frozenset({NOT_FOUND})
REMOVE_SOFT: frozenset[ErrorKind] = frozenset({NOT_FOUND, PERMISSION_DENIED})
RMDIR_SOFT: frozenset[ErrorKind] = REMOVE_SOFT | {NOT_EMPTY}


def kind_for_errno(code: int | None) -> ErrorKind:
    """Map an errno value onto an ErrorKind, UNKNOWN when unmapped."""
    if code is None:
        return UNKNOWN
    return _ERRNO_TO_KIND.get(code, UNKNOWN)


def _decode(name: object) -> str | None:
    if name is None:
        return None
    if isinstance(name, (str, bytes)):
        return os.fsdecode(name)
    return str(name)


class FSError(OSError):
    """A filesystem failure with a machine-readable kind.

    Keeps the OSError attributes (errno, strerror, filename, filename2) so
    code catching the builtin hierarchy still works, and adds ``kind``,
    ``code`` (the errno name, e.g. "EEXIST") and ``syscall``.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str | None = None,
        syscall: str | None = None,
        path: str | None = None,
        dest: str | None = None,
        *,
        code: int | None = None,
    ) -> None:
        if code is None:
            code = _KIND_TO_ERRNO.get(kind)
        if message is None:
            message = os.strerror(code).lower() if code is not None else "unknown error"
        super().__init__(code, message, path, None, dest)
        self.kind = kind
        self.syscall = syscall
        self.code = errno_codes.errorcode.get(code, "UNKNOWN") if code is not None else "UNKNOWN"

    @classmethod
    def from_os_error(cls, err: OSError, syscall: str | None = None) -> FSError:
        """Wrap a builtin OSError, preserving its errno and paths."""
        if isinstance(err, FSError):
            return err
        kind = kind_for_errno(err.errno)
        message = err.strerror.lower() if err.strerror else None
        return cls(kind, message, syscall, _decode(err.filename), _decode(err.filename2), code=err.errno)

    def __str__(self) -> str:
        text = f"{self.code}: {self.strerror}"
        if self.syscall:
            text += f", {self.syscall}"
        if self.filename is not None:
            text += f" '{self.filename}'"
        if self.filename2 is not None:
            text += f" -> '{self.filename2}'"
        return text


class ArgError(TypeError):
    """Invalid argument shape, raised before any filesystem access."""

    def __init__(self, name: str, value: object, expected: str, detail: str | None = None) -> None:
        message = f'"{name}" must be a(n) {expected} (got {type(value).__name__})'
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.name = name
        self.value = value
        self.expected = expected
