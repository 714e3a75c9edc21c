"""Single-entry primitives, entry classification and the error taxonomy."""

from __future__ import annotations

from .entry import REPLACEABLE_KINDS, EntryKind, EntryStat, classify_mode
from .errors import (
    ALREADY_EXISTS,
    CROSS_DEVICE,
    IS_A_DIRECTORY,
    MISSING,
    NOT_A_DIRECTORY,
    NOT_EMPTY,
    NOT_FOUND,
    OPERATION_NOT_PERMITTED,
    PERMISSION_DENIED,
    PROBE_SOFT,
    REMOVE_SOFT,
    RMDIR_SOFT,
    TOO_MANY_SYMLINKS,
    UNKNOWN,
    ArgError,
    ErrorKind,
    FSError,
    kind_for_errno,
)
from .probe import (
    attempt,
    attempt_async,
    exists,
    exists_sync,
    lstat_try,
    lstat_try_sync,
    stat_try,
    stat_try_sync,
)
from .provider import (
    AsyncLocalFileSystem,
    AsyncPrimitives,
    LocalFileSystem,
    SyncPrimitives,
    async_local_fs,
    local_fs,
    translate_errors,
)

__all__ = [
    "ALREADY_EXISTS",
    "CROSS_DEVICE",
    "IS_A_DIRECTORY",
    "MISSING",
    "NOT_A_DIRECTORY",
    "NOT_EMPTY",
    "NOT_FOUND",
    "OPERATION_NOT_PERMITTED",
    "PERMISSION_DENIED",
    "PROBE_SOFT",
    "REMOVE_SOFT",
    "REPLACEABLE_KINDS",
    "RMDIR_SOFT",
    "TOO_MANY_SYMLINKS",
    "UNKNOWN",
    "ArgError",
    "AsyncLocalFileSystem",
    "AsyncPrimitives",
    "EntryKind",
    "EntryStat",
    "ErrorKind",
    "FSError",
    "LocalFileSystem",
    "SyncPrimitives",
    "async_local_fs",
    "attempt",
    "attempt_async",
    "classify_mode",
    "exists",
    "exists_sync",
    "kind_for_errno",
    "local_fs",
    "lstat_try",
    "lstat_try_sync",
    "stat_try",
    "stat_try_sync",
    "translate_errors",
]
