"""Uniform blocking and suspending filesystem tree operations."""

from __future__ import annotations

from treefs.primitives import (
    ALREADY_EXISTS,
    NOT_EMPTY,
    NOT_FOUND,
    OPERATION_NOT_PERMITTED,
    PERMISSION_DENIED,
    TOO_MANY_SYMLINKS,
    ArgError,
    AsyncLocalFileSystem,
    AsyncPrimitives,
    EntryStat,
    ErrorKind,
    FSError,
    LocalFileSystem,
    SyncPrimitives,
    attempt,
    attempt_async,
    exists,
    exists_sync,
    lstat_try,
    lstat_try_sync,
    stat_try,
    stat_try_sync,
)
from treefs.tree import (
    CopyFlags,
    StatOptions,
    WalkEntry,
    WalkOptions,
    copy,
    copy_sync,
    ensure_directory,
    ensure_directory_sync,
    remove,
    remove_sync,
    traverse,
    traverse_sync,
    walk,
    walk_sync,
)

__version__ = "0.1.0"

# Conventional short names.
mkdirp = ensure_directory
mkdirp_sync = ensure_directory_sync
rimraf = remove
rimraf_sync = remove_sync

__all__ = [
    "ALREADY_EXISTS",
    "NOT_EMPTY",
    "NOT_FOUND",
    "OPERATION_NOT_PERMITTED",
    "PERMISSION_DENIED",
    "TOO_MANY_SYMLINKS",
    "ArgError",
    "AsyncLocalFileSystem",
    "AsyncPrimitives",
    "CopyFlags",
    "EntryStat",
    "ErrorKind",
    "FSError",
    "LocalFileSystem",
    "StatOptions",
    "SyncPrimitives",
    "WalkEntry",
    "WalkOptions",
    "attempt",
    "attempt_async",
    "copy",
    "copy_sync",
    "ensure_directory",
    "ensure_directory_sync",
    "exists",
    "exists_sync",
    "lstat_try",
    "lstat_try_sync",
    "mkdirp",
    "mkdirp_sync",
    "remove",
    "remove_sync",
    "rimraf",
    "rimraf_sync",
    "stat_try",
    "stat_try_sync",
    "traverse",
    "traverse_sync",
    "walk",
    "walk_sync",
]
