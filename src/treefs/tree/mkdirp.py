"""Idempotent creation of a directory and its missing ancestors."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from treefs.infrastructure.config import DEFAULT_DIR_MODE
from treefs.infrastructure.logger import logger
from treefs.primitives.errors import ALREADY_EXISTS, MISSING, ArgError, FSError
from treefs.primitives.probe import attempt, attempt_async
from treefs.primitives.provider import async_local_fs, local_fs

from .types import to_path

if TYPE_CHECKING:
    from collections.abc import Iterator

    from treefs.primitives.entry import EntryStat
    from treefs.primitives.provider import AsyncPrimitives, SyncPrimitives

    from .types import PathArg


def iter_prefixes(path: str) -> Iterator[str]:
    """Yield each ancestor prefix of ``path``, shortest first, ending with ``path``.

    The filesystem root itself (and a Windows drive) is never yielded.
    """
    drive, rest = os.path.splitdrive(os.path.normpath(path))
    prefix = drive
    if rest.startswith(os.sep) or (os.altsep and rest.startswith(os.altsep)):
        prefix += os.sep
    for part in rest.replace(os.altsep or os.sep, os.sep).split(os.sep):
        if not part or part == ".":
            continue
        prefix = os.path.join(prefix, part) if prefix else part
        yield prefix


def _check_prefix(prefix: str, stat: EntryStat | None) -> bool:
    """True if ``prefix`` still has to be created."""
    if stat is None:
        return True
    if not stat.is_directory():
        raise FSError(ALREADY_EXISTS, "could not create directory", "mkdir", prefix)
    return False


def _prepare(path: object, mode: object) -> tuple[str, int]:
    target = to_path(path)
    if isinstance(mode, bool) or not isinstance(mode, int) or not 0 <= mode <= 0o7777:
        raise ArgError("mode", mode, "permission mode")
    return target, mode


def ensure_directory_sync(path: PathArg, mode: int = DEFAULT_DIR_MODE, *, fs: SyncPrimitives | None = None) -> None:
    """Make sure ``path`` exists as a directory, creating missing ancestors."""
    target, mode = _prepare(path, mode)
    fs = fs or local_fs

    if fs.supports_recursive_mkdir:
        fs.mkdir(target, mode, recursive=True)
        return

    for prefix in iter_prefixes(target):
        if _check_prefix(prefix, attempt(fs.stat, prefix, soft=MISSING)):
            logger.debug("Creating directory", path=prefix)
            fs.mkdir(prefix, mode)


async def ensure_directory(path: PathArg, mode: int = DEFAULT_DIR_MODE, *, fs: AsyncPrimitives | None = None) -> None:
    """Suspending twin of ensure_directory_sync()."""
    target, mode = _prepare(path, mode)
    fs = fs or async_local_fs

    if fs.supports_recursive_mkdir:
        await fs.mkdir(target, mode, recursive=True)
        return

    for prefix in iter_prefixes(target):
        if _check_prefix(prefix, await attempt_async(fs.stat, prefix, soft=MISSING)):
            logger.debug("Creating directory", path=prefix)
            await fs.mkdir(prefix, mode)
