"""Recursive copy of a file or directory subtree.

Both forms return the number of entries that were skipped, either because
the filter rejected them or because their kind (device, unknown) cannot be
copied. Conflicts and self-copies raise FSError instead of counting as skips.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

from treefs.infrastructure.logger import logger
from treefs.primitives.errors import ALREADY_EXISTS, MISSING, OPERATION_NOT_PERMITTED, FSError
from treefs.primitives.probe import attempt, attempt_async
from treefs.primitives.provider import async_local_fs, local_fs

from .types import CopyFlags, check_callable, check_flags, maybe_await, to_path

if TYPE_CHECKING:
    from collections.abc import Callable

    from treefs.primitives.entry import EntryStat
    from treefs.primitives.provider import AsyncPrimitives, SyncPrimitives

    from .types import PathArg

    CopyFilter = Callable[[str, EntryStat], Any]


def _prepare(src: object, dest: object, flags: object, filter: object) -> tuple[str, str, bool]:
    src_path = to_path(src, "src")
    dest_path = to_path(dest, "dest")
    overwrite = check_flags(flags) & CopyFlags.EXCLUSIVE == 0
    check_callable("filter", filter)
    return src_path, dest_path, overwrite


def _check_target(src_stat: EntryStat, dest_stat: EntryStat | None, dest: str, overwrite: bool) -> None:
    if dest_stat is None:
        return
    if not overwrite:
        raise FSError(ALREADY_EXISTS, syscall="copy", path=dest)
    if src_stat.same_entry(dest_stat):
        raise FSError(OPERATION_NOT_PERMITTED, "cannot copy file into itself", "copy", dest)


def _check_replaceable(dest_stat: EntryStat, syscall: str, dest: str) -> None:
    if not dest_stat.is_replaceable():
        raise FSError(ALREADY_EXISTS, syscall=syscall, path=dest)


def _skip(src: str, stat: EntryStat, reason: str) -> int:
    logger.debug("Copy skipped entry", path=src, kind=stat.kind, reason=reason)
    return 1


def copy_sync(
    src: PathArg,
    dest: PathArg,
    flags: int = CopyFlags.NONE,
    filter: CopyFilter | None = None,
    *,
    fs: SyncPrimitives | None = None,
) -> int:
    """Copy ``src`` to ``dest`` recursively, blocking on every call.

    Returns the number of skipped entries (0 means everything was copied).
    """
    src_path, dest_path, overwrite = _prepare(src, dest, flags, filter)
    return _copy_sync(fs or local_fs, src_path, dest_path, overwrite, filter)


def _copy_sync(fs: SyncPrimitives, src: str, dest: str, overwrite: bool, filter: CopyFilter | None) -> int:
    src_stat = fs.lstat(src)
    dest_stat = attempt(fs.lstat, dest, soft=MISSING)

    _check_target(src_stat, dest_stat, dest, overwrite)

    if filter is not None and not filter(src, src_stat):
        return _skip(src, src_stat, "filtered")

    if src_stat.is_directory():
        names = fs.readdir(src)

        if dest_stat is not None:
            if not dest_stat.is_directory():
                raise FSError(ALREADY_EXISTS, syscall="mkdir", path=dest)
        else:
            fs.mkdir(dest, src_stat.permissions)

        skipped = 0
        for name in names:
            skipped += _copy_sync(fs, os.path.join(src, name), os.path.join(dest, name), overwrite, filter)
        return skipped

    if src_stat.is_symlink():
        if dest_stat is not None:
            _check_replaceable(dest_stat, "symlink", dest)
            logger.debug("Replacing destination entry", path=dest, kind=dest_stat.kind)
            fs.unlink(dest)
        fs.symlink(fs.readlink(src), dest)
        return 0

    if src_stat.is_file():
        if dest_stat is not None:
            _check_replaceable(dest_stat, "open", dest)
            if not dest_stat.is_file():
                logger.debug("Replacing destination entry", path=dest, kind=dest_stat.kind)
                fs.unlink(dest)
        fs.copy_file(src, dest, exclusive=not overwrite)
        return 0

    return _skip(src, src_stat, "unsupported")


async def copy(
    src: PathArg,
    dest: PathArg,
    flags: int = CopyFlags.NONE,
    filter: CopyFilter | None = None,
    *,
    fs: AsyncPrimitives | None = None,
) -> int:
    """Copy ``src`` to ``dest`` recursively, suspending on every call.

    ``filter`` may be a plain function or a coroutine function.
    Returns the number of skipped entries.
    """
    src_path, dest_path, overwrite = _prepare(src, dest, flags, filter)
    return await _copy(fs or async_local_fs, src_path, dest_path, overwrite, filter)


async def _copy(fs: AsyncPrimitives, src: str, dest: str, overwrite: bool, filter: CopyFilter | None) -> int:
    src_stat = await fs.lstat(src)
    dest_stat = await attempt_async(fs.lstat, dest, soft=MISSING)

    _check_target(src_stat, dest_stat, dest, overwrite)

    if filter is not None and not await maybe_await(filter(src, src_stat)):
        return _skip(src, src_stat, "filtered")

    if src_stat.is_directory():
        names = await fs.readdir(src)

        if dest_stat is not None:
            if not dest_stat.is_directory():
                raise FSError(ALREADY_EXISTS, syscall="mkdir", path=dest)
        else:
            await fs.mkdir(dest, src_stat.permissions)

        skipped = 0
        for name in names:
            skipped += await _copy(fs, os.path.join(src, name), os.path.join(dest, name), overwrite, filter)
        return skipped

    if src_stat.is_symlink():
        if dest_stat is not None:
            _check_replaceable(dest_stat, "symlink", dest)
            logger.debug("Replacing destination entry", path=dest, kind=dest_stat.kind)
            await fs.unlink(dest)
        await fs.symlink(await fs.readlink(src), dest)
        return 0

    if src_stat.is_file():
        if dest_stat is not None:
            _check_replaceable(dest_stat, "open", dest)
            if not dest_stat.is_file():
                logger.debug("Replacing destination entry", path=dest, kind=dest_stat.kind)
                await fs.unlink(dest)
        await fs.copy_file(src, dest, exclusive=not overwrite)
        return 0

    return _skip(src, src_stat, "unsupported")
