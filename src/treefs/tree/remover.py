"""Recursive removal of a file or directory subtree."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

from treefs.infrastructure.logger import logger
from treefs.primitives.errors import REMOVE_SOFT, RMDIR_SOFT, ErrorKind, FSError
from treefs.primitives.provider import async_local_fs, local_fs

from .types import check_callable, maybe_await, to_path

if TYPE_CHECKING:
    from collections.abc import Callable

    from treefs.primitives.entry import EntryStat
    from treefs.primitives.provider import AsyncPrimitives, SyncPrimitives

    from .types import PathArg

    RemoveFilter = Callable[[str, EntryStat], Any]


def _is_soft(err: FSError, kinds: frozenset[ErrorKind], path: str, step: str) -> bool:
    if err.kind not in kinds:
        return False
    logger.debug("Remove skipped entry", path=path, step=step, kind=err.kind)
    return True


def remove_sync(path: PathArg, filter: RemoveFilter | None = None, *, fs: SyncPrimitives | None = None) -> int:
    """Delete ``path`` and everything below it, blocking on every call.

    Returns the number of entries that could not be removed; a missing
    ``path`` counts as one.
    """
    target = to_path(path)
    check_callable("filter", filter)
    return _remove_sync(fs or local_fs, target, filter)


def _remove_sync(fs: SyncPrimitives, path: str, filter: RemoveFilter | None) -> int:
    try:
        stat = fs.lstat(path)
    except FSError as err:
        if not _is_soft(err, REMOVE_SOFT, path, "lstat"):
            raise
        return 1

    if filter is not None and not filter(path, stat):
        logger.debug("Remove skipped entry", path=path, step="filter")
        return 1

    if stat.is_directory():
        try:
            names = fs.readdir(path)
        except FSError as err:
            if not _is_soft(err, REMOVE_SOFT, path, "readdir"):
                raise
            return 1

        skipped = 0
        for name in names:
            skipped += _remove_sync(fs, os.path.join(path, name), filter)

        try:
            fs.rmdir(path)
        except FSError as err:
            if not _is_soft(err, RMDIR_SOFT, path, "rmdir"):
                raise
            return skipped + 1

        return skipped

    try:
        fs.unlink(path)
    except FSError as err:
        if not _is_soft(err, REMOVE_SOFT, path, "unlink"):
            raise
        return 1

    return 0


async def remove(path: PathArg, filter: RemoveFilter | None = None, *, fs: AsyncPrimitives | None = None) -> int:
    """Delete ``path`` and everything below it, suspending on every call.

    ``filter`` may be a plain function or a coroutine function.
    """
    target = to_path(path)
    check_callable("filter", filter)
    return await _remove(fs or async_local_fs, target, filter)


async def _remove(fs: AsyncPrimitives, path: str, filter: RemoveFilter | None) -> int:
    try:
        stat = await fs.lstat(path)
    except FSError as err:
        if not _is_soft(err, REMOVE_SOFT, path, "lstat"):
            raise
        return 1

    if filter is not None and not await maybe_await(filter(path, stat)):
        logger.debug("Remove skipped entry", path=path, step="filter")
        return 1

    if stat.is_directory():
        try:
            names = await fs.readdir(path)
        except FSError as err:
            if not _is_soft(err, REMOVE_SOFT, path, "readdir"):
                raise
            return 1

        skipped = 0
        for name in names:
            skipped += await _remove(fs, os.path.join(path, name), filter)

        try:
            await fs.rmdir(path)
        except FSError as err:
            if not _is_soft(err, RMDIR_SOFT, path, "rmdir"):
                raise
            return skipped + 1

        return skipped

    try:
        await fs.unlink(path)
    except FSError as err:
        if not _is_soft(err, REMOVE_SOFT, path, "unlink"):
            raise
        return 1

    return 0
