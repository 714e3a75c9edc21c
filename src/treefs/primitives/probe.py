"""Try-helpers that turn expected filesystem failures into sentinel results."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any, TypeVar

from .errors import MISSING, PROBE_SOFT, ErrorKind, FSError
from .provider import async_local_fs, local_fs

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from .entry import EntryStat
    from .provider import AsyncPrimitives, SyncPrimitives

T = TypeVar("T")
D = TypeVar("D")


def attempt(
    fn: Callable[..., T],
    *args: Any,
    soft: frozenset[ErrorKind] = PROBE_SOFT,
    default: D = None,  # type: ignore[assignment]
    **kwargs: Any,
) -> T | D:
    """Call ``fn``; return ``default`` if it fails with an FSError kind in ``soft``."""
    try:
        return fn(*args, **kwargs)
    except FSError as err:
        if err.kind in soft:
            return default
        raise


async def attempt_async(
    fn: Callable[..., Awaitable[T]],
    *args: Any,
    soft: frozenset[ErrorKind] = PROBE_SOFT,
    default: D = None,  # type: ignore[assignment]
    **kwargs: Any,
) -> T | D:
    """Awaiting twin of attempt()."""
    try:
        return await fn(*args, **kwargs)
    except FSError as err:
        if err.kind in soft:
            return default
        raise


def stat_try_sync(path: str | os.PathLike[str], *, extended: bool = False, fs: SyncPrimitives | None = None) -> EntryStat | None:
    fs = fs or local_fs
    return attempt(fs.stat, os.fspath(path), extended=extended)


def lstat_try_sync(path: str | os.PathLike[str], *, extended: bool = False, fs: SyncPrimitives | None = None) -> EntryStat | None:
    fs = fs or local_fs
    return attempt(fs.lstat, os.fspath(path), extended=extended)


async def stat_try(path: str | os.PathLike[str], *, extended: bool = False, fs: AsyncPrimitives | None = None) -> EntryStat | None:
    """Stat ``path``, returning None when it is missing or unreachable."""
    fs = fs or async_local_fs
    return await attempt_async(fs.stat, os.fspath(path), extended=extended)


async def lstat_try(path: str | os.PathLike[str], *, extended: bool = False, fs: AsyncPrimitives | None = None) -> EntryStat | None:
    """Lstat ``path``, returning None when it is missing or unreachable."""
    fs = fs or async_local_fs
    return await attempt_async(fs.lstat, os.fspath(path), extended=extended)


def exists_sync(path: str | os.PathLike[str], mode: int = os.F_OK, *, fs: SyncPrimitives | None = None) -> bool:
    fs = fs or local_fs
    return attempt(_accessible, fs.access, os.fspath(path), mode, soft=MISSING, default=False)


async def exists(path: str | os.PathLike[str], mode: int = os.F_OK, *, fs: AsyncPrimitives | None = None) -> bool:
    """True if ``path`` exists and grants ``mode``.

    Only a missing entry maps to False; a permission failure propagates.
    """
    fs = fs or async_local_fs
    return await attempt_async(_accessible_async, fs.access, os.fspath(path), mode, soft=MISSING, default=False)


def _accessible(access: Callable[[str, int], None], path: str, mode: int) -> bool:
    access(path, mode)
    return True


async def _accessible_async(access: Callable[[str, int], Awaitable[None]], path: str, mode: int) -> bool:
    await access(path, mode)
    return True
