"""Depth-first, pre-order directory walking.

Four call shapes share one algorithm: ``walk_sync`` (generator), ``walk``
(async generator), ``traverse_sync`` and ``traverse`` (visitor callbacks that
may cancel the walk by returning False). Traversal state is an explicit
stack of WalkFrames, so the generators can stop between any two filesystem
calls and a consumer that stops iterating issues no further calls.
"""

from __future__ import annotations

import contextlib
import os
from typing import TYPE_CHECKING, Any

from treefs.infrastructure.logger import logger
from treefs.primitives.errors import MISSING, PROBE_SOFT
from treefs.primitives.probe import attempt, attempt_async
from treefs.primitives.provider import async_local_fs, local_fs

from .types import WalkEntry, WalkFrame, check_callable, maybe_await, parse_walk_options, to_roots

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable, Generator, Mapping

    from treefs.primitives.entry import EntryStat
    from treefs.primitives.provider import AsyncPrimitives, SyncPrimitives

    from .types import PathArg, WalkOptions

    Visitor = Callable[[str, EntryStat | None, int], Any]


class WalkCursor:
    """Traversal state of one walk: the frame stack and the visited set."""

    def __init__(self, roots: list[str], options: WalkOptions) -> None:
        self.options = options
        self.stack: list[WalkFrame] = [WalkFrame.of(roots, 0)]
        self.visited: set[str] = set()

    def next_path(self) -> tuple[str, int] | None:
        """Pop the next pending path, discarding exhausted frames."""
        while self.stack:
            frame = self.stack[-1]
            if not frame.pending:
                self.stack.pop()
                continue
            if frame.depth == 0:
                # Each root is walked as an independent traversal.
                self.visited.clear()
            return frame.pending.pop(), frame.depth
        return None

    def emits(self, stat: EntryStat | None) -> bool:
        return not (self.options.files_only and stat is not None and stat.is_directory())

    def may_descend(self, stat: EntryStat | None, depth: int) -> bool:
        return stat is not None and stat.is_directory() and depth != self.options.max_depth

    def visit(self, real: str) -> bool:
        """Record ``real`` as descended into; False if it already was."""
        if real in self.visited:
            logger.debug("Walk suppressed symlink cycle", path=real)
            return False
        self.visited.add(real)
        return True

    def push(self, parent: str, names: list[str], depth: int) -> None:
        if names:
            self.stack.append(WalkFrame.of([os.path.join(parent, name) for name in names], depth + 1))


def walk_sync(
    root: PathArg | list[PathArg] | tuple[PathArg, ...],
    options: WalkOptions | Mapping[str, Any] | None = None,
    *,
    fs: SyncPrimitives | None = None,
    **kwargs: Any,
) -> Generator[WalkEntry, None, None]:
    """Lazily yield (path, stat, depth) for ``root`` and everything below it.

    Arguments are validated here, before the generator touches the disk.
    Options may be given as WalkOptions, a mapping, or keyword arguments.
    """
    roots = to_roots(root)
    opts = parse_walk_options(options, **kwargs)
    return _walk_sync(WalkCursor(roots, opts), fs or local_fs)


def _walk_sync(cursor: WalkCursor, fs: SyncPrimitives) -> Generator[WalkEntry, None, None]:
    opts = cursor.options
    stat_fn = fs.stat if opts.follow_links else fs.lstat

    while (step := cursor.next_path()) is not None:
        path, depth = step
        stat = attempt(stat_fn, path, extended=opts.stat.extended)

        if opts.filter is not None and not opts.filter(path, stat, depth):
            continue

        if cursor.emits(stat):
            yield WalkEntry(path, stat, depth)

        if not cursor.may_descend(stat, depth):
            continue

        if opts.follow:
            real = os.path.abspath(path)
            real = attempt(fs.realpath, real, soft=MISSING, default=real)
            if not cursor.visit(real):
                continue

        names = attempt(fs.readdir, path, soft=PROBE_SOFT)
        if names is not None:
            cursor.push(path, names, depth)


def walk(
    root: PathArg | list[PathArg] | tuple[PathArg, ...],
    options: WalkOptions | Mapping[str, Any] | None = None,
    *,
    fs: AsyncPrimitives | None = None,
    **kwargs: Any,
) -> AsyncGenerator[WalkEntry, None]:
    """Suspending twin of walk_sync(); use with ``async for``.

    A configured filter may be a plain function or a coroutine function.
    """
    roots = to_roots(root)
    opts = parse_walk_options(options, **kwargs)
    return _walk(WalkCursor(roots, opts), fs or async_local_fs)


async def _walk(cursor: WalkCursor, fs: AsyncPrimitives) -> AsyncGenerator[WalkEntry, None]:
    opts = cursor.options
    stat_fn = fs.stat if opts.follow_links else fs.lstat

    while (step := cursor.next_path()) is not None:
        path, depth = step
        stat = await attempt_async(stat_fn, path, extended=opts.stat.extended)

        if opts.filter is not None and not await maybe_await(opts.filter(path, stat, depth)):
            continue

        if cursor.emits(stat):
            yield WalkEntry(path, stat, depth)

        if not cursor.may_descend(stat, depth):
            continue

        if opts.follow:
            real = os.path.abspath(path)
            real = await attempt_async(fs.realpath, real, soft=MISSING, default=real)
            if not cursor.visit(real):
                continue

        names = await attempt_async(fs.readdir, path, soft=PROBE_SOFT)
        if names is not None:
            cursor.push(path, names, depth)


def traverse_sync(
    root: PathArg | list[PathArg] | tuple[PathArg, ...],
    visitor: Visitor,
    options: WalkOptions | Mapping[str, Any] | None = None,
    *,
    fs: SyncPrimitives | None = None,
    **kwargs: Any,
) -> bool:
    """Call ``visitor(path, stat, depth)`` for every walked entry.

    A visitor returning exactly False cancels the walk. Returns True when
    the walk ran to completion.
    """
    check_callable("visitor", visitor, optional=False)
    with contextlib.closing(walk_sync(root, options, fs=fs, **kwargs)) as entries:
        for path, stat, depth in entries:
            if visitor(path, stat, depth) is False:
                logger.debug("Walk cancelled by visitor", path=path, depth=depth)
                return False
    return True


async def traverse(
    root: PathArg | list[PathArg] | tuple[PathArg, ...],
    visitor: Visitor,
    options: WalkOptions | Mapping[str, Any] | None = None,
    *,
    fs: AsyncPrimitives | None = None,
    **kwargs: Any,
) -> bool:
    """Suspending twin of traverse_sync(); ``visitor`` may be a coroutine function."""
    check_callable("visitor", visitor, optional=False)
    async with contextlib.aclosing(walk(root, options, fs=fs, **kwargs)) as entries:
        async for path, stat, depth in entries:
            if await maybe_await(visitor(path, stat, depth)) is False:
                logger.debug("Walk cancelled by visitor", path=path, depth=depth)
                return False
    return True
