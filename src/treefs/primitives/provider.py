"""Single-entry filesystem primitives in blocking and suspending forms.

The tree engines only talk to a provider through the SyncPrimitives and
AsyncPrimitives protocols, so alternative backends (in-memory, remote,
fault-injecting test doubles) can be swapped in with ``fs=``.
"""

from __future__ import annotations

import asyncio
import contextlib
import functools
import os
import shutil
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import aiofiles
import aiofiles.os

from treefs.infrastructure.config import COPY_CHUNK_SIZE

from .entry import EntryStat
from .errors import PERMISSION_DENIED, FSError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@contextlib.contextmanager
def translate_errors(syscall: str) -> Iterator[None]:
    """Re-raise builtin OSErrors as FSError tagged with the failing syscall."""
    try:
        yield
    except FSError:
        raise
    except OSError as err:
        raise FSError.from_os_error(err, syscall) from err


def make_dirs(path: str, mode: int) -> None:
    """Like os.makedirs(exist_ok=True), but every created directory gets ``mode``."""
    head, tail = os.path.split(path)
    if not tail:
        head, tail = os.path.split(head)
    if head and tail and not os.path.exists(head):
        make_dirs(head, mode)
        if tail == os.curdir:
            return
    try:
        os.mkdir(path, mode)
    except OSError:
        if not os.path.isdir(path):
            raise


@runtime_checkable
class SyncPrimitives(Protocol):
    supports_recursive_mkdir: bool

    def stat(self, path: str, *, extended: bool = False) -> EntryStat: ...
    def lstat(self, path: str, *, extended: bool = False) -> EntryStat: ...
    def readdir(self, path: str) -> list[str]: ...
    def mkdir(self, path: str, mode: int = 0o777, *, recursive: bool = False) -> None: ...
    def unlink(self, path: str) -> None: ...
    def rmdir(self, path: str) -> None: ...
    def symlink(self, target: str, link_path: str) -> None: ...
    def readlink(self, path: str) -> str: ...
    def realpath(self, path: str) -> str: ...
    def copy_file(self, src: str, dest: str, *, exclusive: bool = False) -> None: ...
    def access(self, path: str, mode: int = os.F_OK) -> None: ...


@runtime_checkable
class AsyncPrimitives(Protocol):
    supports_recursive_mkdir: bool

    async def stat(self, path: str, *, extended: bool = False) -> EntryStat: ...
    async def lstat(self, path: str, *, extended: bool = False) -> EntryStat: ...
    async def readdir(self, path: str) -> list[str]: ...
    async def mkdir(self, path: str, mode: int = 0o777, *, recursive: bool = False) -> None: ...
    async def unlink(self, path: str) -> None: ...
    async def rmdir(self, path: str) -> None: ...
    async def symlink(self, target: str, link_path: str) -> None: ...
    async def readlink(self, path: str) -> str: ...
    async def realpath(self, path: str) -> str: ...
    async def copy_file(self, src: str, dest: str, *, exclusive: bool = False) -> None: ...
    async def access(self, path: str, mode: int = os.F_OK) -> None: ...


class LocalFileSystem:
    """Blocking primitives over the os module."""

    supports_recursive_mkdir = True

    def stat(self, path: str, *, extended: bool = False) -> EntryStat:
        with translate_errors("stat"):
            return EntryStat.from_stat_result(os.stat(path), extended=extended)

    def lstat(self, path: str, *, extended: bool = False) -> EntryStat:
        with translate_errors("lstat"):
            return EntryStat.from_stat_result(os.lstat(path), extended=extended)

    def readdir(self, path: str) -> list[str]:
        with translate_errors("scandir"):
            return os.listdir(path)

    def mkdir(self, path: str, mode: int = 0o777, *, recursive: bool = False) -> None:
        with translate_errors("mkdir"):
            if recursive:
                make_dirs(path, mode)
            else:
                os.mkdir(path, mode)

    def unlink(self, path: str) -> None:
        with translate_errors("unlink"):
            os.unlink(path)

    def rmdir(self, path: str) -> None:
        with translate_errors("rmdir"):
            os.rmdir(path)

    def symlink(self, target: str, link_path: str) -> None:
        with translate_errors("symlink"):
            os.symlink(target, link_path)

    def readlink(self, path: str) -> str:
        with translate_errors("readlink"):
            return os.readlink(path)

    def realpath(self, path: str) -> str:
        with translate_errors("realpath"):
            return os.path.realpath(path, strict=True)

    def copy_file(self, src: str, dest: str, *, exclusive: bool = False) -> None:
        with translate_errors("copyfile"):
            if exclusive:
                with open(src, "rb") as fsrc, open(dest, "xb") as fdst:
                    shutil.copyfileobj(fsrc, fdst, COPY_CHUNK_SIZE)
            else:
                shutil.copyfile(src, dest)
            shutil.copymode(src, dest)

    def access(self, path: str, mode: int = os.F_OK) -> None:
        with translate_errors("access"):
            if os.access(path, mode):
                return
            # Surfaces NOT_FOUND when the entry is missing.
            os.stat(path)
        raise FSError(PERMISSION_DENIED, syscall="access", path=path)


async def _run(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Run a blocking call aiofiles does not wrap in the default executor."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))


class AsyncLocalFileSystem:
    """Suspending primitives over aiofiles."""

    supports_recursive_mkdir = True

    async def stat(self, path: str, *, extended: bool = False) -> EntryStat:
        with translate_errors("stat"):
            result = await aiofiles.os.stat(path)
        return EntryStat.from_stat_result(result, extended=extended)

    async def lstat(self, path: str, *, extended: bool = False) -> EntryStat:
        with translate_errors("lstat"):
            result = await aiofiles.os.stat(path, follow_symlinks=False)
        return EntryStat.from_stat_result(result, extended=extended)

    async def readdir(self, path: str) -> list[str]:
        with translate_errors("scandir"):
            entries: list[str] = await aiofiles.os.listdir(path)
        return entries

    async def mkdir(self, path: str, mode: int = 0o777, *, recursive: bool = False) -> None:
        with translate_errors("mkdir"):
            if recursive:
                await _run(make_dirs, path, mode)
            else:
                await aiofiles.os.mkdir(path, mode)

    async def unlink(self, path: str) -> None:
        with translate_errors("unlink"):
            await aiofiles.os.unlink(path)

    async def rmdir(self, path: str) -> None:
        with translate_errors("rmdir"):
            await aiofiles.os.rmdir(path)

    async def symlink(self, target: str, link_path: str) -> None:
        with translate_errors("symlink"):
            await aiofiles.os.symlink(target, link_path)

    async def readlink(self, path: str) -> str:
        with translate_errors("readlink"):
            target: str = await aiofiles.os.readlink(path)
        return target

    async def realpath(self, path: str) -> str:
        with translate_errors("realpath"):
            real: str = await _run(os.path.realpath, path, strict=True)
        return real

    async def copy_file(self, src: str, dest: str, *, exclusive: bool = False) -> None:
        with translate_errors("copyfile"):
            async with aiofiles.open(src, "rb") as fsrc, aiofiles.open(dest, "xb" if exclusive else "wb") as fdst:
                while chunk := await fsrc.read(COPY_CHUNK_SIZE):
                    await fdst.write(chunk)
            await _run(shutil.copymode, src, dest)

    async def access(self, path: str, mode: int = os.F_OK) -> None:
        with translate_errors("access"):
            if await aiofiles.os.access(path, mode):
                return
            await aiofiles.os.stat(path)
        raise FSError(PERMISSION_DENIED, syscall="access", path=path)


local_fs = LocalFileSystem()
async_local_fs = AsyncLocalFileSystem()
