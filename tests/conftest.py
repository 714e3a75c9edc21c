"""Shared fixtures for treefs tests."""

from __future__ import annotations

import inspect
import os
from typing import TYPE_CHECKING, Any

import pytest

from treefs.primitives.errors import FSError
from treefs.primitives.provider import AsyncLocalFileSystem, LocalFileSystem

if TYPE_CHECKING:
    from pathlib import Path

    from treefs.primitives.errors import ErrorKind


class FaultInjector:
    """Provider wrapper that records calls and fails chosen (syscall, path) pairs.

    Wraps either a blocking or a suspending provider; the first positional
    argument of every primitive is treated as the path.
    """

    def __init__(self, inner: Any) -> None:
        self._inner = inner
        self.supports_recursive_mkdir: bool = inner.supports_recursive_mkdir
        self.faults: dict[tuple[str, str], ErrorKind] = {}
        self.calls: list[tuple[str, str]] = []

    def fail(self, syscall: str, path: str | os.PathLike[str], kind: ErrorKind) -> None:
        self.faults[(syscall, os.fspath(path))] = kind

    def _check(self, syscall: str, path: str) -> None:
        self.calls.append((syscall, path))
        kind = self.faults.get((syscall, path))
        if kind is not None:
            raise FSError(kind, syscall=syscall, path=path)

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._inner, name)
        if not callable(attr):
            return attr

        if inspect.iscoroutinefunction(attr):

            async def async_wrapper(path: str, *args: Any, **kwargs: Any) -> Any:
                self._check(name, path)
                return await attr(path, *args, **kwargs)

            return async_wrapper

        def wrapper(path: str, *args: Any, **kwargs: Any) -> Any:
            self._check(name, path)
            return attr(path, *args, **kwargs)

        return wrapper


@pytest.fixture()
def sync_fs() -> FaultInjector:
    return FaultInjector(LocalFileSystem())


@pytest.fixture()
def async_fs() -> FaultInjector:
    return FaultInjector(AsyncLocalFileSystem())


@pytest.fixture()
def sample_tree(tmp_path: Path) -> Path:
    """Build root/a.txt and root/sub/b.txt."""
    root = tmp_path / "root"
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_text("alpha")
    (root / "sub" / "b.txt").write_text("bravo")
    return root


@pytest.fixture()
def umask_022() -> Any:
    previous = os.umask(0o022)
    yield
    os.umask(previous)
