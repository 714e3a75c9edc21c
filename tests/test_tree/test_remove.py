"""Tests for the recursive remove engine."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from treefs.primitives.errors import NOT_FOUND, PERMISSION_DENIED, UNKNOWN, ArgError, FSError
from treefs.tree.remover import remove, remove_sync

if TYPE_CHECKING:
    from pathlib import Path

    from tests.conftest import FaultInjector


class TestRemoveSync:
    @pytest.fixture(autouse=True)
    def _setup(self, sample_tree: Path) -> None:
        self.root = sample_tree

    def test_removes_whole_tree(self) -> None:
        assert remove_sync(self.root) == 0
        assert not self.root.exists()

    def test_missing_path_counts_one_skip(self) -> None:
        assert remove_sync(self.root.parent / "does-not-exist") == 1

    def test_removes_single_file(self) -> None:
        assert remove_sync(self.root / "a.txt") == 0
        assert not (self.root / "a.txt").exists()

    def test_filter_keeps_entries_and_their_parents(self) -> None:
        skipped = remove_sync(self.root, filter=lambda path, stat: not path.endswith("b.txt"))
        # b.txt is kept, so sub and root cannot be removed either.
        assert skipped == 3
        assert (self.root / "sub" / "b.txt").exists()
        assert not (self.root / "a.txt").exists()

    def test_symlink_is_removed_not_followed(self) -> None:
        target = self.root.parent / "outside"
        target.mkdir()
        (target / "keep.txt").write_text("keep")
        os.symlink(target, self.root / "link")

        assert remove_sync(self.root) == 0
        assert (target / "keep.txt").exists()

    def test_permission_denied_on_unlink_is_skipped(self, sync_fs: FaultInjector) -> None:
        sync_fs.fail("unlink", self.root / "a.txt", PERMISSION_DENIED)

        skipped = remove_sync(self.root, fs=sync_fs)

        # a.txt stays, and root is then not empty.
        assert skipped == 2
        assert (self.root / "a.txt").exists()
        assert not (self.root / "sub").exists()

    def test_unreadable_directory_is_skipped(self, sync_fs: FaultInjector) -> None:
        sync_fs.fail("readdir", self.root / "sub", PERMISSION_DENIED)

        skipped = remove_sync(self.root, fs=sync_fs)

        assert skipped == 2
        assert (self.root / "sub" / "b.txt").exists()

    def test_vanished_directory_on_rmdir_is_skipped(self, sync_fs: FaultInjector) -> None:
        sync_fs.fail("rmdir", self.root / "sub", NOT_FOUND)
        assert remove_sync(self.root, fs=sync_fs) == 2

    def test_unexpected_error_propagates(self, sync_fs: FaultInjector) -> None:
        sync_fs.fail("unlink", self.root / "a.txt", UNKNOWN)
        with pytest.raises(FSError) as exc_info:
            remove_sync(self.root, fs=sync_fs)
        assert exc_info.value.kind == UNKNOWN

    def test_unexpected_lstat_error_propagates(self, sync_fs: FaultInjector) -> None:
        sync_fs.fail("lstat", self.root, "TOO_MANY_SYMLINKS")
        with pytest.raises(FSError):
            remove_sync(self.root, fs=sync_fs)

    def test_invalid_filter_fails_before_io(self, sync_fs: FaultInjector) -> None:
        with pytest.raises(ArgError):
            remove_sync(self.root, filter=123, fs=sync_fs)  # type: ignore[arg-type]
        assert sync_fs.calls == []
        assert self.root.exists()


class TestRemoveAsync:
    @pytest.fixture(autouse=True)
    def _setup(self, sample_tree: Path) -> None:
        self.root = sample_tree

    @pytest.mark.asyncio
    async def test_removes_whole_tree(self) -> None:
        assert await remove(self.root) == 0
        assert not self.root.exists()

    @pytest.mark.asyncio
    async def test_missing_path_counts_one_skip(self) -> None:
        assert await remove(self.root.parent / "nope") == 1

    @pytest.mark.asyncio
    async def test_async_filter(self) -> None:
        async def keep_sub(path: str, stat: object) -> bool:
            return not path.endswith("sub")

        assert await remove(self.root, filter=keep_sub) == 2
        assert (self.root / "sub" / "b.txt").exists()
        assert not (self.root / "a.txt").exists()

    @pytest.mark.asyncio
    async def test_permission_denied_on_lstat_is_skipped(self, async_fs: FaultInjector) -> None:
        async_fs.fail("lstat", self.root / "a.txt", PERMISSION_DENIED)
        assert await remove(self.root, fs=async_fs) == 2
        assert (self.root / "a.txt").exists()

    @pytest.mark.asyncio
    async def test_unexpected_error_propagates(self, async_fs: FaultInjector) -> None:
        async_fs.fail("rmdir", self.root / "sub", UNKNOWN)
        with pytest.raises(FSError):
            await remove(self.root, fs=async_fs)
