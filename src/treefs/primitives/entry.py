"""Entry classification over stat results."""

from __future__ import annotations

import os
import stat as stat_mod
from typing import Literal

from pydantic import BaseModel, ConfigDict

EntryKind = Literal[
    "directory",
    "symlink",
    "file",
    "fifo",
    "socket",
    "blockdevice",
    "chardevice",
    "unknown",
]

# Destination kinds a file or symlink copy may replace.
REPLACEABLE_KINDS: frozenset[EntryKind] = frozenset({"fifo", "file", "socket", "symlink"})


def classify_mode(mode: int) -> EntryKind:
    """Return the entry kind encoded in a st_mode value."""
    if stat_mod.S_ISDIR(mode):
        return "directory"
    if stat_mod.S_ISLNK(mode):
        return "symlink"
    if stat_mod.S_ISREG(mode):
        return "file"
    if stat_mod.S_ISFIFO(mode):
        return "fifo"
    if stat_mod.S_ISSOCK(mode):
        return "socket"
    if stat_mod.S_ISBLK(mode):
        return "blockdevice"
    if stat_mod.S_ISCHR(mode):
        return "chardevice"
    return "unknown"


class EntryStat(BaseModel):
    """Point-in-time view of one filesystem entry.

    Timestamps are float seconds, or integer nanoseconds when built with
    ``extended=True``.
    """

    model_config = ConfigDict(frozen=True)

    kind: EntryKind
    dev: int
    ino: int
    rdev: int
    mode: int
    nlink: int
    uid: int
    gid: int
    size: int
    atime: float | int
    mtime: float | int
    ctime: float | int
    extended: bool = False

    @classmethod
    def from_stat_result(cls, result: os.stat_result, *, extended: bool = False) -> EntryStat:
        if extended:
            atime: float | int = result.st_atime_ns
            mtime: float | int = result.st_mtime_ns
            ctime: float | int = result.st_ctime_ns
        else:
            atime, mtime, ctime = result.st_atime, result.st_mtime, result.st_ctime
        return cls(
            kind=classify_mode(result.st_mode),
            dev=result.st_dev,
            ino=result.st_ino,
            rdev=getattr(result, "st_rdev", 0),
            mode=result.st_mode,
            nlink=result.st_nlink,
            uid=result.st_uid,
            gid=result.st_gid,
            size=result.st_size,
            atime=atime,
            mtime=mtime,
            ctime=ctime,
            extended=extended,
        )

    @property
    def permissions(self) -> int:
        """Permission bits without the file-type bits."""
        return stat_mod.S_IMODE(self.mode)

    def is_directory(self) -> bool:
        return self.kind == "directory"

    def is_symlink(self) -> bool:
        return self.kind == "symlink"

    def is_file(self) -> bool:
        return self.kind == "file"

    def is_fifo(self) -> bool:
        return self.kind == "fifo"

    def is_socket(self) -> bool:
        return self.kind == "socket"

    def is_block_device(self) -> bool:
        return self.kind == "blockdevice"

    def is_char_device(self) -> bool:
        return self.kind == "chardevice"

    def is_replaceable(self) -> bool:
        """True for kinds a file or symlink copy may overwrite."""
        return self.kind in REPLACEABLE_KINDS

    def same_entry(self, other: EntryStat | None) -> bool:
        """True when both stats identify the same entry (dev, ino, rdev)."""
        if other is None:
            return False
        return self.dev == other.dev and self.ino == other.ino and self.rdev == other.rdev
