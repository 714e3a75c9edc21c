"""Recursive tree operations: copy, remove, walk and mkdirp."""

from __future__ import annotations

from .copier import copy, copy_sync
from .mkdirp import ensure_directory, ensure_directory_sync, iter_prefixes
from .remover import remove, remove_sync
from .types import (
    CopyFlags,
    StatOptions,
    WalkEntry,
    WalkFrame,
    WalkOptions,
    parse_walk_options,
)
from .walker import WalkCursor, traverse, traverse_sync, walk, walk_sync

__all__ = [
    "CopyFlags",
    "StatOptions",
    "WalkCursor",
    "WalkEntry",
    "WalkFrame",
    "WalkOptions",
    "copy",
    "copy_sync",
    "ensure_directory",
    "ensure_directory_sync",
    "iter_prefixes",
    "parse_walk_options",
    "remove",
    "remove_sync",
    "traverse",
    "traverse_sync",
    "walk",
    "walk_sync",
]
