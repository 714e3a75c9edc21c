"""Tree-operation option types and argument validation."""

from __future__ import annotations

import enum
import inspect
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Annotated, Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, ValidationError

from treefs.primitives.entry import EntryStat
from treefs.primitives.errors import ArgError

PathArg = str | os.PathLike[str]


class CopyFlags(enum.IntFlag):
    NONE = 0
    EXCLUSIVE = 1


class StatOptions(BaseModel):
    """How the walker stats each entry.

    ``follow_links`` None means "follow when the walk follows symlinks".
    ``extended`` reports timestamps as integer nanoseconds.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    follow_links: StrictBool | None = None
    extended: StrictBool = False


class WalkOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    follow: StrictBool = False
    max_depth: Annotated[StrictInt, Field(ge=0)] | None = None
    files_only: StrictBool = False
    filter: Callable[..., Any] | None = None
    stat: StatOptions = StatOptions()

    @property
    def follow_links(self) -> bool:
        if self.stat.follow_links is None:
            return self.follow
        return self.stat.follow_links


@dataclass
class WalkFrame:
    """Paths still to visit at one depth, stored reversed so pop() yields listing order."""

    depth: int
    pending: list[str] = field(default_factory=list)

    @classmethod
    def of(cls, paths: list[str], depth: int) -> WalkFrame:
        return cls(depth=depth, pending=paths[::-1])


class WalkEntry(NamedTuple):
    path: str
    stat: EntryStat | None
    depth: int


def to_path(value: object, name: str = "path") -> str:
    """Coerce a str/PathLike argument to a non-empty str path."""
    if isinstance(value, (str, os.PathLike)):
        path = os.fspath(value)
        if isinstance(path, str) and path:
            return path
    raise ArgError(name, value, "path")


def to_roots(value: object) -> list[str]:
    if isinstance(value, (list, tuple)):
        return [to_path(item, "root") for item in value]
    return [to_path(value, "root")]


def check_flags(flags: object) -> int:
    if isinstance(flags, bool) or not isinstance(flags, int) or not 0 <= flags <= 0xFFFFFFFF:
        raise ArgError("flags", flags, "unsigned 32-bit integer")
    return int(flags)


def check_callable(name: str, value: object, *, optional: bool = True) -> None:
    if value is None and optional:
        return
    if not callable(value):
        raise ArgError(name, value, "function")


async def maybe_await(value: Any) -> Any:
    """Await ``value`` if a callback returned an awaitable."""
    if inspect.isawaitable(value):
        return await value
    return value


def parse_walk_options(options: WalkOptions | Mapping[str, Any] | None = None, **overrides: Any) -> WalkOptions:
    """Build WalkOptions from an instance, a mapping or keyword overrides."""
    if options is None:
        data: dict[str, Any] = {}
    elif isinstance(options, WalkOptions):
        if not overrides:
            return options
        data = {name: getattr(options, name) for name in WalkOptions.model_fields}
    elif isinstance(options, Mapping):
        data = dict(options)
    else:
        raise ArgError("options", options, "WalkOptions or mapping")

    data.update(overrides)

    try:
        return WalkOptions.model_validate(data)
    except ValidationError as err:
        raise ArgError("options", options, "WalkOptions", str(err)) from err
