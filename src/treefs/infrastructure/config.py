"""Configuration constants resolved from the environment and .env."""

from __future__ import annotations

import os
from pathlib import Path


def _parse_env_line(line: str) -> tuple[str, str] | None:
    """Split one ``KEY=value`` line; None for blanks, comments and malformed lines."""
    line = line.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    key, _, value = line.partition("=")
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        value = value[1:-1]
    return key.strip(), value


def read_env_file(keys: list[str]) -> dict[str, str]:
    """Return the requested non-empty settings from ./.env without touching os.environ."""
    try:
        lines = (Path.cwd() / ".env").read_text().splitlines()
    except OSError:
        return {}

    wanted = set(keys)
    settings: dict[str, str] = {}
    for key, value in filter(None, map(_parse_env_line, lines)):
        if key in wanted and value:
            settings[key] = value
    return settings


def _setting(name: str, default: str) -> str:
    return os.environ.get(name) or _env_config.get(name, default)


def parse_mode(value: str) -> int:
    """Parse an octal permission string such as "755" or "0o755"."""
    mode = int(value, 8)
    if not 0 <= mode <= 0o7777:
        raise ValueError(f"Invalid permission mode: {value}")
    return mode


_env_config = read_env_file(["TREEFS_LOG_LEVEL", "TREEFS_DIR_MODE", "TREEFS_COPY_CHUNK_SIZE"])

LOG_LEVEL: str = _setting("TREEFS_LOG_LEVEL", "WARNING").upper()
DEFAULT_DIR_MODE: int = parse_mode(_setting("TREEFS_DIR_MODE", "777"))
COPY_CHUNK_SIZE: int = max(4096, int(_setting("TREEFS_COPY_CHUNK_SIZE", str(1024 * 1024))))
