"""Formatter configuration loaded from a JSON file.

Only keys present in ``DEFAULT_SETTINGS`` are accepted, and each value must
have the same type as its default (``None`` defaults accept a string). A
bad value is dropped with a warning and the default is kept, so a broken
settings file never changes which command gets run.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from disk_formatter.domain.models import FileSystemKind
from disk_formatter.logging import LoggerFactory


log = LoggerFactory.for_system()

SETTINGS_PATH = Path(
    os.environ.get(
        "DISK_FORMATTER_SETTINGS_PATH",
        Path.home() / ".config" / "disk-formatter" / "settings.json",
    )
)

DEFAULT_FILESYSTEM = "ext4"
DEFAULT_LAZY_ITABLE_INIT_MARKER = "/sys/fs/ext4/features/lazy_itable_init"

DEFAULT_SETTINGS: dict[str, Any] = {
    "default_filesystem": DEFAULT_FILESYSTEM,
    "lazy_itable_init_marker": DEFAULT_LAZY_ITABLE_INIT_MARKER,
    "log_dir": None,
    "file_logging": True,
}


@dataclass
class SettingsStore:
    values: dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_SETTINGS))
    source: Path | None = None


settings_store = SettingsStore()


def _validate(key: str, value: Any) -> str | None:
    """Return why ``value`` is unacceptable for ``key``, or None if it is fine."""
    if key not in DEFAULT_SETTINGS:
        return "unknown setting"
    default = DEFAULT_SETTINGS[key]
    expected = str if default is None else type(default)
    if value is None and default is None:
        return None
    if not isinstance(value, expected):
        return f"expected {expected.__name__}, got {type(value).__name__}"
    if key == "default_filesystem":
        try:
            FileSystemKind.parse(value)
        except ValueError as error:
            return str(error)
    return None


def load_settings(path: Path | None = None) -> dict[str, Any]:
    """Reset to defaults, then apply valid entries from the settings file.

    Returns:
        The resulting settings values
    """
    path = path or SETTINGS_PATH
    values = dict(DEFAULT_SETTINGS)
    settings_store.values = values
    settings_store.source = None
    if not path.exists():
        return values
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as error:
        log.warning(f"Ignoring unreadable settings file {path}: {error}")
        return values
    if not isinstance(data, dict):
        log.warning(f"Ignoring settings file {path}: top level is not an object")
        return values

    for key, value in data.items():
        problem = _validate(key, value)
        if problem:
            log.warning(f"Ignoring setting {key!r} in {path}: {problem}")
            continue
        values[key] = value
    settings_store.source = path
    return values


def get_setting(key: str, default: Any | None = None) -> Any:
    return settings_store.values.get(key, default)


def get_bool(key: str, default: bool = False) -> bool:
    return bool(get_setting(key, default))


def get_path(key: str) -> Path | None:
    value = get_setting(key)
    return Path(value) if value else None


def get_default_filesystem() -> FileSystemKind:
    return FileSystemKind.parse(get_setting("default_filesystem", DEFAULT_FILESYSTEM))


load_settings()
