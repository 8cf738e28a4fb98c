"""Host path existence checks."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    def path_exists(self, path: str) -> bool:
        ...


class OsFileSystem:
    """Answer path queries against the real host filesystem."""

    def path_exists(self, path: str) -> bool:
        try:
            return Path(path).exists()
        except OSError:
            return False
