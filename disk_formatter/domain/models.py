"""Domain model for filesystem preparation.

Filesystem kinds and captured command results are plain value objects;
nothing here performs I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# ==============================================================================
# Filesystem Domain
# ==============================================================================


class FileSystemKind(Enum):
    """Filesystems this package knows how to create.

    The value of each member is its canonical form: the string blkid reports
    as ``TYPE`` and the string passed to the creation tool.
    """

    SWAP = "swap"
    EXT2 = "ext2"
    EXT3 = "ext3"
    EXT4 = "ext4"

    @property
    def canonical(self) -> str:
        return self.value

    @property
    def is_ext_family(self) -> bool:
        """True for kinds created with mke2fs."""
        return self in (FileSystemKind.EXT2, FileSystemKind.EXT3, FileSystemKind.EXT4)

    @classmethod
    def parse(cls, text: str) -> FileSystemKind:
        """Convert a user-supplied string (e.g. "EXT4") to a kind.

        Raises:
            ValueError: If the string does not name a supported filesystem
        """
        normalized = (text or "").strip().lower()
        for kind in cls:
            if kind.value == normalized:
                return kind
        supported = ", ".join(kind.value for kind in cls)
        raise ValueError(f"Unsupported filesystem {text!r} (supported: {supported})")

    def __str__(self) -> str:
        return self.value


# ==============================================================================
# Command Domain
# ==============================================================================


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of one external command."""

    command: tuple[str, ...]
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        return " ".join(self.command)
