"""Custom exceptions for storage operations.

This module defines a hierarchy of exceptions for storage operations to provide
more specific error handling and better error messages.

Exception Hierarchy:
    StorageError (base)
        ├── CommandExecutionError
        └── FormatError
            ├── ProbeError
            └── FormatCommandError
    UnsupportedFileSystemError (also a ValueError)

Usage:
    from disk_formatter.storage.exceptions import ProbeError

    raise ProbeError("/dev/xvdb", FileSystemKind.EXT4, "blkid: not found")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from disk_formatter.domain.models import FileSystemKind


class StorageError(Exception):
    """Base exception for all storage operations."""



class CommandExecutionError(StorageError):
    """External command could not be started at all."""

    def __init__(self, command: Sequence[str], reason: str):
        self.command = list(command)
        self.reason = reason
        super().__init__(f"Failed to run {' '.join(self.command)}: {reason}")


class FormatError(StorageError):
    """Base exception for format operations."""

    def __init__(
        self, message: str, device: str, kind: Optional[FileSystemKind] = None
    ):
        self.device = device
        self.kind = kind
        super().__init__(message)


class ProbeError(FormatError):
    """Existing filesystem could not be probed; nothing was formatted."""

    def __init__(self, device: str, kind: Optional[FileSystemKind], reason: str):
        self.reason = reason
        super().__init__(
            f"Failed to probe filesystem on {device} (requested {kind}): {reason}",
            device,
            kind,
        )


class FormatCommandError(FormatError):
    """Filesystem creation command failed or could not be started."""

    def __init__(
        self,
        device: str,
        kind: Optional[FileSystemKind],
        command: Sequence[str],
        returncode: int | None = None,
        stderr: str = "",
    ):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        msg = f"Failed to format {device} as {kind} ({' '.join(self.command)})"
        if returncode is not None:
            msg += f": exit code {returncode}"
        if stderr:
            msg += f": {stderr.strip()}"
        super().__init__(msg, device, kind)


class UnsupportedFileSystemError(ValueError):
    """Requested filesystem kind is not one this package can create."""

    def __init__(self, name: str, supported: Sequence[str]):
        self.name = name
        self.supported = list(supported)
        super().__init__(
            f"Unsupported filesystem {name!r} (supported: {', '.join(self.supported)})"
        )
