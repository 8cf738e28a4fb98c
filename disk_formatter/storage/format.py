"""Filesystem creation on block devices with an idempotence check.

This module decides whether a block device already carries the requested
filesystem and, if it does not, creates it with the right tool and options.

Supported Filesystems:
    swap:   mkswap <device>
    ext2:   mke2fs -t ext2 <device>
    ext3:   mke2fs -t ext3 -j <device>
    ext4:   mke2fs -t ext4 -j [-E lazy_itable_init=1] <device>

Decision Flow:
    1. Probe the device once with ``blkid -p``
    2. If the probed TYPE equals the requested kind exactly, stop; the
       device is left untouched
    3. Otherwise build the creation command (ext4 consults the host's
       lazy_itable_init capability first) and run it exactly once

Only an exact TYPE match counts: an ext2 device requested as ext4 is
reformatted. No retries are attempted for any command.

Operations:
    - LinuxFormatter.format(): Probe, decide, and format; raises on failure
    - format_device(): Locked, logged entry point returning True/False
    - build_format_command(): Pure command construction

Example:
    >>> from disk_formatter.storage.format import format_device
    >>> format_device("/dev/xvdb", "ext4")
    True
"""

from __future__ import annotations

from typing import List, Optional, Union

from disk_formatter.domain.models import FileSystemKind
from disk_formatter.logging import LoggerFactory, operation_context
from disk_formatter.storage.capabilities import CapabilityProbe
from disk_formatter.storage.device_lock import device_operation
from disk_formatter.storage.exceptions import (
    CommandExecutionError,
    FormatCommandError,
    FormatError,
    UnsupportedFileSystemError,
)
from disk_formatter.storage.probe import FilesystemProber
from disk_formatter.system.command_runner import CmdRunner, SubprocessCmdRunner
from disk_formatter.system.filesystem import FileSystem, OsFileSystem


log = LoggerFactory.for_format()

LAZY_ITABLE_INIT_OPTION = "lazy_itable_init=1"


def build_format_command(
    device: str, kind: FileSystemKind, lazy_itable_init: bool = False
) -> List[str]:
    """Build the creation command for ``kind`` on ``device``.

    Args:
        device: Device path (e.g., /dev/xvdb)
        kind: Filesystem to create
        lazy_itable_init: Host supports lazy inode table init (ext4 only)

    Returns:
        Argument vector, program name first
    """
    if kind is FileSystemKind.SWAP:
        return ["mkswap", device]

    if kind.is_ext_family:
        command = ["mke2fs", "-t", kind.canonical]
        if kind is not FileSystemKind.EXT2:
            command.append("-j")  # ext2 has no journal
        if lazy_itable_init and kind is FileSystemKind.EXT4:
            command.extend(["-E", LAZY_ITABLE_INIT_OPTION])
        command.append(device)
        return command

    raise UnsupportedFileSystemError(str(kind), [k.value for k in FileSystemKind])


class LinuxFormatter:
    """Format block devices using blkid, mkswap, and mke2fs."""

    def __init__(
        self,
        runner: CmdRunner,
        fs: FileSystem,
        marker_path: Optional[str] = None,
    ):
        self.runner = runner
        self.prober = FilesystemProber(runner)
        self.capabilities = CapabilityProbe(fs, marker_path=marker_path)

    def format(self, device: str, kind: FileSystemKind) -> bool:
        """Ensure ``device`` carries a ``kind`` filesystem.

        Args:
            device: Device path (e.g., /dev/xvdb)
            kind: Filesystem to create

        Returns:
            True if a filesystem was created, False if the device already
            had the requested filesystem and was left untouched

        Raises:
            ValueError: If device is empty
            ProbeError: If the existing filesystem could not be probed
            FormatCommandError: If the creation command failed
        """
        if not device:
            raise ValueError("device path must not be empty")

        identity = self.prober.probe(device, kind)
        if identity == kind.canonical:
            log.info(f"{device} already formatted as {kind}; skipping")
            return False

        lazy_itable_init = False
        if kind is FileSystemKind.EXT4:
            lazy_itable_init = self.capabilities.supports_lazy_itable_init()

        command = build_format_command(device, kind, lazy_itable_init)
        log.info(
            f"Formatting {device} as {kind} (existing: {identity or 'none'})"
        )
        try:
            result = self.runner.run_command(*command)
        except CommandExecutionError as error:
            raise FormatCommandError(device, kind, command, stderr=error.reason) from error

        if not result.succeeded:
            log.error(f"Format command failed with code {result.returncode}")
            log.error(f"Command: {result.command_line}")
            log.error(f"Error output: {result.stderr.strip() or 'no error message'}")
            raise FormatCommandError(
                device,
                kind,
                command,
                returncode=result.returncode,
                stderr=result.stderr,
            )

        log.debug(f"Successfully formatted {device} as {kind}")
        return True


def _coerce_kind(kind: Union[FileSystemKind, str]) -> FileSystemKind:
    if isinstance(kind, FileSystemKind):
        return kind
    try:
        return FileSystemKind.parse(kind)
    except ValueError:
        raise UnsupportedFileSystemError(
            str(kind), [k.value for k in FileSystemKind]
        ) from None


def format_device(
    device: str,
    kind: Union[FileSystemKind, str],
    runner: Optional[CmdRunner] = None,
    fs: Optional[FileSystem] = None,
    marker_path: Optional[str] = None,
) -> bool:
    """Format ``device`` as ``kind`` unless it already is.

    Serializes with other operations on the same device and logs the
    outcome.

    Args:
        device: Device path (e.g., /dev/xvdb)
        kind: Filesystem kind or its name ("swap", "ext4", ...)
        runner: Command runner (defaults to subprocess)
        fs: Host filesystem facility (defaults to the real filesystem)
        marker_path: Override for the lazy_itable_init feature marker

    Returns:
        True on success (including when no format was needed), False on failure

    Raises:
        UnsupportedFileSystemError: If ``kind`` names an unknown filesystem
    """
    fs_kind = _coerce_kind(kind)
    if not device:
        log.warning("Format aborted: no device path given")
        return False

    formatter = LinuxFormatter(
        runner or SubprocessCmdRunner(),
        fs or OsFileSystem(),
        marker_path=marker_path,
    )
    try:
        with device_operation(device), operation_context(
            "format", device=device, kind=fs_kind.value
        ) as op_log:
            formatted = formatter.format(device, fs_kind)
            if not formatted:
                op_log.debug(f"No format needed for {device}")
    except FormatError as error:
        log.warning(f"Format aborted: {error}")
        return False
    return True
