"""Existing filesystem detection via blkid.

``blkid -p`` performs a low-level superblock probe, bypassing the blkid
cache, and prints tokens such as::

    /dev/xvdb: UUID="..." VERSION="1.0" TYPE="ext4" USAGE="filesystem"

Only the ``TYPE`` token matters here. A device without a recognizable
signature prints nothing and exits with status 2; that is a normal outcome
(empty identity), not an error. Any other non-zero status (device
inaccessible, usage error, 8 for ambivalent signatures) aborts the probe.
"""

from __future__ import annotations

import re
from typing import Optional

from disk_formatter.domain.models import FileSystemKind
from disk_formatter.logging import LoggerFactory
from disk_formatter.storage.exceptions import CommandExecutionError, ProbeError
from disk_formatter.system.command_runner import CmdRunner


log = LoggerFactory.for_probe()

# PTTYPE= and SEC_TYPE= also end in TYPE= but describe something else
_TYPE_PATTERN = re.compile(r'(?<![A-Za-z_])TYPE="([^"]*)"')

# blkid exit status when no signature matched
BLKID_NOT_FOUND = 2


def parse_filesystem_type(output: str | None) -> str:
    """Extract the TYPE value from blkid output.

    Args:
        output: Captured standard output of blkid

    Returns:
        The filesystem type as emitted by blkid, or "" if no TYPE token is present
    """
    if not output:
        return ""
    match = _TYPE_PATTERN.search(output)
    if match is None:
        return ""
    return match.group(1)


def build_probe_command(device: str) -> list[str]:
    return ["blkid", "-p", device]


class FilesystemProber:
    """Report the filesystem type currently present on a block device."""

    def __init__(self, runner: CmdRunner):
        self.runner = runner

    def probe(self, device: str, kind: Optional[FileSystemKind] = None) -> str:
        """Return the filesystem type on ``device``, or "" if none is found.

        Args:
            device: Block device path (e.g., /dev/xvdb)
            kind: Requested kind, carried into ProbeError for context only

        Raises:
            ProbeError: If blkid could not be run or reported an error
        """
        try:
            result = self.runner.run_command(*build_probe_command(device))
        except CommandExecutionError as error:
            raise ProbeError(device, kind, error.reason) from error

        if result.returncode == BLKID_NOT_FOUND and not result.stdout.strip():
            log.debug(f"blkid found no signature on {device}")
            return ""
        if not result.succeeded:
            reason = result.stderr.strip() or f"blkid exited with status {result.returncode}"
            log.error(f"blkid failed on {device} with code {result.returncode}: {reason}")
            raise ProbeError(device, kind, reason)

        identity = parse_filesystem_type(result.stdout)
        log.debug(f"Probed {device}: TYPE={identity or '<none>'}")
        return identity
