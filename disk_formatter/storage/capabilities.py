"""Host capability detection for filesystem creation options."""

from __future__ import annotations

from disk_formatter.config.settings import DEFAULT_LAZY_ITABLE_INIT_MARKER
from disk_formatter.logging import LoggerFactory
from disk_formatter.system.filesystem import FileSystem


log = LoggerFactory.for_probe()

LAZY_ITABLE_INIT_MARKER = DEFAULT_LAZY_ITABLE_INIT_MARKER


class CapabilityProbe:
    """Check for kernel feature markers exposed under /sys/fs."""

    def __init__(self, fs: FileSystem, marker_path: str | None = None):
        self.fs = fs
        self.marker_path = marker_path or LAZY_ITABLE_INIT_MARKER

    def supports_lazy_itable_init(self) -> bool:
        """Return True if the kernel can initialize ext4 inode tables lazily.

        Checked on every call. A missing marker, a missing feature directory,
        or a failed check all mean "unsupported".
        """
        try:
            supported = bool(self.fs.path_exists(self.marker_path))
        except OSError as error:
            log.debug(f"Could not check {self.marker_path}: {error}")
            return False
        log.debug(f"lazy_itable_init supported: {supported}")
        return supported
