"""Per-device locks to serialize format operations on one block device.

Two overlapping formats of the same device would race destructively.
Operations on different devices are independent and never wait on each
other.

Usage:
    from disk_formatter.storage.device_lock import device_operation

    with device_operation("/dev/xvdb"):
        formatter.format("/dev/xvdb", FileSystemKind.EXT4)
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Generator

from disk_formatter.logging import LoggerFactory


log = LoggerFactory.for_format()

# Guards _device_locks, _waiters and _active_devices
_lock = threading.Lock()

_device_locks: dict[str, threading.Lock] = {}
# Holders plus waiters per device; the lock entry is dropped when it reaches 0
_waiters: dict[str, int] = {}
_active_devices: set[str] = set()


def _acquire_ref(device: str) -> threading.Lock:
    with _lock:
        device_lock = _device_locks.get(device)
        if device_lock is None:
            device_lock = threading.Lock()
            _device_locks[device] = device_lock
        _waiters[device] = _waiters.get(device, 0) + 1
        return device_lock


def _release_ref(device: str) -> None:
    with _lock:
        remaining = _waiters.get(device, 1) - 1
        if remaining <= 0:
            _waiters.pop(device, None)
            _device_locks.pop(device, None)
        else:
            _waiters[device] = remaining


@contextmanager
def device_operation(device: str) -> Generator[None, None, None]:
    """Hold the lock for ``device`` for the duration of the block.

    Args:
        device: Device path being operated on (e.g., "/dev/xvdb")
    """
    device_lock = _acquire_ref(device)
    try:
        if device_lock.locked():
            log.debug(f"Waiting for in-progress operation on {device}")
        with device_lock:
            with _lock:
                _active_devices.add(device)
            log.debug(f"Device operation started on {device}")
            try:
                yield
            finally:
                with _lock:
                    _active_devices.discard(device)
                log.debug(f"Device operation completed on {device}")
    finally:
        _release_ref(device)


def is_operation_active(device: str | None = None) -> bool:
    """Check if an operation is in progress on ``device`` (or on any device)."""
    with _lock:
        if device is None:
            return bool(_active_devices)
        return device in _active_devices
