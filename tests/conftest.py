"""
Pytest configuration and shared fixtures for disk-formatter tests.

This module provides fake command and filesystem facilities so the
formatter can be exercised without touching real block devices.
"""

from typing import Dict, List, Optional, Tuple

import pytest

from disk_formatter.domain.models import CommandResult
from disk_formatter.storage.exceptions import CommandExecutionError


class FakeCmdRunner:
    """Scripted command runner that records every command it receives.

    ``command_results`` maps a space-joined command line to
    ``(stdout, stderr)`` or ``(stdout, stderr, returncode)``. Commands
    without a scripted result succeed with empty output. Command lines
    listed in ``unavailable`` raise CommandExecutionError.
    """

    def __init__(self, command_results: Optional[Dict[str, Tuple]] = None):
        self.command_results: Dict[str, Tuple] = dict(command_results or {})
        self.unavailable: set = set()
        self.run_commands: List[List[str]] = []

    def run_command(self, *args: str) -> CommandResult:
        command = list(args)
        self.run_commands.append(command)
        command_line = " ".join(command)
        if command_line in self.unavailable:
            raise CommandExecutionError(command, f"{command[0]}: not found")
        scripted = self.command_results.get(command_line, ("", ""))
        stdout, stderr = scripted[0], scripted[1]
        returncode = scripted[2] if len(scripted) > 2 else 0
        return CommandResult(
            command=tuple(command),
            stdout=stdout,
            stderr=stderr,
            returncode=returncode,
        )


class FakeFileSystem:
    """In-memory set of existing paths."""

    def __init__(self):
        self.files: Dict[str, str] = {}
        self.checked: List[str] = []

    def write_to_file(self, path: str, content: str = "") -> None:
        self.files[path] = content

    def path_exists(self, path: str) -> bool:
        self.checked.append(path)
        return path in self.files


# ==============================================================================
# Facility Fixtures
# ==============================================================================


@pytest.fixture
def fake_runner() -> FakeCmdRunner:
    """Fixture providing a command runner with no scripted results."""
    return FakeCmdRunner()


@pytest.fixture
def fake_fs() -> FakeFileSystem:
    """Fixture providing an empty fake host filesystem."""
    return FakeFileSystem()


@pytest.fixture
def lazy_itable_fs(fake_fs) -> FakeFileSystem:
    """Fixture providing a host that exposes the lazy_itable_init feature."""
    fake_fs.write_to_file("/sys/fs/ext4/features/lazy_itable_init", "")
    return fake_fs


# ==============================================================================
# blkid Output Fixtures
# ==============================================================================


@pytest.fixture
def blkid_ext4_output() -> str:
    """Realistic `blkid -p` output for an ext4 partition."""
    return (
        '/dev/xvda1: UUID="3e6be9de-8139-11d1-9106-a43f08d823a6" '
        'VERSION="1.0" BLOCK_SIZE="4096" TYPE="ext4" USAGE="filesystem" '
        'PART_ENTRY_SCHEME="dos" PART_ENTRY_TYPE="0x83"\n'
    )


@pytest.fixture
def blkid_swap_output() -> str:
    """Realistic `blkid -p` output for a swap partition."""
    return (
        '/dev/xvda1: VERSION="1" UUID="a1b2c3d4-0000-4000-8000-000000000001" '
        'TYPE="swap" USAGE="other"\n'
    )


@pytest.fixture
def make_runner():
    """Fixture providing a factory for scripted command runners."""
    return FakeCmdRunner
