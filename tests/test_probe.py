"""Tests for storage/probe.py - existing filesystem detection."""

import pytest

from disk_formatter.domain.models import FileSystemKind
from disk_formatter.storage import probe as probe_module
from disk_formatter.storage.exceptions import ProbeError


DEVICE = "/dev/xvda1"


class TestParseFilesystemType:
    """Tests for parse_filesystem_type() function."""

    def test_type_token_amid_other_text(self):
        """Test TYPE is found anywhere in the line."""
        assert probe_module.parse_filesystem_type('xxxxx TYPE="ext4" yyyy zzzz') == "ext4"

    def test_realistic_output(self, blkid_ext4_output):
        assert probe_module.parse_filesystem_type(blkid_ext4_output) == "ext4"

    def test_swap_output(self, blkid_swap_output):
        assert probe_module.parse_filesystem_type(blkid_swap_output) == "swap"

    def test_no_type_token_returns_empty(self):
        """Test absence of TYPE is a normal empty result."""
        assert probe_module.parse_filesystem_type('/dev/xvda1: PTUUID="abcd"') == ""

    def test_empty_and_none_output(self):
        assert probe_module.parse_filesystem_type("") == ""
        assert probe_module.parse_filesystem_type(None) == ""

    def test_ignores_partition_table_type(self):
        """Test PTTYPE is not mistaken for the filesystem type."""
        output = '/dev/xvda: PTUUID="1234" PTTYPE="dos"'
        assert probe_module.parse_filesystem_type(output) == ""

    def test_skips_sec_type_before_type(self):
        """Test SEC_TYPE preceding TYPE is skipped."""
        output = '/dev/sdb1: SEC_TYPE="msdos" UUID="1234-ABCD" TYPE="vfat"'
        assert probe_module.parse_filesystem_type(output) == "vfat"

    def test_value_returned_verbatim(self):
        assert probe_module.parse_filesystem_type('TYPE="LVM2_member"') == "LVM2_member"


class TestFilesystemProber:
    """Tests for FilesystemProber.probe()."""

    def test_issues_single_blkid_command(self, make_runner):
        """Test probe runs exactly `blkid -p <device>`."""
        runner = make_runner({f"blkid -p {DEVICE}": ('xxxxx TYPE="ext2" yyyy', "")})

        identity = probe_module.FilesystemProber(runner).probe(DEVICE)

        assert identity == "ext2"
        assert runner.run_commands == [["blkid", "-p", DEVICE]]

    def test_unformatted_device_exit_status_2(self, make_runner):
        """Test blkid exiting 2 with no output yields empty identity."""
        runner = make_runner({f"blkid -p {DEVICE}": ("", "", 2)})

        assert probe_module.FilesystemProber(runner).probe(DEVICE) == ""

    def test_inaccessible_device_raises_probe_error(self, make_runner):
        """Test a blkid error exit aborts instead of reading as unformatted."""
        runner = make_runner(
            {f"blkid -p {DEVICE}": ("", f"error: {DEVICE}: Permission denied", 8)}
        )

        with pytest.raises(ProbeError) as exc_info:
            probe_module.FilesystemProber(runner).probe(DEVICE, FileSystemKind.EXT4)

        assert "Permission denied" in exc_info.value.reason
        assert exc_info.value.device == DEVICE

    @pytest.mark.parametrize("returncode", [1, 4, 8])
    def test_error_exit_codes_raise(self, make_runner, returncode):
        """Test every exit other than 0 and 2 is a probe failure."""
        runner = make_runner({f"blkid -p {DEVICE}": ('TYPE="ext4"', "", returncode)})

        with pytest.raises(ProbeError, match=f"status {returncode}"):
            probe_module.FilesystemProber(runner).probe(DEVICE)

    def test_exit_2_with_output_raises(self, make_runner):
        """Test exit 2 only means "no signature" when nothing was printed."""
        runner = make_runner({f"blkid -p {DEVICE}": ('TYPE="ext4"', "", 2)})

        with pytest.raises(ProbeError):
            probe_module.FilesystemProber(runner).probe(DEVICE)

    def test_missing_tool_raises_probe_error(self, make_runner):
        """Test failure to start blkid is surfaced as ProbeError."""
        runner = make_runner()
        runner.unavailable.add(f"blkid -p {DEVICE}")

        with pytest.raises(ProbeError) as exc_info:
            probe_module.FilesystemProber(runner).probe(DEVICE, FileSystemKind.EXT4)

        assert exc_info.value.device == DEVICE
        assert exc_info.value.kind is FileSystemKind.EXT4
        assert "not found" in str(exc_info.value)
