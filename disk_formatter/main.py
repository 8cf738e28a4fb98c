import argparse
import sys
from pathlib import Path

from disk_formatter.config import settings
from disk_formatter.domain.models import FileSystemKind
from disk_formatter.logging import LoggerFactory, setup_logging
from disk_formatter.storage.exceptions import UnsupportedFileSystemError
from disk_formatter.storage.format import format_device


def build_parser():
    parser = argparse.ArgumentParser(
        prog="disk-formatter",
        description="Ensure a block device carries the requested filesystem",
    )
    parser.add_argument("device", help="Block device path, e.g. /dev/xvdb")
    parser.add_argument(
        "-t",
        "--fs-type",
        choices=[kind.value for kind in FileSystemKind],
        default=None,
        help="Filesystem to create (default: settings 'default_filesystem')",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable verbose debug output")
    parser.add_argument("--trace", action="store_true", help="Also log captured command output")
    parser.add_argument("--log-dir", type=Path, default=None, help="Directory for log files")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    setup_logging(
        debug=args.debug,
        trace=args.trace,
        log_dir=args.log_dir or settings.get_path("log_dir"),
        file_logging=settings.get_bool("file_logging", True),
    )
    log = LoggerFactory.for_system()

    fs_type = args.fs_type or settings.get_default_filesystem()
    try:
        ok = format_device(
            args.device,
            fs_type,
            marker_path=settings.get_setting("lazy_itable_init_marker"),
        )
    except UnsupportedFileSystemError as error:
        log.error(str(error))
        return 1
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
