"""Host facilities the formatter depends on.

Both are narrow, injectable interfaces so tests can script command output
and host filesystem state without touching a real machine.
"""

from .command_runner import CmdRunner, SubprocessCmdRunner
from .filesystem import FileSystem, OsFileSystem


__all__ = [
    "CmdRunner",
    "FileSystem",
    "OsFileSystem",
    "SubprocessCmdRunner",
]
