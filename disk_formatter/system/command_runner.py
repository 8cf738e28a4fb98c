"""Synchronous external command execution."""

from __future__ import annotations

import subprocess
from typing import Protocol

from disk_formatter.domain.models import CommandResult
from disk_formatter.logging import LoggerFactory
from disk_formatter.storage.exceptions import CommandExecutionError


log = LoggerFactory.for_command()
output_log = LoggerFactory.for_command_output()


class CmdRunner(Protocol):
    def run_command(self, *args: str) -> CommandResult:
        ...


class SubprocessCmdRunner:
    """Run commands with subprocess, capturing stdout and stderr as text.

    A non-zero exit status is reported through the returned
    ``CommandResult``; only a failure to start the program raises.
    """

    def run_command(self, *args: str) -> CommandResult:
        if not args:
            raise ValueError("run_command requires a program name")
        command = [str(arg) for arg in args]
        log.debug(f"Running command: {' '.join(command)}")
        try:
            completed = subprocess.run(
                command,
                check=False,
                text=True,
                encoding="utf-8",
                errors="replace",
                capture_output=True,
            )
        except OSError as error:
            log.debug(f"Command could not be started: {' '.join(command)}: {error}")
            raise CommandExecutionError(command, str(error)) from error

        result = CommandResult(
            command=tuple(command),
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            returncode=completed.returncode,
        )
        # Failed command output goes to DEBUG; successful output only in TRACE
        sink = output_log.trace if result.succeeded else log.debug
        if result.stdout:
            sink(f"stdout: {result.stdout.strip()}")
        if result.stderr:
            sink(f"stderr: {result.stderr.strip()}")
        log.debug(f"Command completed with return code {result.returncode}")
        return result
