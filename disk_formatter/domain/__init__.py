"""Domain models for filesystem preparation."""

from __future__ import annotations

from .models import CommandResult, FileSystemKind


__all__ = [
    "CommandResult",
    "FileSystemKind",
]
