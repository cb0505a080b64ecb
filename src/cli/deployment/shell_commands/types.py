"""Data types for shell command results.

This module contains all dataclasses and type definitions used across
the shell command modules.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass

__all__ = [
    "CommandResult",
    "SetOverride",
]


@dataclass
class CommandResult:
    """Result of a command execution."""

    success: bool
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0


@dataclass(frozen=True)
class SetOverride:
    """A single Helm value override passed on the command line.

    Attributes:
        key: Dotted chart value key (e.g., "image.tag")
        value: Value assigned to the key
        string: Use --set-string instead of --set (forces string typing)
    """

    key: str
    value: str
    string: bool = False

    @property
    def flag(self) -> str:
        """Get the helm flag used for this override."""
        return "--set-string" if self.string else "--set"

    def to_args(self) -> list[str]:
        """Render the override as helm argv tokens."""
        return [self.flag, f"{self.key}={self.value}"]

    def __str__(self) -> str:
        return shlex.join(self.to_args())
