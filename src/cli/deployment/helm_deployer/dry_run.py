"""Dry-run switch shared by every mutating pipeline step."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.cli.shared.console import CLIConsole


class DryRunGate:
    """Short-circuits mutating steps when dry run is enabled."""

    def __init__(self, enabled: bool, console: CLIConsole) -> None:
        self.enabled = enabled
        self.console = console

    def skip(self) -> bool:
        """Return True (after saying so) when the caller should not act."""
        if not self.enabled:
            return False
        self.console.info("skipping for dry run")
        return True
