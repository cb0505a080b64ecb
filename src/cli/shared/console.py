"""Shared console output for CLI commands.

CI job logs are the only place a deployment run reports what it did, so
every message goes to stderr through a single level-gated console.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum
from functools import wraps

import typer
from rich.console import Console, ConsoleRenderable
from rich.panel import Panel


class LogLevel(IntEnum):
    """Console verbosity.

    A message is shown when its level is less than or equal to the
    configured level. INFO is the most verbose setting; an unrecognized
    setting suppresses everything.
    """

    UNRECOGNIZED = -1
    ERROR = 1
    WARN = 2
    DEBUG = 3
    INFO = 4

    @classmethod
    def parse(cls, value: str | None) -> LogLevel:
        """Map a LOG_LEVEL string to a level."""
        names = {
            "error": cls.ERROR,
            "warn": cls.WARN,
            "debug": cls.DEBUG,
            "info": cls.INFO,
        }
        return names.get((value or "").strip().lower(), cls.UNRECOGNIZED)


class CLIConsole:
    """Rich console wrapper for consistent, level-gated CLI output."""

    def __init__(
        self, level: LogLevel = LogLevel.INFO, console: Console | None = None
    ) -> None:
        """Initialize the CLI console.

        Args:
            level: Most verbose level that is still emitted
            console: Rich console to write to (defaults to stderr)
        """
        self.level = level
        self.console = console or Console(stderr=True, highlight=False)

    def enabled(self, level: LogLevel) -> bool:
        return level <= self.level

    def print(self, msg: ConsoleRenderable | str | None = None) -> None:
        if self.enabled(LogLevel.INFO):
            self.console.print(msg)

    def error(self, msg: str) -> None:
        if self.enabled(LogLevel.ERROR):
            self.console.print(f"[red]❌[/red] {msg}")

    def warn(self, msg: str) -> None:
        if self.enabled(LogLevel.WARN):
            self.console.print(f"[yellow]⚠️[/yellow]  {msg}")

    def debug(self, msg: str) -> None:
        if self.enabled(LogLevel.DEBUG):
            self.console.print(f"[dim]{msg}[/dim]")

    def info(self, msg: str) -> None:
        if self.enabled(LogLevel.INFO):
            self.console.print(f"[cyan]ℹ[/cyan]  {msg}")

    def ok(self, msg: str) -> None:
        if self.enabled(LogLevel.INFO):
            self.console.print(f"[green]✅[/green] {msg}")

    def handle_error(
        self, message: str, details: str | None = None, exit_code: int = 1
    ) -> None:
        """Handle an error by printing a message and exiting.

        Args:
            message: Error message to display
            details: Optional additional details
            exit_code: Exit code to use
        """
        self.error(message)
        if details and self.enabled(LogLevel.ERROR):
            self.console.print(Panel(details, title="Details", border_style="red"))
        raise typer.Exit(exit_code)


def with_error_handling(func: Callable[..., None]) -> Callable[..., None]:
    """Decorator to wrap command functions with standard error handling.

    Catches deployment failures and reports them through the shared
    console, ending the process with exit code 1.

    Args:
        func: The command function to wrap

    Returns:
        Wrapped function with error handling
    """
    from src.cli.deployment.helm_deployer.errors import DeploymentError

    @wraps(func)
    def wrapper(*args: object, **kwargs: object) -> None:
        try:
            func(*args, **kwargs)
        except DeploymentError as e:
            console.handle_error(e.message, e.details)
        except KeyboardInterrupt:
            console.error("Operation cancelled by user.")
            raise typer.Exit(130) from None

    return wrapper


# Shared console instance; the CLI callback sets its level
console = CLIConsole()
