"""Deployment failure types.

Every pipeline step raises a DeploymentError subclass on failure; the CLI
layer reports the message and exits non-zero.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..shell_commands import CommandResult


class DeploymentError(Exception):
    """Raised when a deployment operation fails."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class MissingRequiredVariable(DeploymentError):
    """A required environment variable is unset or empty."""

    def __init__(self, name: str, message: str | None = None):
        self.name = name
        super().__init__(message or f"missing ENVIRONMENT {name}!")


class MissingDefaultableVariable(DeploymentError):
    """Neither a variable nor its fallback is set."""

    def __init__(self, primary: str, fallback: str):
        self.primary = primary
        self.fallback = fallback
        super().__init__(
            f"missing default ENVIRONMENT, set {primary} or {fallback}!"
        )


class ExternalCommandFailure(DeploymentError):
    """An external CLI exited non-zero."""

    def __init__(self, message: str, result: CommandResult | None = None):
        self.result = result
        details = None
        if result is not None:
            details = f"exit code {result.returncode}"
            if result.stderr:
                details += f"\n{result.stderr.strip()}"
        super().__init__(message, details=details)


class ProcessLivenessFailure(DeploymentError):
    """A background process died right after being started."""

    def __init__(self, name: str, pid: int | None = None):
        self.pid = pid
        details = f"pid {pid}" if pid is not None else None
        super().__init__(f"{name} not running!", details=details)
