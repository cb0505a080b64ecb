"""Command runner for executing shell commands.

This module provides the base command execution functionality used by
all specialized command modules.
"""

from __future__ import annotations

import os
import shlex
import subprocess
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

from loguru import logger

from .types import CommandResult

# Exit statuses a POSIX shell reports for commands it cannot start
COMMAND_NOT_EXECUTABLE = 126
COMMAND_NOT_FOUND = 127

_SECRET_KEYS = ("token", "password")


def _launch_failure(error: OSError) -> CommandResult:
    """Turn an exec error into the result a shell would report."""
    if isinstance(error, PermissionError):
        returncode = COMMAND_NOT_EXECUTABLE
    else:
        returncode = COMMAND_NOT_FOUND
    return CommandResult(success=False, stderr=str(error), returncode=returncode)


def redact(cmd: Sequence[str]) -> str:
    """Render a command for logs with credential values masked."""
    masked = []
    for arg in cmd:
        key, sep, _ = arg.partition("=")
        if sep and key.lower().endswith(_SECRET_KEYS):
            arg = f"{key}=***"
        masked.append(arg)
    return shlex.join(masked)


class CommandRunner:
    """Low-level command executor with consistent result handling.

    This class provides the foundation for executing shell commands with
    proper output capture, error handling, and streaming support.

    All specialized command modules (Helm, kubectl, Tiller) use this
    runner for actual command execution.
    """

    def __init__(
        self, project_root: Path, env: Mapping[str, str] | None = None
    ) -> None:
        """Initialize the command runner.

        Args:
            project_root: Path to the project root directory.
                         Commands will be executed from this directory by default.
            env: Extra environment variables layered over os.environ for
                 every command started by this runner.
        """
        self.project_root = project_root
        self.env = dict(env or {})

    def build_env(self) -> dict[str, str]:
        """Build the process environment for a child command."""
        env = os.environ.copy()
        env.update(self.env)
        return env

    def run(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        capture_output: bool = True,
    ) -> CommandResult:
        """Execute a shell command and return structured result.

        Args:
            cmd: Command and arguments as a sequence
            cwd: Working directory (defaults to project_root)
            capture_output: Whether to capture stdout/stderr

        Returns:
            CommandResult with success status, output, and return code.
            A missing executable yields a failed result with code 127,
            one that cannot be executed a failed result with code 126.
        """
        logger.debug(f"Running: {redact(cmd)}")
        try:
            result = subprocess.run(
                list(cmd),
                cwd=cwd or self.project_root,
                capture_output=capture_output,
                text=True,
                env=self.build_env(),
            )
        except (FileNotFoundError, PermissionError) as e:
            logger.debug(f"Could not execute {cmd[0]}: {e}")
            return _launch_failure(e)
        logger.debug(f"Exit code {result.returncode}: {cmd[0]}")
        return CommandResult(
            success=result.returncode == 0,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            returncode=result.returncode,
        )

    def run_streaming(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        on_output: Callable[[str], None] | None = None,
    ) -> CommandResult:
        """Execute a shell command with real-time output streaming.

        This method runs a command and calls the on_output callback for each
        line of output, allowing real-time progress display.

        Args:
            cmd: Command and arguments as a sequence
            cwd: Working directory (defaults to project_root)
            on_output: Callback function called with each line of output.
                      If None, output is collected but not streamed.

        Returns:
            CommandResult with success status, collected output, and return code
        """
        logger.debug(f"Streaming: {redact(cmd)}")
        env = self.build_env()
        env["PYTHONUNBUFFERED"] = "1"

        try:
            process = subprocess.Popen(
                list(cmd),
                cwd=cwd or self.project_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,  # Merge stderr into stdout
                text=True,
                bufsize=0,
                env=env,
            )
        except (FileNotFoundError, PermissionError) as e:
            logger.debug(f"Could not execute {cmd[0]}: {e}")
            return _launch_failure(e)

        stdout_lines: list[str] = []

        if process.stdout:
            for line in iter(process.stdout.readline, ""):
                line = line.rstrip("\n")
                if line:
                    stdout_lines.append(line)
                    if on_output:
                        on_output(line)

        process.wait()

        return CommandResult(
            success=process.returncode == 0,
            stdout="\n".join(stdout_lines),
            stderr="",  # stderr is merged into stdout
            returncode=process.returncode or 0,
        )

    def spawn(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
    ) -> subprocess.Popen[bytes]:
        """Start a command in the background without waiting for it.

        Args:
            cmd: Command and arguments as a sequence
            cwd: Working directory (defaults to project_root)

        Returns:
            The running process handle

        Raises:
            FileNotFoundError: If the executable does not exist
            PermissionError: If the executable cannot be run
        """
        logger.debug(f"Spawning: {redact(cmd)}")
        return subprocess.Popen(
            list(cmd),
            cwd=cwd or self.project_root,
            env=self.build_env(),
        )
