"""Tiller process management.

Tiller runs locally next to the Helm client instead of inside the cluster
("tillerless" Helm 2). The client finds it through HELM_HOST and Tiller
stores release data as secrets in TILLER_NAMESPACE.
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from .runner import CommandRunner


@dataclass
class TillerProcess:
    """Handle on a locally started Tiller server.

    Attributes:
        pid: Process id of the Tiller server
        process: Underlying process handle
    """

    pid: int
    process: subprocess.Popen[bytes]

    def is_alive(self) -> bool:
        """Probe the process with signal 0.

        An exited child that has not been reaped still accepts signal 0,
        so the handle is polled first.
        """
        if self.process.poll() is not None:
            return False
        try:
            os.kill(self.pid, 0)
        except ProcessLookupError:
            return False
        except PermissionError:
            # Exists but owned by someone else
            return True
        return True

    def terminate(self, timeout: float = 10.0) -> bool:
        """Stop the server.

        Returns:
            True if a running process was signalled, False if it was already gone
        """
        if self.process.poll() is not None:
            return False
        try:
            self.process.terminate()
        except ProcessLookupError:
            return False
        try:
            self.process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            logger.debug(f"Tiller {self.pid} ignored SIGTERM, killing")
            self.process.kill()
            self.process.wait()
        return True


class TillerCommands:
    """Tiller-related shell commands."""

    def __init__(self, runner: CommandRunner) -> None:
        """Initialize Tiller commands.

        Args:
            runner: Command runner for executing shell commands
        """
        self._runner = runner

    def start(self, storage: str = "secret") -> TillerProcess:
        """Start Tiller in the background.

        Args:
            storage: Release storage backend

        Returns:
            TillerProcess for the started server

        Raises:
            FileNotFoundError: If the tiller binary is not installed
            PermissionError: If the tiller binary cannot be run
        """
        process = self._runner.spawn(["tiller", f"--storage={storage}"])
        return TillerProcess(pid=process.pid, process=process)
