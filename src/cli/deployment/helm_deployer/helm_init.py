"""Local Tiller start-up and Helm client initialization.

Tiller runs next to the Helm client for the duration of the job
(https://rimusz.net/tillerless-helm/) instead of living in the cluster.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from loguru import logger

from .constants import DeploymentConstants
from .errors import ExternalCommandFailure, ProcessLivenessFailure

if TYPE_CHECKING:
    from src.cli.shared.console import CLIConsole

    from ..shell_commands import ShellCommands, TillerProcess
    from .dry_run import DryRunGate


class HelmInitializer:
    """Starts Tiller, prepares the Helm client, and tears Tiller down again.

    Attributes:
        tiller: The running Tiller, or None when not started
    """

    def __init__(
        self,
        commands: ShellCommands,
        console: CLIConsole,
        dry_run: DryRunGate,
        constants: DeploymentConstants | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the Helm initializer.

        Args:
            commands: Shell command executor; its environment must point
                      HELM_HOST and TILLER_NAMESPACE at the local Tiller
            console: Console for output
            dry_run: Dry-run gate
            constants: Optional deployment constants
            sleep: Sleep function (replaced in tests)
        """
        self.commands = commands
        self.console = console
        self.dry_run = dry_run
        self.constants = constants or DeploymentConstants()
        self._sleep = sleep
        self.tiller: TillerProcess | None = None

    @contextmanager
    def session(self) -> Iterator[HelmInitializer]:
        """Scope in which a started Tiller is always decommissioned on exit.

        Teardown also runs when initialization or a later step fails, so
        no Tiller process outlives the run.
        """
        try:
            yield self
        finally:
            self.decommission_tiller()

    def init_helm_with_tiller(self) -> None:
        """Start Tiller, initialize the client and refresh repositories."""
        self.init_tiller()
        self.init_helm()

        self.console.info("updating helm client repository information")
        if self.dry_run.skip():
            return
        result = self.commands.helm.repo_update()
        if not result.success:
            raise ExternalCommandFailure(
                "could not update helm repository information", result
            )

    def init_tiller(self) -> None:
        """Start a local Tiller and verify it survived start-up.

        Raises:
            ProcessLivenessFailure: If Tiller cannot be started or exits immediately
        """
        self.console.info("initializing local tiller")
        if self.dry_run.skip():
            return

        try:
            self.tiller = self.commands.tiller.start(self.constants.TILLER_STORAGE)
        except (FileNotFoundError, PermissionError) as e:
            raise ProcessLivenessFailure("tiller") from e

        logger.debug(f"Tiller started with pid {self.tiller.pid}")
        self._sleep(self.constants.TILLER_STARTUP_WAIT_SECONDS)

        if not self.tiller.is_alive():
            raise ProcessLivenessFailure("tiller", self.tiller.pid)

    def init_helm(self) -> None:
        """Initialize the Helm client without touching the cluster."""
        self.console.info("initializing helm")
        if self.dry_run.skip():
            return
        result = self.commands.helm.init_client_only()
        if not result.success:
            raise ExternalCommandFailure("could not initialize helm", result)

    def decommission_tiller(self) -> None:
        """Stop the recorded Tiller. Absent or already exited is not an error."""
        if self.tiller is None:
            return
        tiller, self.tiller = self.tiller, None
        if tiller.terminate():
            self.console.debug(f"tiller {tiller.pid} stopped")
        else:
            logger.debug(f"Tiller {tiller.pid} was already gone")
