"""Rollout monitoring after a release has been applied."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from .constants import DeploymentConstants
from .errors import ExternalCommandFailure
from .overrides import deployment_name

if TYPE_CHECKING:
    from src.cli.shared.console import CLIConsole

    from ..shell_commands import CommandResult, ShellCommands
    from .dry_run import DryRunGate
    from .settings import DeploySettings


class RolloutWatcher:
    """Waits for the deployment to converge and shows what was deployed."""

    def __init__(
        self,
        commands: ShellCommands,
        console: CLIConsole,
        settings: DeploySettings,
        dry_run: DryRunGate,
        constants: DeploymentConstants | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.commands = commands
        self.console = console
        self.settings = settings
        self.dry_run = dry_run
        self.constants = constants or DeploymentConstants()
        self._sleep = sleep

    @property
    def target(self) -> str:
        """Deployment to watch: WATCH_DEPLOYMENT, else the release name."""
        return self.settings.watch_deployment or deployment_name(self.settings)

    @property
    def app_selector(self) -> str:
        s = self.settings
        return f"app={s.ci_project_name},environment={s.ci_environment_name}"

    @property
    def commit_selector(self) -> str:
        return f"{self.app_selector},git_commit={self.settings.ci_commit_short_sha}"

    def watch_deployment(self) -> None:
        """Block on the rollout, then list and describe the deployed resources.

        Services and routes are only described when the job has an
        environment URL.

        Raises:
            ExternalCommandFailure: On the first kubectl command that fails
        """
        target = self.target
        self.console.info(f"waiting until deployment {target} is ready")
        if self.dry_run.skip():
            return

        kubectl = self.commands.kubectl
        self._check(
            kubectl.rollout_status(self.constants.ROLLOUT_RESOURCE_TYPE, target)
        )
        self._sleep(self.constants.ROLLOUT_SETTLE_SECONDS)
        self._check(kubectl.get_pods(f"ci_job_id={self.settings.ci_job_id}"))

        # see what has been deployed
        self._check(kubectl.describe("deployment", self.commit_selector))
        if self.settings.ci_environment_url:
            self._check(kubectl.describe("service", self.app_selector))
            self._check(kubectl.describe("route", self.app_selector))

    def _check(self, result: CommandResult) -> None:
        if not result.success:
            raise ExternalCommandFailure("could not watch deployment", result)
